"""Immutable map value.

Maps are keyed by any hashable Mehl value (in practice symbols). Updates go
through `assoc`, which returns a new map.
"""

from __future__ import annotations

import collections.abc
from typing import Any, Iterable, Iterator, Mapping


class MehlMap(collections.abc.Mapping):
    __slots__ = ("_data", "_hash")

    def __init__(self, entries: Mapping[Any, Any] | Iterable[tuple[Any, Any]] = ()):
        self._data: dict[Any, Any] = dict(entries)
        self._hash: int | None = None

    def __getitem__(self, key: Any) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[Any]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __hash__(self) -> int:
        # Order-independent, like the map itself
        if self._hash is None:
            self._hash = hash(frozenset(self._data.items()))
        return self._hash

    def __eq__(self, other: object) -> bool:
        if isinstance(other, MehlMap):
            return self._data == other._data
        return NotImplemented

    def assoc(self, key: Any, value: Any) -> MehlMap:
        data = dict(self._data)
        data[key] = value
        return MehlMap(data)

    def __repr__(self) -> str:
        return f"MehlMap({self._data!r})"
