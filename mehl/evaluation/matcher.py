"""Structural pattern matcher used by `match`.

Patterns are ordinary values:

    - number / string / symbol literal -> equal values match
    - `:_`                             -> matches anything
    - `:?name`                         -> matches anything, captures `name`
    - tuple                            -> same length, item-wise
    - map                              -> every pattern key present, value-wise
    - code                             -> the identical closure

A name captured twice in one pattern must capture equal values.
"""

from __future__ import annotations

from typing import Optional

from mehl import Value
from mehl.types.map import MehlMap
from mehl.types.symbol import Symbol

WILDCARD = Symbol("_")
CAPTURE_PREFIX = "?"

Captures = dict[str, Value]


def same_value(left: Value, right: Value) -> bool:
    """Equality that never confuses values of different kinds."""
    return type(left) is type(right) and left == right


def match_pattern(pattern: Value, value: Value) -> Optional[Captures]:
    """Match `value` against `pattern`; the captures on success, None otherwise."""
    if isinstance(pattern, Symbol):
        if pattern == WILDCARD:
            return {}
        if pattern.id.startswith(CAPTURE_PREFIX):
            return {pattern.id[len(CAPTURE_PREFIX):]: value}
        return {} if same_value(pattern, value) else None

    if isinstance(pattern, tuple):
        if not isinstance(value, tuple) or len(pattern) != len(value):
            return None
        return _unify(match_pattern(p, v) for p, v in zip(pattern, value))

    if isinstance(pattern, MehlMap):
        if not isinstance(value, MehlMap):
            return None
        if any(key not in value for key in pattern):
            return None
        return _unify(match_pattern(p, value[key]) for key, p in pattern.items())

    return {} if same_value(pattern, value) else None


def _unify(results) -> Optional[Captures]:
    unified: Captures = {}
    for captures in results:
        if captures is None:
            return None
        for name, value in captures.items():
            if name in unified and not same_value(unified[name], value):
                return None
            unified[name] = value
    return unified
