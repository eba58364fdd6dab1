from __future__ import annotations
import sys


class Symbol:
    """An interned symbol value, written `:name` in source."""
    __slots__ = ("id",)

    def __init__(self, name: str):
        # Intern to ensure fast equality/hash and reduce memory
        self.id = sys.intern(name)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Symbol) and self.id == other.id

    def __hash__(self) -> int:
        return hash((Symbol, self.id))

    def __repr__(self):
        return f"Symbol({self.id!r})"

    def __str__(self):
        return f":{self.id}"


# The empty symbol doubles as the unit value.
UNIT = Symbol("")
TRUE = Symbol("true")
FALSE = Symbol("false")


def truth(flag: bool) -> Symbol:
    return TRUE if flag else FALSE
