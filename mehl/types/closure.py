"""Closure values: a body paired with the scope it was written in."""

from __future__ import annotations

from io import StringIO

from mehl import Body
from mehl.types.scope import Scope


class Closure:
    """A first-class block of code with its captured scope.

    Code literals `[...]` evaluate to closures; `fun` binds one under a name.
    The captured scope is shared, never written through the closure.
    """

    __slots__ = ("body", "scope")

    def __init__(self, body: Body, scope: Scope):
        self.body: tuple = tuple(body)
        self.scope: Scope = scope

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, Closure)
            and self.scope is other.scope
            and self.body == other.body
        )

    def __hash__(self) -> int:
        return hash((self.body, id(self.scope)))

    def __str__(self) -> str:
        from mehl.reader.forms import format_body
        with StringIO() as buffer:
            buffer.write("[")
            buffer.write(format_body(self.body))
            buffer.write("]")
            return buffer.getvalue()

    def __repr__(self) -> str:
        return f"Closure({str(self)})"
