"""Lexical scopes for Mehl.

A Scope stores Bindings by name and links to the scope it was created in via
`outer`. Lookup walks the chain innermost first. A scope only accepts new
bindings while the operation that created it is running; afterwards it is
sealed and shared read-only by every closure that captured it.
"""

from __future__ import annotations

from io import StringIO
from typing import Iterator, Optional

from mehl import Value
from mehl.errors import UnboundNameError, ScopeSealedError
from mehl.types.binding import Binding


class Scope:
    """Hierarchical mapping from names to Bindings."""

    __slots__ = ("vars", "outer", "sealed", "implicit")

    def __init__(self, outer: Optional[Scope] = None):
        self.vars: dict[str, Binding] = {}
        self.outer: Scope | None = outer
        self.sealed: bool = False
        # Names the invocation itself bound (`.` and pattern captures)
        self.implicit: frozenset[str] = frozenset()

    def bind(self, binding: Binding) -> None:
        """Install `binding`, shadowing any binding of the same name in this scope.

        Re-inserting moves the name to the end, so iteration order is
        definition order.
        """
        if self.sealed:
            raise ScopeSealedError(f"Cannot bind {binding.name} in a sealed scope")
        self.vars.pop(binding.name, None)
        self.vars[binding.name] = binding
        if binding.name in self.implicit:
            self.implicit = self.implicit - {binding.name}

    def seal(self) -> None:
        self.sealed = True

    def child(self) -> Scope:
        return Scope(outer=self)

    def find(self, name: str) -> Optional[Scope]:
        """Find the nearest scope in the chain that binds `name`."""
        scope: Optional[Scope] = self
        while scope is not None:
            if name in scope.vars:
                return scope
            scope = scope.outer
        return None

    def lookup(self, name: str) -> Binding:
        """Return the Binding for `name`, raising UnboundNameError if there is none."""
        scope = self.find(name)
        if scope is None:
            raise UnboundNameError(name)
        return scope.vars[name]

    def resolve(self, name: str) -> Value:
        return self.lookup(name).value

    def __contains__(self, name: str) -> bool:
        return self.find(name) is not None

    def __iter__(self) -> Iterator[Binding]:
        """This scope's own bindings, in definition order."""
        return iter(list(self.vars.values()))

    def __len__(self) -> int:
        return len(self.vars)

    def root(self) -> Scope:
        scope = self
        while scope.outer is not None:
            scope = scope.outer
        return scope

    def _write_vars(self, buffer: StringIO) -> None:
        buffer.write("{")
        first = True
        for name, binding in self.vars.items():
            if not first:
                buffer.write(", ")
            buffer.write(f"{name}{binding.export_level}")
            first = False
        buffer.write("}")

    def __str__(self) -> str:
        """Single-frame view with an indicator for parent."""
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Chain representation for debugging purposes."""
        chain = []
        scope = self
        while scope is not None:
            with StringIO() as buffer:
                scope._write_vars(buffer)
                chain.append(buffer.getvalue())
            scope = scope.outer
        return "<Scope chain: " + " -> ".join(chain) + ">"
