"""Registry of primitives for the Mehl evaluator.

Maps primitive names to handler functions `fn(frame, arg) -> value`. The
only binding a fresh root scope holds is the entry point `✨`, which takes a
`(:name, arg)` tuple and dispatches to the primitive called `name`. Core
primitives (binding, `use`, `match`, ...) live in this package; the foreign
primitive library is registered from `mehl.builtins`.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterator

from mehl import Value
from mehl.errors import MehlError, ForeignPrimitiveError
from mehl.evaluation.primitives.shapes import needs_pair, needs_symbol
from mehl.evaluation.primitives.binding_primitives import (
    fun_primitive,
    let_primitive,
    primitive_primitive,
    export_all_primitive,
    doc_primitive,
)
from mehl.evaluation.primitives.control_primitives import (
    use_primitive,
    match_primitive,
    run_primitive,
    repeat_primitive,
    loop_primitive,
)
from mehl.evaluation.runtime import Frame
from mehl.types.binding import Binding, BindingKind
from mehl.types.scope import Scope

logger = logging.getLogger(__name__)

PrimitiveFn = Callable[[Frame, Value], Value]

ENTRY = "✨"


class PrimitiveRegistry:
    """Named primitives a program can reach through `✨`."""

    def __init__(self):
        self._primitives: dict[str, PrimitiveFn] = {}

    def register(self, name: str, fn: PrimitiveFn) -> None:
        self._primitives[name] = fn

    def __contains__(self, name: str) -> bool:
        return name in self._primitives

    def __iter__(self) -> Iterator[str]:
        return iter(self._primitives)

    def call(self, name: str, arg: Value, frame: Frame) -> Value:
        fn = self._primitives.get(name)
        if fn is None:
            raise ForeignPrimitiveError(f"Unknown primitive {name}.")
        logger.debug("Primitive %s.", name)
        try:
            return fn(frame, arg)
        except MehlError:
            raise
        except Exception as ex:
            raise ForeignPrimitiveError(f"Primitive {name} failed: {ex}") from ex


def entry_primitive(frame: Frame, arg: Value) -> Value:
    """`(:name, arg) ✨`"""
    name, payload = needs_pair(arg, f"{ENTRY} needs a tuple with two items.")
    name = needs_symbol(name, f"{ENTRY} needs a symbol as the first tuple item.")
    return frame.runtime.primitives.call(name.id, payload, frame)


CORE_PRIMITIVES: dict[str, PrimitiveFn] = {
    ENTRY: entry_primitive,
    "fun": fun_primitive,
    "let": let_primitive,
    "primitive": primitive_primitive,
    "export-all": export_all_primitive,
    "doc": doc_primitive,
    "use": use_primitive,
    "match": match_primitive,
    "run": run_primitive,
    "repeat": repeat_primitive,
    "loop": loop_primitive,
}


def register(registry: PrimitiveRegistry) -> None:
    for name, fn in CORE_PRIMITIVES.items():
        registry.register(name, fn)


def default_registry() -> PrimitiveRegistry:
    """Core primitives plus the foreign primitive library."""
    from mehl.builtins import register as register_builtins

    registry = PrimitiveRegistry()
    register(registry)
    register_builtins(registry)
    return registry


def root_scope() -> Scope:
    scope = Scope()
    scope.bind(Binding(ENTRY, ENTRY, 0, BindingKind.PRIMITIVE, "The primitive fun."))
    return scope
