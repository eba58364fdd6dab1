"""The raw binders behind `fun`, `let` and friends.

All of them write into the caller's current scope and return unit. Export
levels are taken as given: the sugared forms in the prelude pass one more
than the user asked for, because their own invocation boundary takes one
away again.
"""

from __future__ import annotations

import logging
from typing import Optional

from mehl import Value
from mehl.errors import ArityOrShapeError, ForeignPrimitiveError
from mehl.evaluation.primitives.shapes import (
    needs_map,
    needs_symbol,
    needs_code,
    needs_number,
    required,
    optional,
)
from mehl.evaluation.runtime import Frame
from mehl.types.binding import Binding, BindingKind
from mehl.types.map import MehlMap
from mehl.types.symbol import Symbol, UNIT

logger = logging.getLogger(__name__)


def _export_level(args: MehlMap, primitive: str) -> int:
    return needs_number(
        optional(args, "export-level", 0),
        f"{primitive} :export-level needs to be a number.",
    )


def _docs(args: MehlMap) -> Optional[str]:
    docs = optional(args, "docs")
    return docs if isinstance(docs, str) else None


def fun_primitive(frame: Frame, arg: Value) -> Value:
    """`{:name :docs :body :export-level}`: bind a closure as a function."""
    args = needs_map(arg, "fun needs a map.")
    name = needs_symbol(required(args, "name", "fun needs a :name."), "fun :name needs to be a symbol.")
    body = needs_code(required(args, "body", "fun needs a :body."), "fun :body needs to be code.")
    level = _export_level(args, "fun")

    frame.scope.bind(Binding(name.id, body, level, BindingKind.FUNCTION, _docs(args)))
    logger.debug("Defined function %s (export level %d).", name.id, level)
    return UNIT


def destructure(pattern: Value, value: Value, out: dict[str, Value]) -> dict[str, Value]:
    """Pair the symbols of a (possibly nested) name pattern with parts of `value`."""
    if isinstance(pattern, Symbol):
        out[pattern.id] = value
    elif isinstance(pattern, tuple):
        if not isinstance(value, tuple):
            raise ArityOrShapeError(f"let expected a tuple to destructure, got {type(value).__name__}.")
        if len(pattern) != len(value):
            raise ArityOrShapeError(
                f"let expected a tuple of {len(pattern)} items, got {len(value)}."
            )
        for sub_pattern, item in zip(pattern, value):
            destructure(sub_pattern, item, out)
    elif isinstance(pattern, MehlMap):
        if not isinstance(value, MehlMap):
            raise ArityOrShapeError(f"let expected a map to destructure, got {type(value).__name__}.")
        for key, sub_pattern in pattern.items():
            if key not in value:
                raise ArityOrShapeError(f"let expected the key {key} in the map.")
            destructure(sub_pattern, value[key], out)
    else:
        raise ArityOrShapeError("let :name needs to be a symbol, or a tuple or map of them.")
    return out


def let_primitive(frame: Frame, arg: Value) -> Value:
    """`{:name :value :docs :export-level}`: bind values, destructuring `:name`."""
    args = needs_map(arg, "let needs a map.")
    pattern = required(args, "name", "let needs a :name.")
    value = required(args, "value", "let needs a :value.")
    level = _export_level(args, "let")
    docs = _docs(args)

    for name, part in destructure(pattern, value, {}).items():
        frame.scope.bind(Binding(name, part, level, BindingKind.VALUE, docs))
        logger.debug("Defined value %s (export level %d).", name, level)
    return UNIT


def primitive_primitive(frame: Frame, arg: Value) -> Value:
    """`{:name :primitive :docs :export-level}`: bind a name straight to a primitive.

    Such a name runs the primitive in the caller's scope, without an
    invocation boundary of its own.
    """
    args = needs_map(arg, "primitive needs a map.")
    name = needs_symbol(
        required(args, "name", "primitive needs a :name."), "primitive :name needs to be a symbol."
    )
    target = needs_symbol(
        required(args, "primitive", "primitive needs a :primitive."),
        "primitive :primitive needs to be a symbol.",
    )
    if target.id not in frame.runtime.primitives:
        raise ForeignPrimitiveError(f"Unknown primitive {target.id}.")
    level = _export_level(args, "primitive")

    frame.scope.bind(Binding(name.id, target.id, level, BindingKind.PRIMITIVE, _docs(args)))
    logger.debug("Bound %s to primitive %s.", name.id, target.id)
    return UNIT


def export_all_primitive(frame: Frame, arg: Value) -> Value:
    """
    Raise every binding of the current scope by one export level. The input
    `.` and pattern captures of the running invocation stay private.
    """
    for binding in frame.scope:
        if binding.name in frame.scope.implicit:
            continue
        frame.scope.bind(binding.with_level(binding.export_level + 1))
    logger.debug("Exporting all of %s.", frame.scope)
    return UNIT


def doc_primitive(frame: Frame, arg: Value) -> Value:
    """`:name doc`: the docs of a visible name, or unit if it has none."""
    name = needs_symbol(arg, "doc needs a symbol.")
    docs = frame.scope.lookup(name.id).docs
    return docs if docs is not None else UNIT
