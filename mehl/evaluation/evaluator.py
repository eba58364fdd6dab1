"""Core evaluator for Mehl.

A body is run left to right, threading a single current value (the "dot")
through its forms. Literals replace the dot; names look up a binding and
apply it to the dot; tuple items and map values are evaluated starting from
the dot; code literals become closures over the current scope.
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional

from mehl import Body, Form, Value
from mehl.reader.forms import Name, TupleForm, MapForm, CodeForm
from mehl.types.binding import Binding, BindingKind
from mehl.types.closure import Closure
from mehl.types.map import MehlMap
from mehl.types.scope import Scope
from mehl.types.symbol import UNIT
from mehl.evaluation.exports import propagate_exports
from mehl.evaluation.runtime import Runtime, Frame

logger = logging.getLogger(__name__)

DOT = "."


def evaluate(
    body: Body, scope: Scope, input: Value = UNIT, runtime: Runtime | None = None
) -> Value:
    """Run `body` in `scope` starting from `input` and return the final value."""
    if runtime is None:
        runtime = Runtime()
    dot = input
    for form in body:
        dot = evaluate_form(form, scope, dot, runtime)
    return dot


def evaluate_form(form: Form, scope: Scope, dot: Value, runtime: Runtime) -> Value:
    match form:
        case Name(text=text):
            if text == DOT:
                return dot
            return apply_name(text, scope, dot, runtime)
        case TupleForm(items=items):
            return tuple([evaluate(item, scope, dot, runtime) for item in items])
        case MapForm(entries=entries):
            return MehlMap(
                [(key, evaluate_form(value, scope, dot, runtime)) for key, value in entries]
            )
        case CodeForm(body=body):
            return Closure(body, scope)

    # --- Literals replace the current value ---
    return form


def apply_name(name: str, scope: Scope, dot: Value, runtime: Runtime) -> Value:
    binding = scope.lookup(name)
    if binding.kind is BindingKind.VALUE:
        return binding.value
    if binding.kind is BindingKind.FUNCTION:
        return invoke(binding.value, dot, scope, runtime)
    return runtime.primitives.call(binding.value, dot, Frame(scope, runtime))


def invoke(
    closure: Closure,
    value: Value,
    caller_scope: Scope,
    runtime: Runtime,
    captures: Optional[Mapping[str, Value]] = None,
) -> Value:
    """
    Run `closure` with `value` as input.

    The body gets a fresh child of the captured scope, holding `.` and any
    pattern captures at level 0. Once the body returns the scope is sealed
    and its exports are merged into `caller_scope`.
    """
    scope = closure.scope.child()
    scope.bind(Binding(DOT, value))
    if captures:
        for name, captured in captures.items():
            scope.bind(Binding(name, captured))
    scope.implicit = frozenset([DOT, *(captures or ())])

    with runtime.nested():
        try:
            result = evaluate(closure.body, scope, value, runtime)
        finally:
            scope.seal()

    propagate_exports(scope, caller_scope)
    return result
