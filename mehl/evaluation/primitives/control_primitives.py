"""Primitives that run code: `use`, `match`, `run`, `repeat` and `loop`."""

from __future__ import annotations

import logging

from mehl import Value
from mehl.errors import ArityOrShapeError, NoMatchError
from mehl.evaluation.evaluator import evaluate, invoke
from mehl.evaluation.exports import propagate_exports
from mehl.evaluation.matcher import match_pattern
from mehl.evaluation.primitives.shapes import needs_code, needs_pair, needs_number, needs_tuple
from mehl.evaluation.runtime import Frame
from mehl.printer import format_value
from mehl.types.closure import Closure
from mehl.types.symbol import UNIT

logger = logging.getLogger(__name__)


def use_primitive(frame: Frame, arg: Value) -> Value:
    """
    Run a block in a fresh child of the current scope and merge what it
    exports back into the current scope. The block's own result is dropped.
    """
    block = needs_code(arg, "use needs code.")
    scope = frame.scope.child()
    with frame.runtime.nested():
        try:
            evaluate(block.body, scope, UNIT, frame.runtime)
        finally:
            scope.seal()
    propagate_exports(scope, frame.scope)
    return UNIT


def _check_arms(arms: tuple) -> None:
    if len(arms) < 3:
        raise ArityOrShapeError(
            "match needs a tuple with at least 3 items: the value, a pattern, and some code."
        )
    if len(arms) % 2 == 0:
        raise ArityOrShapeError(
            "match needs a tuple with an odd number of items: the value, and then in turn patterns and code."
        )
    for code in arms[2::2]:
        if not isinstance(code, Closure):
            raise ArityOrShapeError("match needs a value, and then in turn patterns and code.")


def match_primitive(frame: Frame, arg: Value) -> Value:
    """`(value, pattern, code, pattern, code, ...)`: run the first matching arm."""
    arms = needs_tuple(arg, "match needs a tuple.")
    _check_arms(arms)

    value = arms[0]
    for index in range(1, len(arms), 2):
        pattern, code = arms[index], arms[index + 1]
        captures = match_pattern(pattern, value)
        if captures is None:
            continue
        logger.debug("Arm %d matched %s.", index // 2, format_value(value))
        return invoke(code, value, frame.scope, frame.runtime, captures)

    raise NoMatchError(f"No pattern matched {format_value(value)}.")


def run_primitive(frame: Frame, arg: Value) -> Value:
    """Invoke a block with unit input."""
    block = needs_code(arg, "run needs code.")
    return invoke(block, UNIT, frame.scope, frame.runtime)


def repeat_primitive(frame: Frame, arg: Value) -> Value:
    """`(code, n)`: invoke a block n times with unit input."""
    code, n = needs_pair(arg, "repeat needs two arguments: code and a number.")
    block = needs_code(code, "repeat needs code.")
    times = needs_number(n, "repeat needs a number of how many times to repeat.")
    for _ in range(times):
        invoke(block, UNIT, frame.scope, frame.runtime)
    return UNIT


def loop_primitive(frame: Frame, arg: Value) -> Value:
    """Invoke a block with unit input until it raises, usually through `panic`."""
    block = needs_code(arg, "loop needs code.")
    while True:
        invoke(block, UNIT, frame.scope, frame.runtime)
