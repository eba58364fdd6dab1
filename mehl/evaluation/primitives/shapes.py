"""Argument shape checks shared by the primitives.

Each helper returns the argument (or the pieces of it) when it has the
required shape and raises ArityOrShapeError with the caller's message
otherwise.
"""

from __future__ import annotations

from mehl import Value
from mehl.errors import ArityOrShapeError
from mehl.types.closure import Closure
from mehl.types.map import MehlMap
from mehl.types.symbol import Symbol


def is_number(value: Value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def needs_tuple(value: Value, message: str) -> tuple:
    if not isinstance(value, tuple):
        raise ArityOrShapeError(message)
    return value


def needs_pair(value: Value, message: str) -> tuple[Value, Value]:
    if not isinstance(value, tuple) or len(value) != 2:
        raise ArityOrShapeError(message)
    return value[0], value[1]


def needs_map(value: Value, message: str) -> MehlMap:
    if not isinstance(value, MehlMap):
        raise ArityOrShapeError(message)
    return value


def needs_symbol(value: Value, message: str) -> Symbol:
    if not isinstance(value, Symbol):
        raise ArityOrShapeError(message)
    return value


def needs_number(value: Value, message: str) -> int:
    if not is_number(value):
        raise ArityOrShapeError(message)
    return value


def needs_code(value: Value, message: str) -> Closure:
    if not isinstance(value, Closure):
        raise ArityOrShapeError(message)
    return value


def needs_numbers(value: Value, message: str) -> tuple[int, ...]:
    if not isinstance(value, tuple) or not all(is_number(item) for item in value):
        raise ArityOrShapeError(message)
    return value


def needs_number_pair(value: Value, message: str) -> tuple[int, int]:
    first, second = needs_pair(value, message)
    return needs_number(first, message), needs_number(second, message)


def required(args: MehlMap, key: str, message: str) -> Value:
    try:
        return args[Symbol(key)]
    except KeyError:
        raise ArityOrShapeError(message) from None


def optional(args: MehlMap, key: str, default: Value = None) -> Value:
    return args.get(Symbol(key), default)
