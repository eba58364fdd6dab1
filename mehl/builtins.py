from __future__ import annotations
import logging
import time
from typing import Any
from mehl.errors import ArityOrShapeError, PanicError
from mehl.evaluation.primitives.shapes import (
    needs_numbers,
    needs_number_pair,
    needs_pair,
    needs_tuple,
    needs_map,
    needs_number,
)
from mehl.evaluation.matcher import same_value
from mehl.evaluation.runtime import Frame
from mehl.printer import format_value, type_name
from mehl.types.map import MehlMap
from mehl.types.symbol import Symbol, truth

logger = logging.getLogger(__name__)


# -------------------------------
# Arithmetic
# -------------------------------
def add(frame: Frame, arg: Any) -> int:
    return sum(needs_numbers(arg, "+ needs a tuple of numbers."))

def mul(frame: Frame, arg: Any) -> int:
    result = 1
    for x in needs_numbers(arg, "* needs a tuple of numbers."):
        result *= x
    return result

def sub(frame: Frame, arg: Any) -> int:
    first, second = needs_number_pair(arg, "- needs a tuple of two numbers.")
    return first - second

def div(frame: Frame, arg: Any) -> int:
    first, second = needs_number_pair(arg, "/ needs a tuple of two numbers.")
    # ZeroDivisionError surfaces as a ForeignPrimitiveError
    return first // second

def mod(frame: Frame, arg: Any) -> int:
    first, second = needs_number_pair(arg, "mod needs a tuple of two numbers.")
    return first % second

# -------------------------------
# Comparison
# -------------------------------
def equals(frame: Frame, arg: Any) -> Symbol:
    first, second = needs_pair(arg, "= needs a tuple of two values.")
    return truth(same_value(first, second))

def less_than(frame: Frame, arg: Any) -> Symbol:
    first, second = needs_number_pair(arg, "< needs a tuple of two numbers.")
    return truth(first < second)

def greater_than(frame: Frame, arg: Any) -> Symbol:
    first, second = needs_number_pair(arg, "> needs a tuple of two numbers.")
    return truth(first > second)

# -------------------------------
# Host interaction
# -------------------------------
def print_value(frame: Frame, arg: Any) -> Any:
    frame.runtime.write(f"🌮> {format_value(arg)}\n")
    return arg

def panic(frame: Frame, arg: Any) -> Any:
    raise PanicError(arg)

def wait(frame: Frame, arg: Any) -> Any:
    seconds = needs_number(arg, "wait needs a number.")
    if seconds < 0:
        raise ArityOrShapeError("can't wait a negative number of seconds.")
    logger.debug("Waiting %d seconds.", seconds)
    time.sleep(seconds)
    return arg

# -------------------------------
# Tuples, maps, strings
# -------------------------------
def get_item(frame: Frame, arg: Any) -> Any:
    items, index = needs_pair(arg, "get-item needs a tuple with two items.")
    items = needs_tuple(items, "get-item needs a tuple as the first argument.")
    index = needs_number(index, "get-item needs a number as the second argument.")
    if not 0 <= index < len(items):
        raise ArityOrShapeError(f"get-item index {index} is out of range for {len(items)} items.")
    return items[index]

def get_key(frame: Frame, arg: Any) -> Any:
    mapping, key = needs_pair(arg, "get-key needs a tuple with two items.")
    mapping = needs_map(mapping, "get-key needs a map as the first argument.")
    if key not in mapping:
        raise ArityOrShapeError(f"get-key found no key {format_value(key)}.")
    return mapping[key]

def type_of(frame: Frame, arg: Any) -> Symbol:
    return Symbol(type_name(arg))

def length(frame: Frame, arg: Any) -> int:
    if isinstance(arg, (tuple, str, MehlMap)):
        return len(arg)
    raise ArityOrShapeError("length needs a tuple, a string or a map.")

def concat(frame: Frame, arg: Any) -> Any:
    parts = needs_tuple(arg, "concat needs a tuple.")
    if all(isinstance(p, str) for p in parts):
        return "".join(parts)
    if all(isinstance(p, tuple) for p in parts):
        return tuple(item for p in parts for item in p)
    raise ArityOrShapeError("concat needs a tuple of strings or a tuple of tuples.")


BUILTINS = {
    "+": add,
    "*": mul,
    "-": sub,
    "/": div,
    "mod": mod,
    "=": equals,
    "<": less_than,
    ">": greater_than,
    "print": print_value,
    "panic": panic,
    "wait": wait,
    "get-item": get_item,
    "get-key": get_key,
    "type": type_of,
    "length": length,
    "concat": concat,
}


def register(registry) -> None:
    for name, fn in BUILTINS.items():
        registry.register(name, fn)
