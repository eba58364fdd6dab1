"""Formatting of Mehl values.

Values are written back in source syntax, so that anything without a
closure in it reads back as an equal value. The REPL optionally colours the
output by kind.
"""

from mehl import Value
from mehl.reader.forms import quote_string
from mehl.types.closure import Closure
from mehl.types.map import MehlMap
from mehl.types.symbol import Symbol

# ----------------- ANSI colors -----------------
RESET = "\033[0m"
COLOR_SYMBOL = "\033[94m"
COLOR_STRING = "\033[93m"
COLOR_NUMBER = "\033[96m"
COLOR_CODE = "\033[92m"


def format_value(value: Value, color: bool = False) -> str:
    def paint(text: str, code: str) -> str:
        return f"{code}{text}{RESET}" if color else text

    if isinstance(value, Symbol):
        return paint(str(value), COLOR_SYMBOL)
    if isinstance(value, str):
        return paint(quote_string(value), COLOR_STRING)
    if isinstance(value, int):
        return paint(str(value), COLOR_NUMBER)
    if isinstance(value, tuple):
        return "(" + ", ".join(format_value(item, color) for item in value) + ")"
    if isinstance(value, MehlMap):
        return "{" + " ".join(
            f"{format_value(key, color)} {format_value(item, color)}" for key, item in value.items()
        ) + "}"
    if isinstance(value, Closure):
        return paint(str(value), COLOR_CODE)
    return repr(value)


def type_name(value: Value) -> str:
    """The name `type` reports for a value."""
    if isinstance(value, Symbol):
        return "symbol"
    if isinstance(value, str):
        return "string"
    if isinstance(value, int):
        return "number"
    if isinstance(value, tuple):
        return "tuple"
    if isinstance(value, MehlMap):
        return "map"
    if isinstance(value, Closure):
        return "code"
    return type(value).__name__
