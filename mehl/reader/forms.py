"""
Syntax forms produced by the reader.

Literal numbers, strings and symbols are read straight into their runtime
values (int, str, Symbol). Everything that needs evaluation gets a node:

    - Name       -> a reference, run against the current value
    - TupleForm  -> `(a, b c, d)`; every item is a body of its own
    - MapForm    -> `{:k v ...}`; symbol keys, one form per value
    - CodeForm   -> `[...]`; becomes a Closure over the current scope

Source positions are carried for diagnostics but ignored by equality, so
two readings of the same text compare equal.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from mehl import Body, Form
from mehl.types.symbol import Symbol


@dataclass(frozen=True)
class Name:
    text: str
    line: int = field(default=0, compare=False)
    col: int = field(default=0, compare=False)

    def __str__(self):
        return self.text


@dataclass(frozen=True)
class TupleForm:
    items: tuple[tuple[Form, ...], ...]
    line: int = field(default=0, compare=False)
    col: int = field(default=0, compare=False)


@dataclass(frozen=True)
class MapForm:
    entries: tuple[tuple[Symbol, Form], ...]
    line: int = field(default=0, compare=False)
    col: int = field(default=0, compare=False)


@dataclass(frozen=True)
class CodeForm:
    body: tuple[Form, ...]
    line: int = field(default=0, compare=False)
    col: int = field(default=0, compare=False)


def format_form(form: Form) -> str:
    match form:
        case Name(text=text):
            return text
        case TupleForm(items=items):
            return "(" + ", ".join(format_body(item) for item in items) + ")"
        case MapForm(entries=entries):
            return "{" + " ".join(f"{k} {format_form(v)}" for k, v in entries) + "}"
        case CodeForm(body=body):
            return "[" + format_body(body) + "]"
        case str():
            return quote_string(form)
        case _:
            return str(form)


_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\t": "\\t", "\r": "\\r"}


def quote_string(text: str) -> str:
    return '"' + "".join(_ESCAPES.get(ch, ch) for ch in text) + '"'


def format_body(body: Body) -> str:
    return " ".join(format_form(form) for form in body)
