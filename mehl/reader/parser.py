"""
  Mehl Reader, Lexer and Parser

- Streaming, lazy parsing
- Emits Python primitives where the runtime value is already known:

    - numbers     -> int
    - strings     -> str
    - symbols     -> Symbol (`:name`, `:` alone is unit)
    - names       -> Name
    - `(a, b c)`  -> TupleForm, one body per comma-separated item
    - `{:k v}`    -> MapForm
    - `[a b]`     -> CodeForm
    - `# ...`     -> comment to end of line
"""

from __future__ import annotations

import re
from typing import Iterator, NamedTuple, Optional, Iterable

from mehl import Form
from mehl.errors import MehlSyntaxError
from mehl.types.symbol import Symbol
from mehl.reader.forms import Name, TupleForm, MapForm, CodeForm

_DELIMITERS = r"\s,()\[\]{}\"#:"

TOKEN_RE = re.compile(
    r"(?P<comment>#[^\n]*)"  # single-line comment
    r"|(?P<lparen>\()"  # (
    r"|(?P<rparen>\))"  # )
    r"|(?P<lbracket>\[)"  # [
    r"|(?P<rbracket>\])"  # ]
    r"|(?P<lbrace>\{)"  # {
    r"|(?P<rbrace>\})"  # }
    r"|(?P<comma>,)"  # ,
    r'|(?P<string>"(?:\\.|[^\\"])*")'  # double-quoted strings
    rf"|(?P<symbol>:[^{_DELIMITERS}]*)"  # :symbol
    rf"|(?P<word>[^{_DELIMITERS}]+)"  # names and numbers
)

NUMBER_RE = re.compile(r"-?\d+")
ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)

NAMED_ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
}

_CLOSERS = {"rparen": "')'", "rbracket": "']'", "rbrace": "'}'"}


class Token(NamedTuple):
    kind: str
    text: str
    line: int
    col: int


def lex(source: str) -> Iterator[Token]:
    """Token generator. Lines and columns are 1-based."""
    pos = 0
    n = len(source)
    line = 1
    line_start = 0

    while pos < n:
        ch = source[pos]
        if ch.isspace():
            if ch == "\n":
                line += 1
                line_start = pos + 1
            pos += 1
            continue

        m = TOKEN_RE.match(source, pos)
        if not m:
            if ch == '"':
                raise MehlSyntaxError("Unterminated string", line, pos - line_start + 1)
            raise MehlSyntaxError(f"Unexpected character {ch!r}", line, pos - line_start + 1)

        kind = m.lastgroup
        text = m.group(kind)
        if kind != "comment":
            yield Token(kind, text, line, pos - line_start + 1)
        # Strings may span lines
        newlines = text.count("\n")
        if newlines:
            line += newlines
            line_start = pos + text.rfind("\n") + 1
        pos = m.end()


def _unescape(body: str) -> str:
    return ESCAPE_RE.sub(lambda m: NAMED_ESCAPES.get(m.group(1), m.group(1)), body)


class TokenStream:
    def __init__(self, token_iter: Iterable[Token]):
        self.tokens = iter(token_iter)
        self.buffer: list[Token] = []

    def peek(self) -> Optional[Token]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None
        return self.buffer[0]

    def advance(self) -> Optional[Token]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, None)

    def parse_form(self) -> Form:
        tok = self.peek()
        if tok is None:
            return None

        if tok.kind == "word":
            self.advance()
            if NUMBER_RE.fullmatch(tok.text):
                return int(tok.text)
            return Name(tok.text, tok.line, tok.col)

        if tok.kind == "symbol":
            self.advance()
            return Symbol(tok.text[1:])

        if tok.kind == "string":
            self.advance()
            return _unescape(tok.text[1:-1])

        if tok.kind == "lparen":
            self.advance()
            return self._parse_tuple(tok)

        if tok.kind == "lbracket":
            self.advance()
            body = self.parse_body(("rbracket",), opener=tok)
            self.advance()
            return CodeForm(tuple(body), tok.line, tok.col)

        if tok.kind == "lbrace":
            self.advance()
            return self._parse_map(tok)

        if tok.kind in _CLOSERS:
            raise MehlSyntaxError(f"Unexpected {_CLOSERS[tok.kind]}", tok.line, tok.col)
        if tok.kind == "comma":
            raise MehlSyntaxError("Unexpected ',' outside a tuple", tok.line, tok.col)

        raise MehlSyntaxError(f"Unknown token: {tok.kind} {tok.text}", tok.line, tok.col)

    def parse_body(self, terminators: tuple[str, ...], opener: Optional[Token] = None) -> list[Form]:
        """Read forms until one of `terminators` is next (it is not consumed)."""
        forms: list[Form] = []
        while True:
            tok = self.peek()
            if tok is None:
                if opener is not None:
                    raise MehlSyntaxError(f"Unmatched {opener.text!r}", opener.line, opener.col)
                return forms
            if tok.kind in terminators:
                return forms
            forms.append(self.parse_form())

    def _parse_tuple(self, opener: Token) -> TupleForm:
        tok = self.peek()
        if tok is not None and tok.kind == "rparen":
            self.advance()
            return TupleForm((), opener.line, opener.col)

        items: list[tuple[Form, ...]] = []
        while True:
            item = self.parse_body(("comma", "rparen"), opener=opener)
            sep = self.advance()
            if not item:
                raise MehlSyntaxError("Empty tuple item", sep.line, sep.col)
            items.append(tuple(item))
            if sep.kind == "rparen":
                return TupleForm(tuple(items), opener.line, opener.col)

    def _parse_map(self, opener: Token) -> MapForm:
        forms = self.parse_body(("rbrace",), opener=opener)
        self.advance()
        if len(forms) % 2 == 1:
            raise MehlSyntaxError(
                "There should be an even number of items inside maps.", opener.line, opener.col
            )
        entries = []
        for key, value in zip(forms[::2], forms[1::2]):
            if not isinstance(key, Symbol):
                raise MehlSyntaxError("Map keys need to be symbols.", opener.line, opener.col)
            entries.append((key, value))
        return MapForm(tuple(entries), opener.line, opener.col)

    def parse_all(self) -> Iterator[Form]:
        while self.peek() is not None:
            yield self.parse_form()


def parse(source: str) -> list[Form]:
    """Read a whole source text into a body."""
    return list(TokenStream(lex(source)).parse_all())
