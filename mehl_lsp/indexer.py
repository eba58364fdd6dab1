from __future__ import annotations

"""
Static indexer for Mehl files; the buffer is never evaluated.

The document is read with the real reader. A syntax error becomes a problem
entry; otherwise the forms are walked (including nested blocks) to find:
- definitions: (:name, "docs", [...]) fun, (:name, value) let, and the
  pub- variants
- raw definitions: (:fun, {:name :x ...}) ✨ and the same for :let and :primitive
- names bound by patterns: `:?name` captures and destructuring `let`
- references: every name used, for unknown-name warnings

Positions are 0-based, ready for LSP ranges.
"""

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Dict, Iterator, List, Optional

from mehl import Body, Form
from mehl.config import get_prelude_files
from mehl.errors import MehlSyntaxError
from mehl.reader.forms import Name, TupleForm, MapForm, CodeForm
from mehl.reader.parser import parse
from mehl.types.symbol import Symbol

SUGAR_KINDS = {
    "fun": ("function", False),
    "pub-fun": ("function", True),
    "let": ("value", False),
    "pub-let": ("value", True),
}
RAW_KINDS = {"fun": "function", "let": "value", "primitive": "primitive"}
ENTRY = "✨"
DOT = "."


@dataclass
class SymbolDef:
    name: str
    kind: str  # "function" | "value" | "primitive"
    line: int
    col: int
    docs: Optional[str] = None
    exported: bool = False


@dataclass
class NameRef:
    name: str
    line: int
    col: int


@dataclass
class SyntaxProblem:
    message: str
    line: int
    col: int


@dataclass
class DocumentIndex:
    symbols: Dict[str, SymbolDef] = field(default_factory=dict)
    bound: set = field(default_factory=set)  # names bound without a definition site
    references: List[NameRef] = field(default_factory=list)
    problems: List[SyntaxProblem] = field(default_factory=list)

    def defines(self, name: str) -> bool:
        return name in self.symbols or name in self.bound


def _position(form) -> tuple[int, int]:
    return max(form.line - 1, 0), max(form.col - 1, 0)


def _single(item: Body) -> Optional[Form]:
    return item[0] if len(item) == 1 else None


def _pattern_names(form: Form) -> Iterator[str]:
    """Symbols of a destructuring pattern written as a literal."""
    if isinstance(form, Symbol):
        yield form.id
    elif isinstance(form, TupleForm):
        for item in form.items:
            for sub in item:
                yield from _pattern_names(sub)
    elif isinstance(form, MapForm):
        for _, value in form.entries:
            yield from _pattern_names(value)


def _sugar_definition(idx: DocumentIndex, args: TupleForm, head: str) -> None:
    kind, exported = SUGAR_KINDS[head]
    if not args.items:
        return
    target = _single(args.items[0])
    line, col = _position(args)
    if isinstance(target, Symbol):
        docs = None
        if kind == "function" and len(args.items) > 1:
            doc_form = _single(args.items[1])
            docs = doc_form if isinstance(doc_form, str) else None
        idx.symbols[target.id] = SymbolDef(target.id, kind, line, col + 1, docs, exported)
    elif target is not None:
        idx.bound.update(_pattern_names(target))


def _raw_definition(idx: DocumentIndex, args: TupleForm) -> None:
    if len(args.items) != 2:
        return
    primitive, options = _single(args.items[0]), _single(args.items[1])
    if not isinstance(primitive, Symbol) or primitive.id not in RAW_KINDS:
        return
    if not isinstance(options, MapForm):
        return
    entries = {key.id: value for key, value in options.entries}
    target = entries.get("name")
    if isinstance(target, Symbol):
        docs = entries.get("docs")
        line, col = _position(options)
        idx.symbols[target.id] = SymbolDef(
            target.id,
            RAW_KINDS[primitive.id],
            line,
            col,
            docs if isinstance(docs, str) else None,
        )
    elif target is not None:
        idx.bound.update(_pattern_names(target))


def _walk(idx: DocumentIndex, body: Body) -> None:
    previous: Optional[Form] = None
    for form in body:
        if isinstance(form, Name):
            if form.text != DOT:
                line, col = _position(form)
                idx.references.append(NameRef(form.text, line, col))
            if isinstance(previous, TupleForm):
                if form.text in SUGAR_KINDS:
                    _sugar_definition(idx, previous, form.text)
                elif form.text == ENTRY:
                    _raw_definition(idx, previous)
        elif isinstance(form, Symbol) and form.id.startswith("?"):
            idx.bound.add(form.id[1:])
        elif isinstance(form, TupleForm):
            for item in form.items:
                _walk(idx, item)
        elif isinstance(form, MapForm):
            _walk(idx, [value for _, value in form.entries])
        elif isinstance(form, CodeForm):
            _walk(idx, form.body)
        previous = form


def build_index(text: str) -> DocumentIndex:
    idx = DocumentIndex()
    try:
        forms = parse(text)
    except MehlSyntaxError as ex:
        line = (ex.line or 1) - 1
        col = (ex.col or 1) - 1
        idx.problems.append(SyntaxProblem(ex.message, line, col))
        return idx
    _walk(idx, forms)
    return idx


@lru_cache(maxsize=1)
def core_index() -> DocumentIndex:
    """Index of the prelude, the names every program can use."""
    idx = DocumentIndex()
    for path in get_prelude_files():
        if path.is_file():
            part = build_index(path.read_text(encoding="utf-8"))
            idx.symbols.update(part.symbols)
    idx.symbols.setdefault(ENTRY, SymbolDef(ENTRY, "primitive", 0, 0, "The primitive fun."))
    return idx


def unknown_names(idx: DocumentIndex, core: Optional[DocumentIndex] = None) -> List[NameRef]:
    """References that neither the document nor the prelude defines."""
    core = core if core is not None else core_index()
    return [
        ref
        for ref in idx.references
        if not idx.defines(ref.name) and not core.defines(ref.name)
    ]
