from __future__ import annotations

"""
A pygls-based Language Server for Mehl.

Features:
- Text synchronization (documents are kept by pygls' workspace)
- Diagnostics: reader errors, names defined neither in the buffer nor in the prelude
- Hover: docs of prelude and locally defined functions
- Completion: prelude names and local definitions
- Document Symbols: from the indexer

Note: We avoid evaluating the buffer. We build a static index per document.
"""

import logging
import re
from typing import Dict, Optional, List

from pygls.server import LanguageServer
from lsprotocol.types import (
    DidOpenTextDocumentParams,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    Diagnostic,
    DiagnosticSeverity,
    Position,
    Range,
    Hover,
    MarkupContent,
    MarkupKind,
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    CompletionOptions,
    CompletionParams,
    HoverParams,
    DocumentSymbolParams,
    DocumentSymbol,
    SymbolKind,
)

from mehl import __version__
from mehl_lsp.indexer import build_index, core_index, unknown_names, DocumentIndex, SymbolDef

logger = logging.getLogger(__name__)

SOURCE = "mehl-ls"
WORD_RE = re.compile(r"[^\s,()\[\]{}\"#:]+")

_COMPLETION_KINDS = {
    "function": CompletionItemKind.Function,
    "value": CompletionItemKind.Variable,
    "primitive": CompletionItemKind.Keyword,
}
_SYMBOL_KINDS = {
    "function": SymbolKind.Function,
    "value": SymbolKind.Variable,
    "primitive": SymbolKind.Operator,
}


class MehlLanguageServer(LanguageServer):
    CMD_NAME = "mehl-ls"

    def __init__(self):
        super().__init__(self.CMD_NAME, __version__)
        self.indexes: Dict[str, DocumentIndex] = {}


ls = MehlLanguageServer()


# --- Text sync ---
@ls.feature("textDocument/didOpen")
def did_open(params: DidOpenTextDocumentParams):
    _refresh(params.text_document.uri)


@ls.feature("textDocument/didChange")
def did_change(params: DidChangeTextDocumentParams):
    _refresh(params.text_document.uri)


@ls.feature("textDocument/didClose")
def did_close(params: DidCloseTextDocumentParams):
    uri = params.text_document.uri
    ls.indexes.pop(uri, None)
    ls.publish_diagnostics(uri, [])


def _refresh(uri: str) -> None:
    document = ls.workspace.get_text_document(uri)
    idx = build_index(document.source)
    ls.indexes[uri] = idx
    logger.debug("Indexed %s: %d definitions.", uri, len(idx.symbols))
    ls.publish_diagnostics(uri, diagnostics_for(idx))


# --- Diagnostics ---
def _mk_range(line: int, col: int, length: int = 1) -> Range:
    return Range(start=Position(line=line, character=col), end=Position(line=line, character=col + length))


def diagnostics_for(idx: DocumentIndex) -> List[Diagnostic]:
    diags: List[Diagnostic] = []
    for problem in idx.problems:
        diags.append(
            Diagnostic(
                range=_mk_range(problem.line, problem.col),
                message=problem.message,
                severity=DiagnosticSeverity.Error,
                source=SOURCE,
            )
        )
    for ref in unknown_names(idx):
        diags.append(
            Diagnostic(
                range=_mk_range(ref.line, ref.col, len(ref.name)),
                message=f"Unknown name {ref.name}.",
                severity=DiagnosticSeverity.Warning,
                source=SOURCE,
            )
        )
    return diags


# --- Hover ---
def _lookup(word: str, idx: DocumentIndex) -> Optional[SymbolDef]:
    return idx.symbols.get(word) or core_index().symbols.get(word)


def hover_text(word: str, idx: DocumentIndex) -> Optional[str]:
    sdef = _lookup(word, idx)
    if sdef is None:
        return None
    header = f"{word} ({sdef.kind})"
    if sdef.exported:
        header += ", exported"
    return f"{header}\n\n{sdef.docs}" if sdef.docs else header


@ls.feature("textDocument/hover")
def on_hover(params: HoverParams) -> Optional[Hover]:
    document = ls.workspace.get_text_document(params.text_document.uri)
    idx = ls.indexes.get(params.text_document.uri)
    if idx is None:
        return None
    word = word_at(document.source, params.position)
    if not word:
        return None
    contents = hover_text(word, idx)
    if contents is None:
        return None
    return Hover(contents=MarkupContent(kind=MarkupKind.PlainText, value=contents))


# --- Completion ---
def completion_items(idx: DocumentIndex) -> List[CompletionItem]:
    items: Dict[str, CompletionItem] = {}
    for source in (core_index(), idx):
        for name, sdef in source.symbols.items():
            items[name] = CompletionItem(
                label=name,
                kind=_COMPLETION_KINDS.get(sdef.kind, CompletionItemKind.Text),
                detail=sdef.docs,
            )
    return list(items.values())


@ls.feature("textDocument/completion", CompletionOptions(trigger_characters=[" ", "["]))
def on_completion(params: CompletionParams) -> CompletionList:
    idx = ls.indexes.get(params.text_document.uri, DocumentIndex())
    return CompletionList(is_incomplete=False, items=completion_items(idx))


# --- Document Symbols ---
def document_symbols(idx: DocumentIndex) -> List[DocumentSymbol]:
    symbols: List[DocumentSymbol] = []
    for name, sdef in idx.symbols.items():
        rng = _mk_range(sdef.line, sdef.col, len(name) + 1)
        symbols.append(
            DocumentSymbol(
                name=name,
                detail=sdef.docs,
                kind=_SYMBOL_KINDS.get(sdef.kind, SymbolKind.Function),
                range=rng,
                selection_range=rng,
            )
        )
    return symbols


@ls.feature("textDocument/documentSymbol")
def on_document_symbols(params: DocumentSymbolParams) -> Optional[List[DocumentSymbol]]:
    idx = ls.indexes.get(params.text_document.uri)
    if idx is None:
        return None
    return document_symbols(idx)


# --- Helpers ---
def word_at(text: str, pos: Position) -> Optional[str]:
    lines = text.splitlines()
    if pos.line >= len(lines):
        return None
    line = lines[pos.line]
    for m in WORD_RE.finditer(line):
        if m.start() <= pos.character <= m.end():
            return m.group(0)
    return None


def start() -> None:
    """Run the language server over stdio."""
    ls.start_io()


if __name__ == "__main__":
    start()
