"""
Quill Language Server entry point.

This server provides basic language features for Quill source files using
`pygls`. It reuses the Quill lexer and parser to publish diagnostics for
scan and syntax errors, and to build a symbol index of ``var`` declarations
supporting definition lookup, hover information, and document symbols.


File: server.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from lsprotocol.types import (
    TEXT_DOCUMENT_DEFINITION,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DOCUMENT_SYMBOL,
    TEXT_DOCUMENT_HOVER,
    DefinitionParams,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    DocumentSymbol,
    DocumentSymbolParams,
    Hover,
    HoverParams,
    Location,
    MarkupContent,
    MarkupKind,
    Position,
    Range,
    SymbolKind,
)
from pygls.server import LanguageServer

from quill.exceptions import LexError
from quill.runner import parse_program
from quill.syntax import Node, format_node


@dataclass
class QuillSymbol:
    """Represents a variable declared in a Quill file."""

    name: str
    kind: SymbolKind
    uri: str
    line: int
    detail: str


def _line_range(text: str, line: int) -> Range:
    """Return a range covering the 0-based ``line`` of ``text``."""
    lines = text.splitlines()
    length = len(lines[line]) if 0 <= line < len(lines) else 0
    return Range(Position(line, 0), Position(line, length))


def collect_diagnostics(text: str) -> List[Diagnostic]:
    """Scan and parse ``text`` and convert every error into a diagnostic."""
    try:
        _, _, errors = parse_program(text, "<document>")
    except LexError as e:
        errors = [e]
    diagnostics: List[Diagnostic] = []
    for error in errors:
        line = (error.line or 1) - 1
        diagnostics.append(
            Diagnostic(
                range=_line_range(text, line),
                message=str(error),
                severity=DiagnosticSeverity.Error,
                source="quill",
            )
        )
    return diagnostics


def _walk_declarations(statements):
    """Yield every ``var`` node, including those nested in blocks and branches."""
    for stmt in statements:
        if stmt is None:
            continue
        tag = stmt[0]
        if tag == Node.VAR:
            yield stmt
        elif tag == Node.BLOCK:
            yield from _walk_declarations(stmt[1])
        elif tag == Node.IF:
            yield from _walk_declarations([stmt[2], stmt[3]])
        elif tag == Node.WHILE:
            yield from _walk_declarations([stmt[2]])


def collect_symbols(uri: str, text: str) -> List[QuillSymbol]:
    """Parse ``text`` and extract one symbol per ``var`` declaration."""
    try:
        _, ast, _ = parse_program(text, uri)
    except LexError:
        return []
    symbols: List[QuillSymbol] = []
    for _, name, initializer, line in _walk_declarations(ast):
        detail = f"var {name}"
        if initializer is not None:
            try:
                detail += f" = {format_node(initializer)}"
            except RecursionError:
                detail += " = ..."
        symbols.append(QuillSymbol(name, SymbolKind.Variable, uri, line - 1, detail))
    return symbols


class QuillLanguageServer(LanguageServer):
    """Language server for Quill source files."""

    def __init__(self) -> None:
        super().__init__("quill-ls", "v0.1")
        self.symbols_by_uri: Dict[str, List[QuillSymbol]] = {}
        self.global_symbols: Dict[str, List[QuillSymbol]] = {}
        self.indexed_workspace = False

    def _index_workspace(self) -> None:
        """Parse all `.ql` files under the current workspace."""
        root = self.workspace.root_path
        if not root:
            self.indexed_workspace = True
            return
        for path in Path(root).rglob("*.ql"):
            uri = path.as_uri()
            if uri in self.symbols_by_uri:
                continue
            try:
                text = path.read_text(encoding="utf-8")
            except OSError:
                continue
            self.update_index(uri, text)
        self.indexed_workspace = True

    def update_index(self, uri: str, text: str) -> None:
        """Parse ``text`` and update the symbol index for ``uri``."""
        self.symbols_by_uri[uri] = collect_symbols(uri, text)
        self._rebuild_global_index()

    def _rebuild_global_index(self) -> None:
        self.global_symbols.clear()
        for syms in self.symbols_by_uri.values():
            for sym in syms:
                self.global_symbols.setdefault(sym.name, []).append(sym)

    def lookup(self, word: str) -> Optional[QuillSymbol]:
        """Return the first declaration of ``word``, indexing the workspace on demand."""
        if not self.indexed_workspace:
            self._index_workspace()
        matches = self.global_symbols.get(word)
        return matches[0] if matches else None

    def refresh(self, uri: str, text: str) -> None:
        """Re-index ``uri`` and publish its diagnostics."""
        self.update_index(uri, text)
        self.publish_diagnostics(uri, collect_diagnostics(text))


lang_server = QuillLanguageServer()


@lang_server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: QuillLanguageServer, params: DidOpenTextDocumentParams) -> None:
    """Index and check a document when it is opened."""
    ls.refresh(params.text_document.uri, params.text_document.text)


@lang_server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: QuillLanguageServer, params: DidChangeTextDocumentParams) -> None:
    """Re-index and re-check a document when it changes."""
    doc = ls.workspace.get_text_document(params.text_document.uri)
    ls.refresh(doc.uri, doc.source)


@lang_server.feature(TEXT_DOCUMENT_DEFINITION)
def definition(ls: QuillLanguageServer, params: DefinitionParams):
    """Return the definition location for the variable under the cursor."""
    doc = ls.workspace.get_text_document(params.text_document.uri)
    word = doc.word_at_position(params.position)
    if not word:
        return None
    sym = ls.lookup(word)
    if sym is None:
        return None
    rng = Range(Position(sym.line, 0), Position(sym.line, len(sym.name)))
    return Location(uri=sym.uri, range=rng)


@lang_server.feature(TEXT_DOCUMENT_HOVER)
def hover(ls: QuillLanguageServer, params: HoverParams) -> Optional[Hover]:
    """Return hover information for the variable under the cursor."""
    doc = ls.workspace.get_text_document(params.text_document.uri)
    word = doc.word_at_position(params.position)
    if not word:
        return None
    sym = ls.lookup(word)
    if sym is None:
        return None
    contents = MarkupContent(kind=MarkupKind.PlainText, value=sym.detail)
    return Hover(contents=contents)


@lang_server.feature(TEXT_DOCUMENT_DOCUMENT_SYMBOL)
def document_symbols(ls: QuillLanguageServer, params: DocumentSymbolParams):
    """Return the declared variables of the given document."""
    symbols = ls.symbols_by_uri.get(params.text_document.uri, [])
    result: List[DocumentSymbol] = []
    for sym in symbols:
        rng = Range(Position(sym.line, 0), Position(sym.line, len(sym.name)))
        result.append(
            DocumentSymbol(
                name=sym.name,
                kind=sym.kind,
                range=rng,
                selection_range=rng,
                detail=sym.detail,
            )
        )
    return result


def main() -> None:
    """Start the language server."""
    lang_server.start_io()


if __name__ == "__main__":
    main()
