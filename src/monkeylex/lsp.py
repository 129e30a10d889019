"""Minimal LSP server for Monkey source, illegal-character diagnostics only."""

from __future__ import annotations

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    Position,
    PublishDiagnosticsParams,
    Range,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer

from monkeylex import __version__
from monkeylex.lexer import tokenize
from monkeylex.tokens import Token, TokenType

server = LanguageServer(
    "monkeylex-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full
)


def _utf16_width(ch: str) -> int:
    return len(ch.encode("utf-16-le")) // 2


def _character_range(line: str, byte_col: int) -> tuple[int, int]:
    """Map a 0-based byte column to the UTF-16 range of the character holding it."""
    seen = 0
    units = 0
    for ch in line:
        width = len(ch.encode("utf-8"))
        if seen + width > byte_col:
            return units, units + _utf16_width(ch)
        seen += width
        units += _utf16_width(ch)
    return units, units + 1


def _diagnostic(tok: Token, lines: list[str]) -> Diagnostic:
    assert tok.span is not None
    # Token positions are 1-based byte columns, LSP positions 0-based UTF-16 units
    line = tok.span.start.line - 1
    start, end = _character_range(lines[line], tok.span.start.column - 1)
    return Diagnostic(
        range=Range(
            start=Position(line=line, character=start),
            end=Position(line=line, character=end),
        ),
        message=f"illegal character {tok.literal!r}",
        severity=DiagnosticSeverity.Error,
        source="monkeylex",
    )


def _validate(ls: LanguageServer, uri: str) -> None:
    """Tokenize the document and publish one diagnostic per illegal byte.

    The document is scanned as UTF-8 bytes, the input the command line sees
    for the same file.
    """
    doc = ls.workspace.get_text_document(uri)
    lines = doc.source.split("\n")

    diagnostics = [
        _diagnostic(tok, lines)
        for tok in tokenize(doc.source.encode("utf-8"))
        if tok.type is TokenType.ILLEGAL
    ]

    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


def main() -> None:
    server.start_io()
