"""Minimal LSP server for Lox expressions — diagnostics only."""

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

from loxcore import __version__
from loxcore.errors import EvalError, LexError, ParseError
from loxcore.interpreter import evaluate
from loxcore.parser import parse_source

server = LanguageServer(
    "loxcore-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full
)


def _diagnostic(
    exc: LexError | ParseError | EvalError, severity: DiagnosticSeverity
) -> Diagnostic:
    """Convert an error's 1-based position into a 0-based LSP range."""
    line = exc.position.start_line(exc.source) - 1
    col = exc.position.column(exc.source) - 1
    width = exc.position.current - exc.position.start
    if "\n" in exc.source[exc.position.start : exc.position.current]:
        width = 1
    return Diagnostic(
        range=Range(
            start=Position(line=line, character=col),
            end=Position(line=line, character=col + max(1, width)),
        ),
        message=exc.message,
        severity=severity,
        source="loxcore",
    )


def _validate(ls: LanguageServer, uri: str) -> None:
    """Run the Lox pipeline and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    source = doc.source
    diagnostics: list[Diagnostic] = []

    try:
        expr = parse_source(source)
    except (LexError, ParseError) as exc:
        diagnostics.append(_diagnostic(exc, DiagnosticSeverity.Error))
    else:
        try:
            evaluate(expr, strict=True, source=source)
        except EvalError as exc:
            diagnostics.append(_diagnostic(exc, DiagnosticSeverity.Warning))

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
