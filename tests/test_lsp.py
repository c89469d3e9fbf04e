"""Tests for the LSP server — diagnostic generation."""

from __future__ import annotations

import pytest
from lsprotocol.types import (
    DiagnosticSeverity,
    PublishDiagnosticsParams,
    TextDocumentItem,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer
from pygls.workspace import Workspace

from loxcore.lsp import _validate


@pytest.fixture
def lsp_env():
    """Create a LanguageServer with an initialized workspace and captured diagnostics."""
    ls = LanguageServer("test", "v0", text_document_sync_kind=TextDocumentSyncKind.Full)
    ws = Workspace(None)
    ls.protocol._workspace = ws

    published: list[PublishDiagnosticsParams] = []
    ls.text_document_publish_diagnostics = lambda params: published.append(params)

    def put(source: str, uri: str = "file:///test.lox") -> None:
        ws.put_text_document(
            TextDocumentItem(uri=uri, language_id="lox", version=0, text=source)
        )

    return ls, published, put


# ---------------------------------------------------------------------------
# Lex errors → Error severity
# ---------------------------------------------------------------------------


class TestLexErrors:
    def test_unexpected_character(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("1 + @")
        _validate(ls, "file:///test.lox")

        assert len(published) == 1
        diags = published[0].diagnostics
        assert len(diags) == 1
        d = diags[0]
        assert d.severity == DiagnosticSeverity.Error
        assert "unexpected character" in d.message
        assert d.source == "loxcore"
        # '@' is at column 5 (1-based) → character 4 (0-based)
        assert d.range.start.line == 0
        assert d.range.start.character == 4
        assert d.range.end.character == 5

    def test_unterminated_string_spans_lines(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put('1 + "abc\ndef')
        _validate(ls, "file:///test.lox")

        d = published[0].diagnostics[0]
        assert "unterminated string" in d.message
        # Reported where the string starts
        assert d.range.start.line == 0
        assert d.range.start.character == 4


# ---------------------------------------------------------------------------
# Parse errors → Error severity
# ---------------------------------------------------------------------------


class TestParseErrors:
    def test_unclosed_paren(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("(1 + 2")
        _validate(ls, "file:///test.lox")

        assert len(published) == 1
        diags = published[0].diagnostics
        assert len(diags) == 1
        d = diags[0]
        assert d.severity == DiagnosticSeverity.Error
        assert "expected ')'" in d.message
        assert d.source == "loxcore"

    def test_empty_document(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("")
        _validate(ls, "file:///test.lox")

        d = published[0].diagnostics[0]
        assert d.message == "invalid expression"


# ---------------------------------------------------------------------------
# Type mismatches → Warning severity
# ---------------------------------------------------------------------------


class TestEvalWarnings:
    def test_type_mismatch(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put('"a" - 1')
        _validate(ls, "file:///test.lox")

        assert len(published) == 1
        diags = published[0].diagnostics
        assert len(diags) == 1
        d = diags[0]
        assert d.severity == DiagnosticSeverity.Warning
        assert "type mismatch" in d.message
        # Points at the '-' operator
        assert d.range.start.character == 4


# ---------------------------------------------------------------------------
# Clean document → empty diagnostics
# ---------------------------------------------------------------------------


class TestCleanDocument:
    def test_valid_document(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("// arithmetic\n(1 + 1) / 2\n")
        _validate(ls, "file:///test.lox")

        assert len(published) == 1
        assert published[0].diagnostics == []


# ---------------------------------------------------------------------------
# Position conversion (1-based → 0-based)
# ---------------------------------------------------------------------------


class TestPositionConversion:
    def test_error_on_second_line(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("1 +\n@ 2")
        _validate(ls, "file:///test.lox")

        assert len(published) == 1
        diags = published[0].diagnostics
        assert len(diags) == 1
        d = diags[0]
        # Error is on line 2 (1-based) → LSP line 1 (0-based)
        assert d.range.start.line == 1
        assert d.range.start.character == 0
