"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from loxcore.interpreter import evaluate
from loxcore.lexer import lex as tokenize
from loxcore.parser import parse_source
from loxcore.tokens import Position, Token, TokenType
from loxcore.values import Value, stringify

# Convenience position for hand-built tokens
P = Position(0, 0, 1)


@pytest.fixture
def lex():
    """Return a helper that tokenizes source and returns tokens (excluding EOF)."""

    def _lex(source: str) -> list[Token]:
        tokens = tokenize(source)
        # Strip trailing EOF for convenience
        return [t for t in tokens if t.type != TokenType.EOF]

    return _lex


def run(source: str, strict: bool = False) -> Value:
    """Lex, parse and evaluate source, returning the raw value."""
    return evaluate(parse_source(source), strict=strict, source=source)


def show(source: str) -> str:
    """Lex, parse and evaluate source, returning the display form."""
    return stringify(run(source))


def token(tt: TokenType, lexeme: str | None = None) -> Token:
    return Token(tt, lexeme, P)


def assert_types(tokens: list[Token], expected: list[TokenType]) -> None:
    """Assert that the token types match the expected list."""
    actual = [t.type for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_lexemes(tokens: list[Token], expected: list[str | None]) -> None:
    """Assert that the token lexemes match the expected list."""
    actual = [t.lexeme for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"
