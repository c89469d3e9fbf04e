"""Lox lexer — converts source text into a flat token stream."""

from __future__ import annotations

from loxcore.errors import LexError
from loxcore.tokens import (
    KEYWORDS,
    Position,
    Token,
    TokenType,
    is_alpha,
    is_alphanumeric,
    is_digit,
)

_SINGLE: dict[str, TokenType] = {
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    ",": TokenType.COMMA,
    ";": TokenType.SEMICOLON,
    "*": TokenType.STAR,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
}

# first char → (kind when followed by '=', kind otherwise)
_CHOICE: dict[str, tuple[TokenType, TokenType]] = {
    "!": (TokenType.BANG_EQUAL, TokenType.BANG),
    "=": (TokenType.EQUAL_EQUAL, TokenType.EQUAL),
    "<": (TokenType.LESS_EQUAL, TokenType.LESS),
    ">": (TokenType.GREATER_EQUAL, TokenType.GREATER),
}


class Lexer:
    """Tokenize Lox source text into a list of Token objects.

    ``_start`` marks the beginning of the token being scanned and ``_current``
    the scan cursor; both only ever move forward.
    """

    def __init__(self, source: str) -> None:
        self._source = source
        self._start = 0
        self._current = 0
        self._line = 1
        self._tokens: list[Token] = []

    def tokenize(self) -> list[Token]:
        """Tokenize the full source and return the token list, ending with EOF."""
        while not self._at_end():
            self._start = self._current
            self._lex_token()

        self._start = self._current
        self._tokens.append(Token(TokenType.EOF, None, self._current_pos()))
        return self._tokens

    # ------------------------------------------------------------------
    # Position helpers
    # ------------------------------------------------------------------

    def _current_pos(self) -> Position:
        return Position(self._start, self._current, self._line)

    def _at_end(self) -> bool:
        return self._current >= len(self._source)

    def _peek(self, offset: int = 0) -> str:
        idx = self._current + offset
        if idx < len(self._source):
            return self._source[idx]
        return ""

    def _advance(self) -> str:
        if self._at_end():
            raise self._error("lexer advanced past end of input")
        ch = self._source[self._current]
        self._current += 1
        return ch

    def _match(self, expected: str) -> bool:
        """Consume the next character only if it is *expected*."""
        if self._peek() != expected:
            return False
        self._current += 1
        return True

    def _emit(self, tt: TokenType, lexeme: str | None = None) -> None:
        if lexeme is None:
            lexeme = self._source[self._start : self._current]
        self._tokens.append(Token(tt, lexeme, self._current_pos()))

    def _error(self, message: str) -> LexError:
        return LexError(message, self._current_pos(), self._source)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _lex_token(self) -> None:
        ch = self._advance()

        if ch in _SINGLE:
            self._emit(_SINGLE[ch])
            return

        if ch in _CHOICE:
            then, otherwise = _CHOICE[ch]
            self._emit(then if self._match("=") else otherwise)
            return

        if ch == "/":
            if self._match("/"):
                self._lex_line_comment()
            elif self._match("*"):
                self._lex_block_comment()
            else:
                self._emit(TokenType.SLASH)
            return

        if ch == "\n":
            self._line += 1
            return

        if ch in " \t\r":
            return

        if ch == '"':
            self._lex_string()
            return

        if is_digit(ch):
            self._lex_number()
            return

        if is_alpha(ch):
            self._lex_identifier()
            return

        raise self._error(f"unexpected character '{ch}'")

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------

    def _lex_line_comment(self) -> None:
        while not self._at_end() and self._peek() != "\n":
            self._advance()

    def _lex_block_comment(self) -> None:
        # Block comments do not nest: the first "*/" closes the comment.
        while not (self._peek() == "*" and self._peek(1) == "/"):
            if self._at_end():
                raise self._error("unterminated block comment")
            if self._advance() == "\n":
                self._line += 1
        self._current += 2

    # ------------------------------------------------------------------
    # Literals
    # ------------------------------------------------------------------

    def _lex_string(self) -> None:
        while not self._at_end() and self._peek() != '"':
            if self._advance() == "\n":
                self._line += 1

        if self._at_end():
            raise self._error("unterminated string")

        self._advance()  # closing quote
        self._emit(TokenType.STRING, self._source[self._start + 1 : self._current - 1])

    def _lex_number(self) -> None:
        while is_digit(self._peek()):
            self._advance()

        # A '.' belongs to the number only when a digit follows it
        if self._peek() == "." and is_digit(self._peek(1)):
            self._advance()
            while is_digit(self._peek()):
                self._advance()

        self._emit(TokenType.NUMBER)

    def _lex_identifier(self) -> None:
        while is_alphanumeric(self._peek()):
            self._advance()

        text = self._source[self._start : self._current]
        self._emit(KEYWORDS.get(text, TokenType.IDENTIFIER), text)


def lex(source: str) -> list[Token]:
    """Convenience function: tokenize source text and return token list."""
    return Lexer(source).tokenize()
