"""Token types, data structures, and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from types import MappingProxyType


class TokenType(Enum):
    # Single-character punctuation
    LEFT_PAREN = auto()  # (
    RIGHT_PAREN = auto()  # )
    LEFT_BRACE = auto()  # {
    RIGHT_BRACE = auto()  # }
    COMMA = auto()  # ,
    SEMICOLON = auto()  # ;
    STAR = auto()  # *
    PLUS = auto()  # +
    MINUS = auto()  # -
    SLASH = auto()  # /

    # One or two character operators
    BANG = auto()  # !
    BANG_EQUAL = auto()  # !=
    EQUAL = auto()  # =
    EQUAL_EQUAL = auto()  # ==
    LESS = auto()  # <
    LESS_EQUAL = auto()  # <=
    GREATER = auto()  # >
    GREATER_EQUAL = auto()  # >=

    # Literals
    NUMBER = auto()
    STRING = auto()  # lexeme has the quotes stripped
    IDENTIFIER = auto()

    # Reserved words
    AND = auto()
    CLASS = auto()
    ELSE = auto()
    FALSE = auto()
    FOR = auto()
    FUN = auto()
    IF = auto()
    NIL = auto()
    OR = auto()
    PRINT = auto()
    RETURN = auto()
    SUPER = auto()
    THIS = auto()
    TRUE = auto()
    VAR = auto()
    WHILE = auto()

    EOF = auto()


KEYWORDS: MappingProxyType[str, TokenType] = MappingProxyType(
    {
        "and": TokenType.AND,
        "class": TokenType.CLASS,
        "else": TokenType.ELSE,
        "false": TokenType.FALSE,
        "for": TokenType.FOR,
        "fun": TokenType.FUN,
        "if": TokenType.IF,
        "nil": TokenType.NIL,
        "or": TokenType.OR,
        "print": TokenType.PRINT,
        "return": TokenType.RETURN,
        "super": TokenType.SUPER,
        "this": TokenType.THIS,
        "true": TokenType.TRUE,
        "var": TokenType.VAR,
        "while": TokenType.WHILE,
    }
)


@dataclass(frozen=True, slots=True)
class Position:
    """Scan bounds of a token: 0-based start/current offsets, 1-based line."""

    start: int
    current: int
    line: int

    def column(self, source: str) -> int:
        """1-based column of ``start`` within its line of *source*."""
        line_start = source.rfind("\n", 0, self.start) + 1
        return self.start - line_start + 1

    def start_line(self, source: str) -> int:
        """Line of ``start``; ``line`` is stamped at ``current`` and may be later."""
        return self.line - source.count("\n", self.start, self.current)


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexer token; ``lexeme`` is None only for EOF."""

    type: TokenType
    lexeme: str | None
    position: Position


def is_digit(ch: str) -> bool:
    """Return True if ch is an ASCII decimal digit."""
    return "0" <= ch <= "9"


def is_alpha(ch: str) -> bool:
    """Return True if ch may start an identifier."""
    return "a" <= ch <= "z" or "A" <= ch <= "Z" or ch == "_"


def is_alphanumeric(ch: str) -> bool:
    return is_alpha(ch) or is_digit(ch)
