"""Lox parser — converts a token stream into an expression AST.

Grammar, lowest to highest binding power::

    expression → equality
    equality   → comparison ( ( "!=" | "==" ) comparison )*
    comparison → term ( ( ">" | ">=" | "<" | "<=" ) term )*
    term       → factor ( ( "-" | "+" ) factor )*
    factor     → unary ( ( "/" | "*" ) unary )*
    unary      → ( "!" | "-" ) unary | primary
    primary    → NUMBER | STRING | "true" | "false" | "nil" | "(" expression ")"
"""

from __future__ import annotations

from collections.abc import Callable

from loxcore.ast import Binary, Expr, Grouping, Literal, Unary
from loxcore.errors import ParseError
from loxcore.lexer import lex
from loxcore.tokens import Token, TokenType

_EQUALITY = (TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL)
_COMPARISON = (
    TokenType.GREATER,
    TokenType.GREATER_EQUAL,
    TokenType.LESS,
    TokenType.LESS_EQUAL,
)
_TERM = (TokenType.MINUS, TokenType.PLUS)
_FACTOR = (TokenType.SLASH, TokenType.STAR)
_UNARY = (TokenType.BANG, TokenType.MINUS)

# Deepest expression tree the parser will build; evaluation and printing recurse per level
MAX_DEPTH = 200

# Tokens that begin a declaration or statement; synchronize() stops before them
_STATEMENT_START = frozenset(
    {
        TokenType.CLASS,
        TokenType.FUN,
        TokenType.VAR,
        TokenType.FOR,
        TokenType.IF,
        TokenType.WHILE,
        TokenType.PRINT,
        TokenType.RETURN,
    }
)


class Parser:
    """Recursive descent parser for Lox token streams."""

    def __init__(self, tokens: list[Token], source: str = "") -> None:
        if not tokens or tokens[-1].type != TokenType.EOF:
            raise ValueError("token stream must end with an EOF token")
        self._tokens = tokens
        self._source = source
        self._pos = 0
        # Height of the subtree most recently returned by a grammar rule
        self._height = 0

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def _peek(self) -> Token:
        return self._tokens[self._pos]

    def _previous(self) -> Token:
        return self._tokens[self._pos - 1]

    def _at_eof(self) -> bool:
        return self._peek().type == TokenType.EOF

    def _advance(self) -> Token:
        if not self._at_eof():
            self._pos += 1
        return self._previous()

    def _check(self, tt: TokenType) -> bool:
        if self._at_eof():
            return False
        return self._peek().type == tt

    def _match(self, *types: TokenType) -> bool:
        for tt in types:
            if self._check(tt):
                self._advance()
                return True
        return False

    def _consume(self, tt: TokenType, message: str) -> Token:
        if self._check(tt):
            return self._advance()
        raise self._error(message, self._peek())

    def _error(self, message: str, tok: Token) -> ParseError:
        return ParseError(message, tok.position, self._source)

    def _nested(self, expr: Expr, tok: Token) -> Expr:
        """Wrap one level around the last subtree, enforcing MAX_DEPTH."""
        self._height += 1
        if self._height > MAX_DEPTH:
            raise self._error("expression nested too deeply", tok)
        return expr

    def synchronize(self) -> None:
        """Discard tokens until a likely statement boundary.

        Stops just after a ';' or just before a keyword that starts a
        declaration or statement. Used by statement-level error recovery.
        """
        self._advance()

        while not self._at_eof():
            if self._previous().type == TokenType.SEMICOLON:
                return
            if self._peek().type in _STATEMENT_START:
                return
            self._advance()

    # ------------------------------------------------------------------
    # Grammar rules
    # ------------------------------------------------------------------

    def parse(self) -> Expr:
        """Parse a single expression; tokens after it are left unread."""
        try:
            return self._expression()
        except RecursionError as exc:
            raise self._error("expression nested too deeply", self._peek()) from exc

    def _expression(self) -> Expr:
        return self._equality()

    def _binary(self, operand: Callable[[], Expr], operators: tuple[TokenType, ...]) -> Expr:
        """Left-associative loop shared by every binary precedence level."""
        expr = operand()
        height = self._height
        while self._match(*operators):
            operator = self._previous()
            right = operand()
            self._height = max(height, self._height)
            expr = self._nested(Binary(expr, operator, right), operator)
            height = self._height
        return expr

    def _equality(self) -> Expr:
        return self._binary(self._comparison, _EQUALITY)

    def _comparison(self) -> Expr:
        return self._binary(self._term, _COMPARISON)

    def _term(self) -> Expr:
        return self._binary(self._factor, _TERM)

    def _factor(self) -> Expr:
        return self._binary(self._unary, _FACTOR)

    def _unary(self) -> Expr:
        if self._match(*_UNARY):
            operator = self._previous()
            return self._nested(Unary(operator, self._unary()), operator)
        return self._primary()

    def _primary(self) -> Expr:
        self._height = 1
        if self._match(TokenType.FALSE):
            return Literal(False)
        if self._match(TokenType.TRUE):
            return Literal(True)
        if self._match(TokenType.NIL):
            return Literal(None)

        if self._match(TokenType.NUMBER):
            tok = self._previous()
            try:
                return Literal(float(tok.lexeme))
            except (TypeError, ValueError) as exc:
                raise self._error(f"invalid number literal '{tok.lexeme}': {exc}", tok) from exc

        if self._match(TokenType.STRING):
            return Literal(self._previous().lexeme)

        if self._match(TokenType.LEFT_PAREN):
            paren = self._previous()
            expr = self._expression()
            self._consume(TokenType.RIGHT_PAREN, "expected ')' after expression")
            return self._nested(Grouping(expr), paren)

        raise self._error("invalid expression", self._peek())


def parse(tokens: list[Token], source: str = "") -> Expr:
    """Parse one expression from a token stream.

    *source* is only used to show context in error messages.
    """
    return Parser(tokens, source).parse()


def parse_source(source: str) -> Expr:
    """Convenience function: lex and parse source text."""
    return parse(lex(source), source)
