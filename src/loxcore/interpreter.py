"""Tree-walking evaluator for Lox expressions."""

from __future__ import annotations

import math

from loxcore.ast import (
    Assign,
    Binary,
    Call,
    Expr,
    Get,
    Grouping,
    Literal,
    Logical,
    Set,
    Super,
    This,
    Unary,
    Variable,
)
from loxcore.errors import EvalError
from loxcore.tokens import Token, TokenType
from loxcore.values import Value, is_boolean, is_number, is_string, type_name


class Interpreter:
    """Reduce an expression to a value.

    By default evaluation never fails: an operator applied to operands it does
    not support yields nil. With ``strict=True`` the same situation raises
    EvalError instead. The interpreter keeps no state between calls.
    """

    def __init__(self, strict: bool = False, source: str = "") -> None:
        self.strict = strict
        self._source = source

    def evaluate(self, expr: Expr) -> Value:
        match expr:
            case Literal(value=value):
                return value
            case Grouping(expression=inner):
                return self.evaluate(inner)
            case Unary(operator=operator, right=right):
                return self._unary(operator, self.evaluate(right))
            case Binary(left=left, operator=operator, right=right):
                lhs = self.evaluate(left)
                rhs = self.evaluate(right)
                return self._binary(lhs, operator, rhs)
            case Logical() | Assign() | Call() | Get() | Set() | Super() | This() | Variable():
                # Reserved for statement-level support; no semantics yet.
                return None
            case _:
                raise TypeError(f"not an expression node: {type(expr).__name__}")

    # ------------------------------------------------------------------
    # Operators
    # ------------------------------------------------------------------

    def _unary(self, operator: Token, right: Value) -> Value:
        if is_number(right) and operator.type == TokenType.MINUS:
            return -right
        if is_boolean(right) and operator.type == TokenType.BANG:
            return not right
        return self._mismatch(
            f"operator '{operator.lexeme}' not supported for {type_name(right)}", operator
        )

    def _binary(self, left: Value, operator: Token, right: Value) -> Value:
        op = operator.type

        if is_number(left) and is_number(right):
            match op:
                case TokenType.MINUS:
                    return left - right
                case TokenType.PLUS:
                    return left + right
                case TokenType.STAR:
                    return left * right
                case TokenType.SLASH:
                    return _divide(left, right)
            result = _compare(left, op, right)
            if result is not None:
                return result

        elif is_string(left) and is_string(right):
            if op == TokenType.PLUS:
                return left + right
            result = _compare(left, op, right)
            if result is not None:
                return result

        kinds = f"{type_name(left)} and {type_name(right)}"
        return self._mismatch(f"operator '{operator.lexeme}' not supported for {kinds}", operator)

    def _mismatch(self, message: str, operator: Token) -> Value:
        if self.strict:
            raise EvalError(f"type mismatch: {message}", operator.position, self._source)
        return None


def _compare(left: float | str, op: TokenType, right: float | str) -> bool | None:
    """Apply an equality or comparison operator; None when *op* is neither."""
    match op:
        case TokenType.BANG_EQUAL:
            return left != right
        case TokenType.EQUAL_EQUAL:
            return left == right
        case TokenType.GREATER:
            return left > right
        case TokenType.GREATER_EQUAL:
            return left >= right
        case TokenType.LESS:
            return left < right
        case TokenType.LESS_EQUAL:
            return left <= right
    return None


def _divide(left: float, right: float) -> float:
    """IEEE 754 division: Python raises on a zero divisor, Lox does not."""
    if right != 0.0:
        return left / right
    if math.isnan(left) or left == 0.0:
        return math.nan
    # Sign of infinity follows the signs of both operands, including -0.0
    negative = (left < 0) != (math.copysign(1.0, right) < 0)
    return -math.inf if negative else math.inf


def evaluate(expr: Expr, *, strict: bool = False, source: str = "") -> Value:
    """Convenience function: evaluate an expression with a fresh interpreter."""
    return Interpreter(strict=strict, source=source).evaluate(expr)
