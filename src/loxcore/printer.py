"""Fully parenthesized prefix rendering of an expression AST."""

from __future__ import annotations

from loxcore.ast import Binary, Expr, Grouping, Literal, Unary
from loxcore.values import stringify


def print_ast(expr: Expr) -> str:
    """Render *expr* as an S-expression, e.g. ``(* (- 123) (group 45.67))``."""
    match expr:
        case Literal(value=value):
            return stringify(value)
        case Grouping(expression=inner):
            return _parenthesize("group", inner)
        case Unary(operator=operator, right=right):
            return _parenthesize(operator.lexeme or "", right)
        case Binary(left=left, operator=operator, right=right):
            return _parenthesize(operator.lexeme or "", left, right)
        case _:
            # Reserved node kinds have no rendering yet
            return stringify(None)


def _parenthesize(name: str, *exprs: Expr) -> str:
    parts = [name, *(print_ast(e) for e in exprs)]
    return f"({' '.join(parts)})"
