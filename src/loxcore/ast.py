"""AST node types for Lox expressions.

The node set is closed: ``Expr`` names every kind the parser, interpreter and
printer need to handle. Only ``Literal``, ``Grouping``, ``Unary`` and
``Binary`` are produced by the parser today; the remaining kinds are reserved
for statement-level parsing and evaluate to nil.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from loxcore.tokens import Token
from loxcore.values import Value


@dataclass(frozen=True, slots=True)
class Literal:
    """Constant value."""

    value: Value


@dataclass(frozen=True, slots=True)
class Grouping:
    """Parenthesized expression."""

    expression: Expr


@dataclass(frozen=True, slots=True)
class Unary:
    """Prefix operator: ! or -."""

    operator: Token
    right: Expr


@dataclass(frozen=True, slots=True)
class Binary:
    """Infix arithmetic, comparison or equality operator."""

    left: Expr
    operator: Token
    right: Expr


@dataclass(frozen=True, slots=True)
class Logical:
    left: Expr
    operator: Token
    right: Expr


@dataclass(frozen=True, slots=True)
class Assign:
    name: Token
    value: Expr


@dataclass(frozen=True, slots=True)
class Call:
    callee: Expr
    paren: Token
    arguments: tuple[Expr, ...]


@dataclass(frozen=True, slots=True)
class Get:
    object: Expr
    name: Token


@dataclass(frozen=True, slots=True)
class Set:
    object: Expr
    name: Token
    value: Expr


@dataclass(frozen=True, slots=True)
class Super:
    keyword: Token
    method: Token


@dataclass(frozen=True, slots=True)
class This:
    keyword: Token


@dataclass(frozen=True, slots=True)
class Variable:
    name: Token


Expr: TypeAlias = (
    Literal | Grouping | Unary | Binary
    | Logical | Assign | Call | Get | Set | Super | This | Variable
)
