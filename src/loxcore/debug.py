"""--debug token and AST dump to stderr."""

from __future__ import annotations

import sys
from typing import TextIO

from loxcore.ast import Binary, Expr, Grouping, Literal, Unary
from loxcore.printer import print_ast
from loxcore.tokens import Token
from loxcore.values import stringify


def dump_tokens(tokens: list[Token], *, file: TextIO = sys.stderr) -> None:
    """Print one line per token: line number, type and lexeme."""
    for tok in tokens:
        lexeme = "" if tok.lexeme is None else repr(tok.lexeme)
        line = f"{tok.position.line:>4} {tok.type.name:<14}{lexeme}"
        file.write(line.rstrip() + "\n")


def dump_ast(expr: Expr, *, file: TextIO = sys.stderr) -> None:
    """Print the S-expression form followed by an indented node tree."""
    file.write(f"{print_ast(expr)}\n")
    _dump_node(expr, 0, file)


def _indent(depth: int) -> str:
    return "  " * depth


def _dump_node(node: Expr, depth: int, f: TextIO) -> None:
    if isinstance(node, Literal):
        f.write(f"{_indent(depth)}Literal {stringify(node.value)}\n")
    elif isinstance(node, Grouping):
        f.write(f"{_indent(depth)}Grouping\n")
        _dump_node(node.expression, depth + 1, f)
    elif isinstance(node, Unary):
        f.write(f"{_indent(depth)}Unary {node.operator.lexeme}\n")
        _dump_node(node.right, depth + 1, f)
    elif isinstance(node, Binary):
        f.write(f"{_indent(depth)}Binary {node.operator.lexeme}\n")
        _dump_node(node.left, depth + 1, f)
        _dump_node(node.right, depth + 1, f)
    else:
        f.write(f"{_indent(depth)}{type(node).__name__}\n")
