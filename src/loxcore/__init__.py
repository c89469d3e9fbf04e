"""Lexer, parser and tree-walking evaluator for Lox expressions."""

from __future__ import annotations

__version__ = "0.1.0"


def run(source: str, strict: bool = False) -> str:
    """Lex, parse and evaluate source text, returning the value's display form."""
    from loxcore.interpreter import evaluate
    from loxcore.parser import parse_source
    from loxcore.values import stringify

    expr = parse_source(source)
    return stringify(evaluate(expr, strict=strict, source=source))
