"""Runtime values and their display form.

Lox values map directly onto Python objects: Boolean is ``bool``, Number is
``float``, String is ``str`` and Nil is ``None``.
"""

from __future__ import annotations

import math
from decimal import Decimal
from typing import TypeAlias

Value: TypeAlias = bool | float | str | None


def is_number(value: Value) -> bool:
    """Return True for Lox numbers (``bool`` is an ``int`` subclass, exclude it)."""
    return isinstance(value, float)


def is_string(value: Value) -> bool:
    return isinstance(value, str)


def is_boolean(value: Value) -> bool:
    return isinstance(value, bool)


def type_name(value: Value) -> str:
    """Lox kind name used in error messages."""
    if value is None:
        return "nil"
    if is_boolean(value):
        return "boolean"
    if is_number(value):
        return "number"
    return "string"


def format_number(value: float) -> str:
    """Shortest round-trip decimal, without exponent or a trailing '.0'."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    # repr() gives the shortest round-trip digits; normalize() drops the ".0"
    return format(Decimal(repr(value)).normalize(), "f")


def stringify(value: Value) -> str:
    """Render a value the way the REPL shows it."""
    if value is None:
        return "nil"
    if value is True:
        return "true"
    if value is False:
        return "false"
    if is_number(value):
        return format_number(value)
    return value
