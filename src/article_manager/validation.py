"""
Input validation predicates.

Every line typed at a numeric prompt passes through one of these before it
is converted and handed to the store.
"""
from __future__ import annotations

import re

NUMERIC_PATTERN = re.compile(r"^-?\d+(\.\d+)?$", re.ASCII)
INTEGER_PATTERN = re.compile(r"^-?\d+$", re.ASCII)


def is_numeric(value: str) -> bool:
    """Check if value is a signed integer or decimal number.

    No exponent, no leading plus sign and no thousands separators.

    Examples:
        >>> is_numeric("3.14")
        True
        >>> is_numeric("-5")
        True
        >>> is_numeric("1.2.3")
        False
        >>> is_numeric("+1")
        False
    """
    if not isinstance(value, str):
        return False
    return NUMERIC_PATTERN.fullmatch(value) is not None


def is_integer(value: str) -> bool:
    """Check if value is a signed integer (no decimal point).

    Examples:
        >>> is_integer("42")
        True
        >>> is_integer("4.2")
        False
    """
    if not isinstance(value, str):
        return False
    return INTEGER_PATTERN.fullmatch(value) is not None


def is_in_range(value: int, valid: range) -> bool:
    """Check if a menu selection is one of the valid choices."""
    return value in valid
