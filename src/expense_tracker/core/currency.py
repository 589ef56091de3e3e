#!/usr/bin/env python3
"""
Currency Conversion and Formatting Utilities

All monetary arithmetic in the expense tracker is done in integer cents.
Dollar amounts only appear at the edges: when parsing user input, when reading
persisted JSON numbers, and when rendering exported documents.

Currency Representations:
- Internal calculations use cents: 100 cents = $1.00
- Persisted and JSON-exported amounts are dollar numbers: 12.5
- CSV amounts use fixed two-decimal strings: "12.50"
- Report amounts use display strings: "$1,234.56"
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

MAX_AMOUNT_CENTS = 99_999_999  # $999,999.99


def dollars_to_cents(dollars: Union[int, float, str, Decimal]) -> int:
    """
    Convert a dollar amount to integer cents, rounding half-up.

    Floats are routed through their shortest repr so that 0.1 + 0.2 style
    artifacts never leak into the cent value.

    Args:
        dollars: Dollar amount as int, float, numeric string or Decimal

    Returns:
        Amount in cents

    Raises:
        ValueError: If the value is not numeric

    Examples:
        dollars_to_cents(12.5) -> 1250
        dollars_to_cents("100") -> 10000
        dollars_to_cents(Decimal("0.005")) -> 1
    """
    if isinstance(dollars, bool):
        raise ValueError(f"Not a monetary amount: {dollars!r}")
    if isinstance(dollars, int):
        return dollars * 100
    if isinstance(dollars, str):
        return parse_dollars_to_cents(dollars)
    try:
        value = dollars if isinstance(dollars, Decimal) else Decimal(repr(dollars))
        return int((value * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    except InvalidOperation as e:
        raise ValueError(f"Not a monetary amount: {dollars!r}") from e


def parse_dollars_to_cents(dollars_str: str) -> int:
    """
    Parse a dollar string to cents.

    Accepts an optional leading "$", thousands separators and a sign.

    Examples:
        parse_dollars_to_cents("12.34") -> 1234
        parse_dollars_to_cents("$1,234.56") -> 123456
        parse_dollars_to_cents("12.345") -> 1235
    """
    clean = dollars_str.replace("$", "").replace(",", "").strip()
    if not clean:
        raise ValueError("Empty monetary amount")
    try:
        value = Decimal(clean)
    except InvalidOperation as e:
        raise ValueError(f"Not a monetary amount: {dollars_str!r}") from e
    if not value.is_finite():
        raise ValueError(f"Not a monetary amount: {dollars_str!r}")
    return int((value * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def fractional_digits(value: Union[int, float, str, Decimal]) -> int:
    """Count the fractional digits of a numeric value as written."""
    if isinstance(value, int):
        return 0
    text = repr(value) if isinstance(value, float) else str(value)
    exponent = Decimal(text.replace("$", "").replace(",", "").strip()).normalize().as_tuple().exponent
    return -exponent if isinstance(exponent, int) and exponent < 0 else 0


def cents_to_fixed_str(cents: int) -> str:
    """
    Convert cents to a fixed two-decimal string using integer arithmetic.

    Example:
        cents_to_fixed_str(1250) -> "12.50"
        cents_to_fixed_str(-5) -> "-0.05"
    """
    sign = "-" if cents < 0 else ""
    dollars, remainder = divmod(abs(int(cents)), 100)
    return f"{sign}{dollars}.{remainder:02d}"


def cents_to_float(cents: int) -> float:
    """Convert cents to a dollar float for JSON serialization."""
    return cents / 100


def format_currency(cents: int) -> str:
    """
    Format cents as a US-dollar display string with thousands separators.

    Example:
        format_currency(123456) -> "$1,234.56"
        format_currency(-4599) -> "-$45.99"
    """
    sign = "-" if cents < 0 else ""
    dollars, remainder = divmod(abs(int(cents)), 100)
    return f"{sign}${dollars:,}.{remainder:02d}"
