#!/usr/bin/env python3
"""
Money Primitive Type

Immutable currency value wrapper that uses integer cents internally.
Keeps export totals exact no matter how many expenses are summed.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Union

from .currency import (
    cents_to_fixed_str,
    cents_to_float,
    dollars_to_cents,
    format_currency,
)


@dataclass(frozen=True)
class Money:
    """
    Immutable money value in cents (USD).

    Examples:
        >>> lunch = Money.from_dollars(12.5)
        >>> str(lunch)
        '$12.50'
        >>> lunch.to_fixed()
        '12.50'
        >>> (lunch + Money.from_cents(10000)).to_float()
        112.5
    """

    cents: int

    @classmethod
    def from_cents(cls, cents: int) -> "Money":
        """Create Money from cents."""
        return cls(cents=cents)

    @classmethod
    def from_dollars(cls, dollars: Union[int, float, str, Decimal]) -> "Money":
        """
        Create Money from a dollar amount.

        Args:
            dollars: Dollar amount such as 12, 12.5, "12.50" or "$1,234.56"

        Returns:
            Money object
        """
        return cls(cents=dollars_to_cents(dollars))

    @classmethod
    def zero(cls) -> "Money":
        """Zero dollars."""
        return cls(cents=0)

    @classmethod
    def sum(cls, amounts: Iterable["Money"]) -> "Money":
        """Sum an iterable of Money values (zero when empty)."""
        return cls(cents=sum(m.cents for m in amounts))

    def to_cents(self) -> int:
        """Get value in cents."""
        return self.cents

    def to_float(self) -> float:
        """Get value as dollar float (JSON numbers)."""
        return cents_to_float(self.cents)

    def to_fixed(self) -> str:
        """Get value as fixed two-decimal string (CSV)."""
        return cents_to_fixed_str(self.cents)

    def to_display(self) -> str:
        """Get value as display string with thousands separators."""
        return format_currency(self.cents)

    def __add__(self, other: "Money") -> "Money":
        return Money(cents=self.cents + other.cents)

    def __sub__(self, other: "Money") -> "Money":
        return Money(cents=self.cents - other.cents)

    def __mul__(self, scalar: int) -> "Money":
        return Money(cents=self.cents * scalar)

    def __lt__(self, other: "Money") -> bool:
        return self.cents < other.cents

    def __le__(self, other: "Money") -> bool:
        return self.cents <= other.cents

    def __gt__(self, other: "Money") -> bool:
        return self.cents > other.cents

    def __ge__(self, other: "Money") -> bool:
        return self.cents >= other.cents

    def __bool__(self) -> bool:
        return self.cents != 0

    def __str__(self) -> str:
        """Format as display string."""
        return self.to_display()

    def __repr__(self) -> str:
        return f"Money(cents={self.cents})"
