#!/usr/bin/env python3
"""
ExpenseDate Primitive Type

Immutable date wrapper with the formats used by expense records and reports.
Expense dates are stored as ISO strings, so lexical order equals chronological
order; this wrapper is used wherever a real calendar date is needed.
"""

from dataclasses import dataclass
from datetime import date, datetime

MONTH_ABBREVIATIONS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


@dataclass(frozen=True, order=True)
class ExpenseDate:
    """Immutable expense date wrapper with consistent formatting."""

    date: date

    @classmethod
    def from_string(cls, date_str: str, date_format: str = "%Y-%m-%d") -> "ExpenseDate":
        """
        Parse from string in specified format.

        Raises:
            ValueError: If the string is not a valid calendar date
        """
        return cls(date=datetime.strptime(date_str, date_format).date())

    @classmethod
    def today(cls) -> "ExpenseDate":
        """Get today's date."""
        return cls(date=date.today())

    def to_iso_string(self) -> str:
        """Format as YYYY-MM-DD."""
        return self.date.isoformat()

    @property
    def month_key(self) -> str:
        """Format as YYYY-MM."""
        return f"{self.date.year:04d}-{self.date.month:02d}"

    @property
    def long_label(self) -> str:
        """Format as 'January 5, 2024'."""
        return f"{MONTH_NAMES[self.date.month - 1]} {self.date.day}, {self.date.year}"

    def __str__(self) -> str:
        return self.to_iso_string()

    def __repr__(self) -> str:
        return f"ExpenseDate(date={self.date!r})"


def month_label(month_key: str) -> str:
    """
    Convert a YYYY-MM month key to a short label.

    Example:
        month_label("2024-01") -> "Jan 2024"
    """
    year, month = month_key.split("-")
    return f"{MONTH_ABBREVIATIONS[int(month) - 1]} {int(year)}"


def current_month_key(today: date | None = None) -> str:
    """Get the YYYY-MM key of the current (or given) month."""
    return ExpenseDate(date=today or date.today()).month_key


def is_valid_iso_date(date_str: str) -> bool:
    """Check whether a string is a real calendar date in YYYY-MM-DD form."""
    if len(date_str) != 10:
        return False
    try:
        ExpenseDate.from_string(date_str)
    except ValueError:
        return False
    return True
