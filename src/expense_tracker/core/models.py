#!/usr/bin/env python3
"""
Core Data Models for the Expense Tracker

Expense records, the closed category enumeration, and the derived totals that
feed dashboards and reports.
"""

import secrets
import time
from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Union

from .currency import MAX_AMOUNT_CENTS, fractional_digits
from .dates import ExpenseDate, is_valid_iso_date
from .errors import ValidationError
from .money import Money

MAX_DESCRIPTION_LENGTH = 200


class Category(Enum):
    """Expense categories. Declaration order is the canonical display order."""

    FOOD = "Food"
    TRANSPORTATION = "Transportation"
    ENTERTAINMENT = "Entertainment"
    SHOPPING = "Shopping"
    BILLS = "Bills"
    OTHER = "Other"

    @classmethod
    def parse(cls, value: Union[str, "Category"]) -> "Category":
        """
        Parse a category from its display name (case-insensitive).

        Raises:
            ValidationError: If the name is not in the enumeration
        """
        if isinstance(value, Category):
            return value
        for category in cls:
            if category.value.lower() == str(value).strip().lower():
                return category
        raise ValidationError(f"Invalid category: {value!r}", field="category")

    @property
    def rank(self) -> int:
        """Position in the canonical order (used as a stable tiebreak)."""
        return CATEGORY_ORDER.index(self)


CATEGORY_ORDER: tuple[Category, ...] = tuple(Category)

CATEGORY_COLORS: dict[Category, str] = {
    Category.FOOD: "#f97316",
    Category.TRANSPORTATION: "#3b82f6",
    Category.ENTERTAINMENT: "#a855f7",
    Category.SHOPPING: "#ec4899",
    Category.BILLS: "#eab308",
    Category.OTHER: "#6b7280",
}

CATEGORY_ICONS: dict[Category, str] = {
    Category.FOOD: "\U0001f37d️",
    Category.TRANSPORTATION: "\U0001f697",
    Category.ENTERTAINMENT: "\U0001f3ac",
    Category.SHOPPING: "\U0001f6cd️",
    Category.BILLS: "\U0001f4c4",
    Category.OTHER: "\U0001f4cc",
}


def generate_id() -> str:
    """Generate an opaque, time-prefixed unique identifier."""
    return f"{int(time.time() * 1000):x}{secrets.token_hex(4)}"


def utc_timestamp(now: datetime | None = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a Z suffix."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


@dataclass
class Expense:
    """
    A single expense record.

    Records are edited in place by the entry layer; exports always operate on a
    snapshot list handed in by the caller.
    """

    id: str
    amount: Money
    category: Category
    description: str
    date: str  # YYYY-MM-DD
    created_at: str  # ISO-8601 timestamp

    @property
    def month_key(self) -> str:
        """YYYY-MM prefix of the expense date."""
        return self.date[:7]

    @classmethod
    def create(
        cls,
        amount: Union[int, float, str, Decimal],
        category: Union[str, Category],
        description: str,
        date_str: str,
        now: datetime | None = None,
    ) -> "Expense":
        """
        Validate entry-time input and build a new expense.

        Raises:
            ValidationError: If any field violates the entry rules
        """
        now = now or datetime.now(timezone.utc)
        money, parsed_category, clean_description = validate_expense_input(
            amount, category, description, date_str, today=now.date()
        )
        return cls(
            id=generate_id(),
            amount=money,
            category=parsed_category,
            description=clean_description,
            date=date_str,
            created_at=utc_timestamp(now),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to the persisted dictionary shape."""
        return {
            "id": self.id,
            "amount": self.amount.to_float(),
            "category": self.category.value,
            "description": self.description,
            "date": self.date,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Expense":
        """Create Expense from its persisted dictionary shape."""
        return cls(
            id=str(data["id"]),
            amount=Money.from_dollars(data["amount"]),
            category=Category.parse(data["category"]),
            description=data["description"],
            date=data["date"],
            created_at=data.get("createdAt", ""),
        )


@dataclass(frozen=True)
class CategoryTotal:
    """Spending rolled up for one category."""

    category: Category
    total: Money
    count: int
    percentage: float


@dataclass(frozen=True)
class MonthlyTotal:
    """Spending rolled up for one YYYY-MM month."""

    month: str
    label: str
    total: Money


@dataclass(frozen=True)
class WeeklyTotal:
    """Spending rolled up for one Monday-started week."""

    week_start: str
    total: Money
    count: int


def validate_expense_input(
    amount: Union[int, float, str, Decimal],
    category: Union[str, Category],
    description: str,
    date_str: str,
    today: date | None = None,
) -> tuple[Money, Category, str]:
    """
    Validate raw expense fields as entered by a user.

    Returns:
        Tuple of (amount, category, trimmed description)

    Raises:
        ValidationError: On the first invalid field
    """
    try:
        digits = fractional_digits(amount)
        money = Money.from_dollars(amount)
    except (ValueError, InvalidOperation) as e:
        raise ValidationError(f"Amount is not a number: {amount!r}", field="amount") from e
    if digits > 2:
        raise ValidationError("Amount may have at most 2 decimal places", field="amount")
    if money.cents <= 0:
        raise ValidationError("Amount must be greater than zero", field="amount")
    if money.cents > MAX_AMOUNT_CENTS:
        raise ValidationError("Amount must not exceed $999,999.99", field="amount")

    clean_description = (description or "").strip()
    if not clean_description:
        raise ValidationError("Description is required", field="description")
    if len(clean_description) > MAX_DESCRIPTION_LENGTH:
        raise ValidationError(
            f"Description must be at most {MAX_DESCRIPTION_LENGTH} characters", field="description"
        )

    parsed_category = Category.parse(category)

    if not date_str:
        raise ValidationError("Date is required", field="date")
    if not is_valid_iso_date(date_str):
        raise ValidationError(f"Invalid date: {date_str!r}", field="date")
    if ExpenseDate.from_string(date_str).date > (today or date.today()):
        raise ValidationError("Date cannot be in the future", field="date")

    return money, parsed_category, clean_description
