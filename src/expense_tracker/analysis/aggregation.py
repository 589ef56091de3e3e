#!/usr/bin/env python3
"""
Expense Aggregation Module

Pure reductions over expense lists that feed the dashboard cards, charts and
the category rollup of exported reports. All sums are exact (integer cents).
"""

from collections import defaultdict
from collections.abc import Sequence
from datetime import date
from typing import Any

from ..core.dates import current_month_key, month_label
from ..core.models import Category, CategoryTotal, Expense, MonthlyTotal
from ..core.money import Money

MONTHLY_WINDOW = 6


def total_spending(expenses: Sequence[Expense]) -> Money:
    """Sum of all expense amounts."""
    return Money.sum(e.amount for e in expenses)


def current_month_spending(expenses: Sequence[Expense], today: date | None = None) -> Money:
    """Sum of expenses dated in the current (or given) calendar month."""
    month = current_month_key(today)
    return Money.sum(e.amount for e in expenses if e.date.startswith(month))


def average_expense(expenses: Sequence[Expense]) -> float:
    """Mean expense amount in dollars; 0.0 for an empty collection."""
    if not expenses:
        return 0.0
    return total_spending(expenses).to_cents() / len(expenses) / 100


def category_totals(expenses: Sequence[Expense]) -> list[CategoryTotal]:
    """
    Roll expenses up by category.

    Ordered by total descending. Equal totals fall back to the canonical
    category order, so the result is independent of input order.

    Args:
        expenses: Expense records in any order

    Returns:
        One CategoryTotal per category that has at least one expense
    """
    cents: dict[Category, int] = defaultdict(int)
    counts: dict[Category, int] = defaultdict(int)
    for expense in expenses:
        cents[expense.category] += expense.amount.to_cents()
        counts[expense.category] += 1

    grand_total = sum(cents.values())

    totals = [
        CategoryTotal(
            category=category,
            total=Money.from_cents(amount),
            count=counts[category],
            percentage=(amount / grand_total) * 100 if grand_total > 0 else 0.0,
        )
        for category, amount in cents.items()
    ]
    totals.sort(key=lambda t: (-t.total.to_cents(), t.category.rank))
    return totals


def monthly_totals(expenses: Sequence[Expense], limit: int = MONTHLY_WINDOW) -> list[MonthlyTotal]:
    """
    Roll expenses up by YYYY-MM month.

    Only months with at least one expense appear; gaps are not filled in.
    The result is ascending and restricted to the most recent `limit` months.
    """
    cents: dict[str, int] = defaultdict(int)
    for expense in expenses:
        cents[expense.month_key] += expense.amount.to_cents()

    months = sorted(cents)[-limit:] if limit > 0 else []
    return [MonthlyTotal(month=m, label=month_label(m), total=Money.from_cents(cents[m])) for m in months]


def dashboard_summary(expenses: Sequence[Expense], today: date | None = None) -> dict[str, Any]:
    """Values shown on the dashboard summary cards."""
    return {
        "total_spending": total_spending(expenses),
        "current_month_spending": current_month_spending(expenses, today),
        "average_expense": average_expense(expenses),
        "expense_count": len(expenses),
    }
