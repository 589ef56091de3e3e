#!/usr/bin/env python3
"""
Expense Filtering

Two predicates share the same date semantics (inclusive ISO bounds, empty
string = unbounded) but differ in how they treat "no category selection":

- filter_for_export: an empty category set, or one covering the whole
  enumeration, applies no category filter.
- filter_expenses (list view): the explicit "All" sentinel applies no category
  filter; it also supports a case-insensitive description search.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from ..core.models import CATEGORY_ORDER, Category, Expense

ALL_CATEGORIES = "All"


def _in_date_range(expense: Expense, date_from: str, date_to: str) -> bool:
    if date_from and expense.date < date_from:
        return False
    if date_to and expense.date > date_to:
        return False
    return True


def filter_for_export(
    expenses: Sequence[Expense],
    date_from: str = "",
    date_to: str = "",
    categories: Iterable[Category | str] = (),
) -> list[Expense]:
    """
    Select the expenses an export should include.

    Args:
        expenses: Candidate expenses, in any order
        date_from: Inclusive lower bound (YYYY-MM-DD), "" for unbounded
        date_to: Inclusive upper bound (YYYY-MM-DD), "" for unbounded
        categories: Allowed categories; empty or complete means "all"

    Returns:
        Matching expenses in their original relative order
    """
    allowed = {Category.parse(c) for c in categories}
    filter_categories = 0 < len(allowed) < len(CATEGORY_ORDER)

    return [
        e
        for e in expenses
        if _in_date_range(e, date_from, date_to) and (not filter_categories or e.category in allowed)
    ]


@dataclass(frozen=True)
class ExpenseFilters:
    """List-view filter state."""

    search: str = ""
    category: str = ALL_CATEGORIES
    date_from: str = ""
    date_to: str = ""


def filter_expenses(expenses: Sequence[Expense], filters: ExpenseFilters) -> list[Expense]:
    """Apply list-view filters: description search, category sentinel, date range."""
    needle = filters.search.strip().lower()
    category = None if filters.category == ALL_CATEGORIES else Category.parse(filters.category)

    return [
        e
        for e in expenses
        if (not needle or needle in e.description.lower())
        and (category is None or e.category == category)
        and _in_date_range(e, filters.date_from, filters.date_to)
    ]


def sort_for_export(expenses: Iterable[Expense]) -> list[Expense]:
    """Most recent first; expenses sharing a date keep their input order."""
    return sorted(expenses, key=lambda e: e.date, reverse=True)
