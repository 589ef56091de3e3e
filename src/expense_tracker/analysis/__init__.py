"""
Expense Analysis Package

Derived spending figures for dashboards and reports.

Key Components:
- aggregation: category and monthly rollups, summary-card reductions
- frames: pandas adapters and weekly rollups
"""

from .aggregation import (
    average_expense,
    category_totals,
    current_month_spending,
    dashboard_summary,
    monthly_totals,
    total_spending,
)
from .frames import expenses_to_dataframe, weekly_totals

__all__ = [
    "average_expense",
    "category_totals",
    "current_month_spending",
    "dashboard_summary",
    "expenses_to_dataframe",
    "monthly_totals",
    "total_spending",
    "weekly_totals",
]
