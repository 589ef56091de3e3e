"""
Expense Tracker - Personal Expense Export Engine

Aggregation, filtering and export of personal expense records, with a
persisted export history, scheduled backups, simulated third-party sync and
shareable links.

Domain Packages:
- core: Money, dates, expense models, configuration, persistence protocols
- analysis: Category, monthly and weekly spending rollups
- export: Format generators, export orchestration, history, schedules, sharing
- cli: Command-line interface

Example Usage:
    from expense_tracker.export import ExportEngine, ExportOptions
    from expense_tracker.analysis import category_totals

    result = ExportEngine().run_export(expenses, ExportOptions(format="csv"))
"""

__version__ = "0.1.0"
__author__ = "Expense Tracker Developers"

from .core.config import Environment, get_config
from .core.models import Category, Expense
from .core.money import Money

__all__ = [
    "Category",
    "Environment",
    "Expense",
    "Money",
    "get_config",
]
