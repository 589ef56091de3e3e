"""
Core Utilities Package

Shared primitives and infrastructure used by the analysis and export packages:
- Integer-cent currency handling (Money, currency helpers)
- Expense records and the closed category enumeration
- Environment-based configuration and logging setup
- Persistence protocols and the shared collection-store mixin
- Typed errors
"""

from .config import Config, Environment, get_config, get_data_dir, get_output_dir, reload_config
from .currency import cents_to_fixed_str, dollars_to_cents, format_currency, parse_dollars_to_cents
from .dates import ExpenseDate, month_label
from .errors import (
    ExpenseTrackerError,
    IntegrationNotConnectedError,
    StorageReadError,
    StorageWriteError,
    UnknownTemplateError,
    UnsupportedFormatError,
    ValidationError,
)
from .models import (
    CATEGORY_COLORS,
    CATEGORY_ICONS,
    CATEGORY_ORDER,
    Category,
    CategoryTotal,
    Expense,
    MonthlyTotal,
    WeeklyTotal,
    validate_expense_input,
)
from .money import Money

__all__ = [
    "CATEGORY_COLORS",
    "CATEGORY_ICONS",
    "CATEGORY_ORDER",
    "Category",
    "CategoryTotal",
    "Config",
    "Environment",
    "Expense",
    "ExpenseDate",
    "ExpenseTrackerError",
    "IntegrationNotConnectedError",
    "Money",
    "MonthlyTotal",
    "StorageReadError",
    "StorageWriteError",
    "UnknownTemplateError",
    "UnsupportedFormatError",
    "ValidationError",
    "WeeklyTotal",
    "cents_to_fixed_str",
    "dollars_to_cents",
    "format_currency",
    "get_config",
    "get_data_dir",
    "get_output_dir",
    "month_label",
    "parse_dollars_to_cents",
    "reload_config",
    "validate_expense_input",
]
