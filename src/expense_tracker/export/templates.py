#!/usr/bin/env python3
"""
Export Templates

A template is a named, pure selection predicate plus a default format. The
export engine looks templates up by id and never inspects the predicate, so new
templates only need a register_template() call.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import date

from ..core.dates import current_month_key
from ..core.errors import UnknownTemplateError
from ..core.models import Category, Expense
from .generators import ExportFormat

ExpensePredicate = Callable[[Sequence[Expense]], list[Expense]]

TAX_DEDUCTIBLE_CATEGORIES = frozenset({Category.TRANSPORTATION, Category.BILLS, Category.FOOD})


@dataclass(frozen=True)
class ExportTemplate:
    """A named export preset."""

    id: str
    name: str
    description: str
    format: ExportFormat
    predicate: ExpensePredicate

    def select(self, expenses: Sequence[Expense]) -> list[Expense]:
        return list(self.predicate(expenses))


def all_expenses(expenses: Sequence[Expense]) -> list[Expense]:
    return list(expenses)


def tax_deductible(expenses: Sequence[Expense]) -> list[Expense]:
    return [e for e in expenses if e.category in TAX_DEDUCTIBLE_CATEGORIES]


def current_month_only(today: date | None = None) -> ExpensePredicate:
    """
    Build a predicate keeping only expenses dated in the current month.

    With today=None the month is resolved each time the predicate runs.
    """

    def predicate(expenses: Sequence[Expense]) -> list[Expense]:
        month = current_month_key(today)
        return [e for e in expenses if e.date.startswith(month)]

    return predicate


_TEMPLATES: dict[str, ExportTemplate] = {}


def register_template(template: ExportTemplate, replace: bool = False) -> None:
    """
    Add a template to the registry.

    Raises:
        ValueError: If the id is taken and replace is False
    """
    if template.id in _TEMPLATES and not replace:
        raise ValueError(f"Export template already registered: {template.id}")
    _TEMPLATES[template.id] = template


def unregister_template(template_id: str) -> None:
    _TEMPLATES.pop(template_id, None)


def get_template(template_id: str) -> ExportTemplate:
    """
    Look up a registered template.

    Raises:
        UnknownTemplateError: If no template has this id
    """
    try:
        return _TEMPLATES[template_id]
    except KeyError:
        raise UnknownTemplateError(template_id) from None


def list_templates() -> list[ExportTemplate]:
    """Registered templates in registration order."""
    return list(_TEMPLATES.values())


for _template in (
    ExportTemplate(
        id="full-export",
        name="Full Export",
        description="All expenses with every detail",
        format=ExportFormat.CSV,
        predicate=all_expenses,
    ),
    ExportTemplate(
        id="tax-report",
        name="Tax Report",
        description="Deductible categories formatted for tax filing",
        format=ExportFormat.PDF,
        predicate=tax_deductible,
    ),
    ExportTemplate(
        id="monthly-summary",
        name="Monthly Summary",
        description="Current month expenses grouped by week",
        format=ExportFormat.CSV,
        predicate=current_month_only(),
    ),
    ExportTemplate(
        id="category-analysis",
        name="Category Analysis",
        description="Spending breakdown by category with totals",
        format=ExportFormat.JSON,
        predicate=all_expenses,
    ),
):
    register_template(_template)
