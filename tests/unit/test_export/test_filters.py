#!/usr/bin/env python3
"""Tests for export and list-view filtering."""

import pytest

from expense_tracker.core.errors import ValidationError
from expense_tracker.core.models import CATEGORY_ORDER, Category
from expense_tracker.export.filters import ExpenseFilters, filter_expenses, filter_for_export, sort_for_export
from tests.fixtures.synthetic_data import make_expense


@pytest.mark.unit
class TestFilterForExport:
    """Export selection: inclusive date bounds plus a category set."""

    def test_no_criteria_keeps_everything(self, sample_expenses):
        assert filter_for_export(sample_expenses) == sample_expenses

    def test_date_bounds_are_inclusive(self, scenario_expenses):
        assert filter_for_export(scenario_expenses, date_from="2024-01-05", date_to="2024-01-05") == [
            scenario_expenses[0]
        ]
        assert filter_for_export(scenario_expenses, date_from="2024-02-01") == [scenario_expenses[1]]
        assert filter_for_export(scenario_expenses, date_to="2024-02-09") == [scenario_expenses[0]]

    def test_inverted_range_selects_nothing(self, scenario_expenses):
        assert filter_for_export(scenario_expenses, date_from="2024-03-01", date_to="2024-01-01") == []

    def test_category_subset(self, scenario_expenses):
        assert filter_for_export(scenario_expenses, categories=["Bills"]) == [scenario_expenses[1]]
        assert filter_for_export(scenario_expenses, categories=[Category.SHOPPING]) == []

    def test_complete_category_set_applies_no_filter(self, sample_expenses):
        assert filter_for_export(sample_expenses, categories=CATEGORY_ORDER) == sample_expenses

    @pytest.mark.parametrize(
        "date_from,date_to",
        [("", ""), ("2024-03-01", ""), ("", "2024-05-31"), ("2024-02-01", "2024-04-30")],
    )
    def test_empty_and_complete_category_sets_agree(self, sample_expenses, date_from, date_to):
        assert filter_for_export(sample_expenses, date_from, date_to, ()) == filter_for_export(
            sample_expenses, date_from, date_to, CATEGORY_ORDER
        )

    def test_preserves_input_order(self, sample_expenses):
        selected = filter_for_export(sample_expenses, categories=["Food", "Other"])

        positions = [sample_expenses.index(e) for e in selected]
        assert positions == sorted(positions)

    def test_unknown_category_is_rejected(self, scenario_expenses):
        with pytest.raises(ValidationError):
            filter_for_export(scenario_expenses, categories=["Travel"])


@pytest.mark.unit
class TestFilterExpenses:
    """List-view filtering."""

    def test_search_is_case_insensitive(self, scenario_expenses):
        assert filter_expenses(scenario_expenses, ExpenseFilters(search="ELECTRIC")) == [scenario_expenses[1]]

    def test_all_sentinel(self, scenario_expenses):
        assert filter_expenses(scenario_expenses, ExpenseFilters(category="All")) == scenario_expenses
        assert filter_expenses(scenario_expenses, ExpenseFilters(category="Food")) == [scenario_expenses[0]]

    def test_criteria_combine(self, scenario_expenses):
        filters = ExpenseFilters(search="lunch", category="Food", date_from="2024-02-01")

        assert filter_expenses(scenario_expenses, filters) == []


@pytest.mark.unit
class TestSortForExport:
    def test_most_recent_first(self, scenario_expenses):
        assert [e.id for e in sort_for_export(scenario_expenses)] == ["exp-2", "exp-1"]

    def test_same_date_keeps_input_order(self):
        expenses = [
            make_expense("2024-01-01", "Food", 1, "older", expense_id="a"),
            make_expense("2024-01-02", "Food", 1, "first", expense_id="b"),
            make_expense("2024-01-02", "Food", 1, "second", expense_id="c"),
        ]

        assert [e.id for e in sort_for_export(expenses)] == ["b", "c", "a"]
