#!/usr/bin/env python3
"""Tests for DataFrame conversion and weekly rollups."""

import pandas as pd
import pytest

from expense_tracker.analysis.frames import FRAME_COLUMNS, expenses_to_dataframe, weekly_totals
from expense_tracker.core.money import Money
from tests.fixtures.synthetic_data import make_expense


@pytest.mark.unit
class TestExpensesToDataFrame:
    def test_columns_and_types(self, scenario_expenses):
        df = expenses_to_dataframe(scenario_expenses)

        assert list(df.columns) == FRAME_COLUMNS
        assert pd.api.types.is_datetime64_any_dtype(df["date"])
        assert df["amount_cents"].tolist() == [1250, 10000]

    def test_sorted_by_date(self, scenario_expenses):
        df = expenses_to_dataframe(list(reversed(scenario_expenses)))

        assert df["id"].tolist() == ["exp-1", "exp-2"]

    def test_empty(self):
        df = expenses_to_dataframe([])

        assert df.empty
        assert list(df.columns) == FRAME_COLUMNS


@pytest.mark.unit
class TestWeeklyTotals:
    def test_weeks_start_on_monday_and_gaps_are_zero(self, scenario_expenses):
        weeks = weekly_totals(scenario_expenses)

        assert [w.week_start for w in weeks] == [
            "2024-01-01",
            "2024-01-08",
            "2024-01-15",
            "2024-01-22",
            "2024-01-29",
            "2024-02-05",
        ]
        assert weeks[0].total == Money.from_cents(1250)
        assert weeks[0].count == 1
        assert weeks[2].total == Money.zero()
        assert weeks[2].count == 0
        assert weeks[-1].total == Money.from_cents(10000)

    def test_sunday_closes_the_week(self):
        expenses = [
            make_expense("2024-01-01", "Food", 1, "monday"),
            make_expense("2024-01-07", "Food", 2, "sunday"),
            make_expense("2024-01-08", "Food", 4, "next monday"),
        ]

        weeks = weekly_totals(expenses)

        assert [(w.week_start, w.total.to_cents(), w.count) for w in weeks] == [
            ("2024-01-01", 300, 2),
            ("2024-01-08", 400, 1),
        ]

    def test_totals_match_overall_sum(self, sample_expenses):
        weeks = weekly_totals(sample_expenses)

        assert Money.sum(w.total for w in weeks) == Money.sum(e.amount for e in sample_expenses)
        assert sum(w.count for w in weeks) == len(sample_expenses)

    def test_empty(self):
        assert weekly_totals([]) == []
