#!/usr/bin/env python3
"""Tests for ExpenseDate primitive type and date helpers."""

from datetime import date

import pytest

from expense_tracker.core.dates import ExpenseDate, current_month_key, is_valid_iso_date, month_label


class TestExpenseDate:
    def test_from_string(self):
        assert ExpenseDate.from_string("2024-01-15").date == date(2024, 1, 15)

    def test_from_string_custom_format(self):
        assert ExpenseDate.from_string("01/15/2024", date_format="%m/%d/%Y").date == date(2024, 1, 15)

    def test_formats(self):
        d = ExpenseDate(date=date(2024, 1, 5))
        assert d.to_iso_string() == "2024-01-05"
        assert d.month_key == "2024-01"
        assert d.long_label == "January 5, 2024"
        assert str(d) == "2024-01-05"

    def test_ordering(self):
        assert ExpenseDate(date=date(2024, 1, 1)) < ExpenseDate(date=date(2024, 1, 2))


class TestDateHelpers:
    @pytest.mark.parametrize(
        "month_key,label",
        [("2024-01", "Jan 2024"), ("2023-12", "Dec 2023"), ("2024-09", "Sep 2024")],
    )
    def test_month_label(self, month_key, label):
        assert month_label(month_key) == label

    def test_current_month_key(self):
        assert current_month_key(date(2024, 3, 31)) == "2024-03"

    @pytest.mark.parametrize(
        "value,valid",
        [("2024-02-29", True), ("2023-02-29", False), ("2024-13-01", False), ("2024-1-5", False), ("", False)],
    )
    def test_is_valid_iso_date(self, value, valid):
        assert is_valid_iso_date(value) is valid
