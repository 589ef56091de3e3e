#!/usr/bin/env python3
"""Tests for currency helpers."""

from decimal import Decimal

import pytest

from expense_tracker.core.currency import (
    cents_to_fixed_str,
    dollars_to_cents,
    format_currency,
    fractional_digits,
    parse_dollars_to_cents,
)


@pytest.mark.currency
class TestCurrencyConversion:
    def test_parse_dollars_to_cents(self):
        assert parse_dollars_to_cents("12.34") == 1234
        assert parse_dollars_to_cents("$1,234.56") == 123456
        assert parse_dollars_to_cents("12") == 1200
        assert parse_dollars_to_cents("-4.5") == -450

    def test_parse_rejects_empty_and_non_finite(self):
        with pytest.raises(ValueError):
            parse_dollars_to_cents("  ")
        with pytest.raises(ValueError):
            parse_dollars_to_cents("nan")

    def test_dollars_to_cents_rejects_bool(self):
        with pytest.raises(ValueError):
            dollars_to_cents(True)

    def test_float_repr_is_used(self):
        # 1.005 is 1.00499999... in binary; the repr is what the user typed
        assert dollars_to_cents(1.005) == 101


@pytest.mark.currency
class TestCurrencyFormatting:
    def test_cents_to_fixed_str(self):
        assert cents_to_fixed_str(0) == "0.00"
        assert cents_to_fixed_str(1250) == "12.50"
        assert cents_to_fixed_str(-5) == "-0.05"

    def test_format_currency(self):
        assert format_currency(11250) == "$112.50"
        assert format_currency(99999999) == "$999,999.99"
        assert format_currency(-4599) == "-$45.99"


@pytest.mark.currency
@pytest.mark.parametrize(
    "value,expected",
    [(12, 0), (12.5, 1), (100.0, 0), ("12.50", 1), ("12.345", 3), (Decimal("0.01"), 2)],
)
def test_fractional_digits(value, expected):
    assert fractional_digits(value) == expected
