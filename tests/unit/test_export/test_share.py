#!/usr/bin/env python3
"""Tests for share tokens and share URLs."""

import re

import pytest

from expense_tracker.export.share import build_share_url, decode_share_token, encode_share_token
from tests.fixtures.synthetic_data import make_expense

URL_SAFE = re.compile(r"^[A-Za-z0-9_-]+$")


@pytest.mark.export
class TestShareTokens:
    def test_token_is_url_safe_without_padding(self, sample_expenses):
        token = encode_share_token(sample_expenses, generated_at_ms=1_700_000_000_000)

        assert URL_SAFE.match(token)
        assert "=" not in token

    def test_decode_recovers_records(self, scenario_expenses):
        token = encode_share_token(scenario_expenses, generated_at_ms=1_700_000_000_000)

        payload = decode_share_token(token)

        assert payload.version == 1
        assert payload.generated_at_ms == 1_700_000_000_000
        assert [(r.date, r.category, r.amount, r.description) for r in payload.records] == [
            ("2024-01-05", "Food", 12.5, "Lunch"),
            ("2024-02-10", "Bills", 100.0, "Electric, bill"),
        ]

    def test_non_ascii_descriptions(self):
        expenses = [make_expense("2024-01-01", "Food", 4.5, "Café ☕ crème brûlée")]

        payload = decode_share_token(encode_share_token(expenses, generated_at_ms=0))

        assert payload.records[0].description == "Café ☕ crème brûlée"

    def test_empty_collection(self):
        payload = decode_share_token(encode_share_token([], generated_at_ms=0))

        assert payload.records == []

    def test_same_input_same_token(self, scenario_expenses):
        assert encode_share_token(scenario_expenses, generated_at_ms=1) == encode_share_token(
            scenario_expenses, generated_at_ms=1
        )

    @pytest.mark.parametrize("token", ["!!!", "bm90IGpzb24", "e30"], ids=["garbage", "not_json", "empty_object"])
    def test_malformed_tokens(self, token):
        with pytest.raises(ValueError):
            decode_share_token(token)


@pytest.mark.export
class TestShareUrl:
    def test_uses_first_twelve_characters(self):
        assert build_share_url("abcdefghijklmnop", "https://expenses.example.com") == (
            "https://expenses.example.com/shared/abcdefghijkl"
        )

    def test_trailing_slash_on_origin(self):
        assert build_share_url("abc", "http://localhost:3000/") == "http://localhost:3000/shared/abc"
