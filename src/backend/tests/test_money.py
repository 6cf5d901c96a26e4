"""
Test suite for money resolution.

Tests cover:
- Currency symbol/code detection and priority
- Free-text amount parsing with thousands separators
- Structured money values (units + nanos)
- Quantity parsing for line items
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from expense_scan.models.receipt import MoneyValue
from expense_scan.utils.money import (
    detect_currency,
    parse_amount,
    money_value_to_amount,
    resolve_money,
    parse_quantity,
)
import pytest


class TestFreeTextAmounts:
    """Free-text parsing with currency heuristics."""

    def test_ringgit_with_thousands_separator(self):
        parsed = parse_amount("RM 1,234.50")
        assert parsed.amount == pytest.approx(1234.50)
        assert parsed.currency_code == "MYR"

    def test_dollar_sign_is_usd(self):
        parsed = parse_amount("$12.90")
        assert parsed.amount == pytest.approx(12.90)
        assert parsed.currency_code == "USD"

    def test_singapore_dollar_beats_plain_dollar(self):
        parsed = parse_amount("S$5")
        assert parsed.amount == 5
        assert parsed.currency_code == "SGD"

    def test_us_dollar_prefix_is_not_singapore(self):
        assert parse_amount("US$7.25").currency_code == "USD"

    @pytest.mark.parametrize("text,code", [
        ("€9,99", "EUR"),
        ("£3.20", "GBP"),
        ("12.00 EUR", "EUR"),
        ("MYR 8.90", "MYR"),
        ("SGD 4", "SGD"),
    ])
    def test_currency_table(self, text, code):
        assert parse_amount(text).currency_code == code

    def test_no_currency(self):
        parsed = parse_amount("45.00")
        assert parsed.amount == pytest.approx(45.0)
        assert parsed.currency_code is None

    def test_first_number_wins(self):
        assert parse_amount("2 x 3.50").amount == 2

    def test_trailing_dot(self):
        assert parse_amount("RM12.").amount == 12

    @pytest.mark.parametrize("text", ["", None, "N/A", "RM", "total due"])
    def test_unparsable_text_gives_none(self, text):
        assert parse_amount(text).amount is None

    def test_currency_survives_missing_number(self):
        parsed = parse_amount("RM --")
        assert parsed.amount is None
        assert parsed.currency_code == "MYR"

    def test_detect_currency_strips_first_occurrence_only(self):
        code, cleaned = detect_currency("$5 $6")
        assert code == "USD"
        assert cleaned == "5 $6"


class TestStructuredMoney:
    """Structured money values from the recognition service."""

    def test_units_plus_nanos(self):
        parsed = money_value_to_amount(MoneyValue(units=45, nanos=500000000))
        assert parsed.amount == 45.5
        assert parsed.currency_code is None

    def test_missing_parts_are_zero(self):
        assert money_value_to_amount(MoneyValue(nanos=250000000)).amount == 0.25
        assert money_value_to_amount(MoneyValue()).amount == 0.0

    def test_currency_code_uppercased(self):
        parsed = money_value_to_amount(MoneyValue(units=1, currency_code="myr"))
        assert parsed.currency_code == "MYR"

    def test_empty_currency_code_is_absent(self):
        assert money_value_to_amount(MoneyValue(units=1, currency_code="")).currency_code is None

    def test_units_from_string(self):
        """Document AI serializes int64 units as strings."""
        money = MoneyValue.model_validate({"units": "70", "nanos": 0, "currencyCode": "MYR"})
        assert money_value_to_amount(money).amount == 70.0

    def test_structured_value_takes_precedence(self):
        parsed = resolve_money("$999.99", MoneyValue(units=10, currency_code="MYR"))
        assert parsed.amount == 10.0
        assert parsed.currency_code == "MYR"

    def test_falls_back_to_text(self):
        parsed = resolve_money("RM 3.30", None)
        assert parsed.amount == pytest.approx(3.30)
        assert parsed.currency_code == "MYR"


class TestQuantity:

    @pytest.mark.parametrize("text,expected", [
        ("2", 2.0),
        ("1.5", 1.5),
        (" 3x", 3.0),
        ("0.25 kg", 0.25),
    ])
    def test_leading_number(self, text, expected):
        assert parse_quantity(text) == expected

    @pytest.mark.parametrize("text", [None, "", "abc", "x2", "0"])
    def test_invalid_or_zero_is_none(self, text):
        assert parse_quantity(text) is None


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
