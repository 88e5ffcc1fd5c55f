"""
Unit tests for decimal helpers.

Tests cover:
- Coercion of loose values to finite Decimals
- Parsing of scraped display strings
- Zero-guarded percentage calculation
"""

import math
from decimal import Decimal

import pytest

from portfolio_dashboard.core.numbers import parse_number, safe_percentage, to_decimal


class TestToDecimal:
    """Tests for to_decimal."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (12, Decimal("12")),
            ("1490", Decimal("1490")),
            (" 44.5 ", Decimal("44.5")),
            (0.1, Decimal("0.1")),
            (Decimal("7.25"), Decimal("7.25")),
        ],
    )
    def test_numeric_values_convert(self, value, expected):
        assert to_decimal(value) == expected

    @pytest.mark.parametrize(
        "value",
        [None, "", "abc", "N/A", math.nan, math.inf, -math.inf, Decimal("NaN"), "Infinity", True],
    )
    def test_non_numeric_values_become_zero(self, value):
        """
        GIVEN a value that is not a finite number
        WHEN I coerce it
        THEN the result is 0, never NaN or infinity
        """
        assert to_decimal(value) == Decimal("0")


class TestParseNumber:
    """Tests for parse_number on scraped text."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("23.45", Decimal("23.45")),
            ("₹1,234.50", Decimal("1234.50")),
            ("Rs. 2,500", Decimal("2500")),
            ("$ 12.00", Decimal("12.00")),
            ("−12.5", Decimal("-12.5")),
            ("-3.20", Decimal("-3.20")),
            ("₹1.2B", Decimal("1.2")),
            ("  19.80\xa0", Decimal("19.80")),
        ],
    )
    def test_parses_display_values(self, text, expected):
        assert parse_number(text) == expected

    @pytest.mark.parametrize("text", ["", "-", "—", "N/A", "nan", "₹"])
    def test_unparseable_text_is_zero(self, text):
        assert parse_number(text) == Decimal("0")


class TestSafePercentage:
    """Tests for safe_percentage."""

    def test_regular_percentage(self):
        assert safe_percentage(Decimal("500"), Decimal("1000")) == Decimal("50.00")

    def test_rounds_to_cents(self):
        assert safe_percentage(Decimal("1"), Decimal("3")) == Decimal("33.33")

    def test_negative_percentage(self):
        assert safe_percentage(Decimal("-250"), Decimal("1000")) == Decimal("-25.00")

    def test_zero_denominator_is_zero(self):
        """
        GIVEN a zero base amount
        WHEN I compute a percentage
        THEN the result is exactly 0
        """
        result = safe_percentage(Decimal("500"), Decimal("0"))

        assert result == Decimal("0")
        assert result.is_finite()
