"""
Unit tests for the field coercer.

Run: pytest tests/unit/test_field_coercer.py -v
"""

import math
from datetime import date, datetime

import pytest

from parsers.field_coercer import (
    AI_UNKNOWN_NAME,
    coerce_code,
    coerce_expiry_date,
    coerce_name,
    coerce_price,
    coerce_qty,
    coerce_unit_label,
)


class TestCoerceQty:
    """Tests for coerce_qty()"""

    @pytest.mark.parametrize("raw,expected", [
        ("5", 5),
        (5, 5),
        (2.5, 2.5),
        ("2.50", 2.5),
        (12.0, 12),
        (" 7 ", 7),
        (-3, -3),
    ])
    def test_numeric_values(self, raw, expected):
        """Numbers and numeric text should parse."""
        assert coerce_qty(raw) == expected

    @pytest.mark.parametrize("raw", ["abc", "", None, math.nan, 0, "0", True, math.inf])
    def test_unset_values_become_empty(self, raw):
        """Non-numeric, missing and zero quantities mean 'unset'."""
        assert coerce_qty(raw) == ""

    def test_whole_float_becomes_int(self):
        """Spreadsheet floats like 12.0 should come back as int."""
        assert isinstance(coerce_qty(12.0), int)


class TestCoerceExpiryDate:
    """Tests for coerce_expiry_date()"""

    def test_drops_time_component(self):
        """ISO datetime text keeps only the date."""
        assert coerce_expiry_date("2025-12-31T00:00:00.000Z") == "2025-12-31"

    def test_plain_date_text_unchanged(self):
        assert coerce_expiry_date("2025-06-01") == "2025-06-01"

    def test_datetime_cell(self):
        """Excel date cells arrive as datetime."""
        assert coerce_expiry_date(datetime(2025, 3, 4, 10, 30)) == "2025-03-04"

    def test_date_cell(self):
        assert coerce_expiry_date(date(2026, 1, 2)) == "2026-01-02"

    def test_missing_is_empty(self):
        assert coerce_expiry_date(None) == ""
        assert coerce_expiry_date("") == ""


class TestCoerceTextFields:
    """Tests for code, name, unit and price coercion."""

    def test_numeric_code_has_no_decimal(self):
        """A code typed as 1001 in Excel should stay '1001'."""
        assert coerce_code(1001.0) == "1001"
        assert coerce_code(" A-7 ") == "A-7"

    def test_missing_code_is_empty(self):
        assert coerce_code(None) == ""

    def test_name_fallback(self):
        """Empty names take the fallback label."""
        assert coerce_name("", fallback=AI_UNKNOWN_NAME) == AI_UNKNOWN_NAME
        assert coerce_name("   ", fallback=AI_UNKNOWN_NAME) == AI_UNKNOWN_NAME
        assert coerce_name("Tea", fallback=AI_UNKNOWN_NAME) == "Tea"

    def test_name_without_fallback(self):
        assert coerce_name(None) == ""

    def test_price(self):
        """Prices become text; missing and zero become '0'."""
        assert coerce_price(12.5) == "12.5"
        assert coerce_price(40) == "40"
        assert coerce_price(None) == "0"
        assert coerce_price(0) == "0"
        assert coerce_price("15.75") == "15.75"

    def test_unit_label(self):
        assert coerce_unit_label(" كرتون ") == "كرتون"
        assert coerce_unit_label(None) == ""
