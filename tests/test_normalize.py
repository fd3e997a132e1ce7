"""Tests for guest input normalization."""

import pytest

from guestdesk.domain.normalize import (
    coerce_amount,
    coerce_bonus,
    normalize_date,
    normalize_phone,
)


class TestNormalizePhone:
    """Tests for normalize_phone()."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("+7 (912) 345-67-89", "9123456789"),
            ("8 912 345 67 89", "9123456789"),
            ("9123456789", "9123456789"),
            ("12-34", "1234"),
            ("phone: none", ""),
            ("", ""),
        ],
    )
    def test_keeps_last_ten_digits(self, raw, expected):
        assert normalize_phone(raw) == expected

    def test_none_is_empty(self):
        assert normalize_phone(None) == ""

    def test_integer_input(self):
        assert normalize_phone(79123456789) == "9123456789"

    @pytest.mark.parametrize(
        "raw",
        ["+7 (912) 345-67-89", "+44 20 7946 0958 ext. 12", "55", "abc", "+1-800-FLOWERS"],
    )
    def test_digit_suffix_and_idempotent(self, raw):
        once = normalize_phone(raw)
        assert once.isdigit() or once == ""
        assert len(once) <= 10
        assert "".join(c for c in raw if c.isdigit()).endswith(once)
        assert normalize_phone(once) == once


class TestNormalizeDate:
    """Tests for normalize_date()."""

    def test_dotted_date_reparsed(self):
        assert normalize_date("25.12.2024") == "2024-12-25"

    def test_pads_day_and_month(self):
        assert normalize_date("5.3.2024") == "2024-03-05"

    def test_iso_passes_through(self):
        assert normalize_date("2024-12-25") == "2024-12-25"

    def test_empty_passes_through(self):
        assert normalize_date("") == ""

    def test_none_passes_through(self):
        assert normalize_date(None) is None

    @pytest.mark.parametrize("raw", ["25.12", "1.2.3.4", "tomorrow", "25/12/2024"])
    def test_other_shapes_unchanged(self, raw):
        assert normalize_date(raw) == raw


class TestCoerceAmount:
    """Tests for coerce_amount()."""

    def test_decimal_string(self):
        assert coerce_amount("12.5") == 12.5

    def test_garbage_is_zero(self):
        assert coerce_amount("abc") == 0

    def test_none_is_zero(self):
        assert coerce_amount(None) == 0

    def test_numeric_prefix(self):
        assert coerce_amount("1500.50 rub") == 1500.5

    def test_numbers_pass_through(self):
        assert coerce_amount(300) == 300.0
        assert coerce_amount(99.9) == 99.9

    def test_booleans_are_zero(self):
        assert coerce_amount(True) == 0

    def test_non_finite_is_zero(self):
        assert coerce_amount(float("nan")) == 0
        assert coerce_amount("inf") == 0


class TestCoerceBonus:
    """Tests for coerce_bonus()."""

    def test_integer_string(self):
        assert coerce_bonus("250") == 250

    def test_fraction_truncated(self):
        assert coerce_bonus("12.7") == 12
        assert coerce_bonus(12.7) == 12
        assert coerce_bonus(-3.9) == -3

    def test_garbage_is_zero(self):
        assert coerce_bonus("lots") == 0
        assert coerce_bonus(None) == 0
        assert coerce_bonus("") == 0

    def test_returns_int(self):
        assert isinstance(coerce_bonus("7 points"), int)
