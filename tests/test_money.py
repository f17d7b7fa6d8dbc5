"""Tests for integer-cent money arithmetic."""

import pytest

from invest_ledger.exceptions import ValidationError
from invest_ledger.models import Money
from invest_ledger.money import (
    NO_FUNDS_SENTINEL,
    format_cents,
    format_decimal_amount,
    from_cents,
    group_thousands,
    parse_quantity,
    to_cents,
)


class TestGroupThousands:
    """Tests for thousands grouping."""

    @pytest.mark.parametrize(
        ("digits", "expected"),
        [
            ("0", "0"),
            ("12", "12"),
            ("123", "123"),
            ("1234", "1.234"),
            ("123456", "123.456"),
            ("1234567", "1.234.567"),
        ],
    )
    def test_grouping(self, digits: str, expected: str) -> None:
        assert group_thousands(digits) == expected


class TestToCents:
    """Tests for display string to cents conversion."""

    @pytest.mark.parametrize(
        ("display", "cents"),
        [
            ("0,01", 1),
            ("100,00", 10000),
            ("250,50", 25050),
            ("1.234.567,89", 123456789),
            ("1.234,5", 123450),
            (",50", 50),
            ("12", 1200),
            ("3,999", 399),
        ],
    )
    def test_conversion(self, display: str, cents: int) -> None:
        assert to_cents(display) == cents


class TestFromCents:
    """Tests for cents to display string conversion."""

    def test_zero_is_sentinel(self) -> None:
        assert from_cents(0) == NO_FUNDS_SENTINEL == "0,01"

    @pytest.mark.parametrize(
        ("cents", "display"),
        [
            (1, "0,01"),
            (5, "0,05"),
            (35050, "350,50"),
            (100000, "1.000,00"),
            (10000000000, "100.000.000,00"),
        ],
    )
    def test_conversion(self, cents: int, display: str) -> None:
        assert from_cents(cents) == display

    def test_negative_rejected(self) -> None:
        with pytest.raises(ValueError, match="negative"):
            from_cents(-1)

    @pytest.mark.parametrize("cents", [1, 99, 100, 101, 99999, 123456789, 10000000000])
    def test_inverse_of_to_cents(self, cents: int) -> None:
        display = from_cents(cents)

        assert to_cents(display) == cents
        assert Money(display).cents == cents


class TestFormatCents:
    """Tests for sentinel-free cents formatting."""

    def test_zero_is_not_sentinel(self) -> None:
        assert format_cents(0) == "0,00"
        assert format_cents(123456) == "1.234,56"

    def test_zero_amount_fails_money_range(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            Money(format_decimal_amount(0.0))

        assert exc_info.value.rule == "money.range"


class TestFormatDecimalAmount:
    """Tests for float amount formatting."""

    @pytest.mark.parametrize(
        ("amount", "display"),
        [
            (35.5 * 100, "3.550,00"),
            (0.1 * 3, "0,30"),
            (1234567.891, "1.234.567,89"),
            (12.344, "12,34"),
            (0.004, "0,00"),
        ],
    )
    def test_rounds_to_two_decimals(self, amount: float, display: str) -> None:
        assert format_decimal_amount(amount) == display


class TestParseQuantity:
    """Tests for quantity parsing."""

    def test_strips_separators(self) -> None:
        assert parse_quantity("1.000.000") == 1000000
        assert parse_quantity("42") == 42
