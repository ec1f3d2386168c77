"""
Unit tests for decimal money helpers and calendar period arithmetic.
"""

from datetime import date
from decimal import Decimal

import pytest

from finledger.core.exceptions import ValidationError
from finledger.core.money import percent_change, percentage, quantize_money, require_positive, to_decimal
from finledger.core.periods import (
    DateWindow,
    add_months,
    end_of_month,
    start_of_week,
    trailing_month_ends,
    week_window,
)


class TestMoney:
    """Tests for money helpers."""

    def test_to_decimal_avoids_float_noise(self):
        assert to_decimal(0.1) + to_decimal(0.2) == Decimal("0.3")

    def test_to_decimal_rejects_garbage(self):
        with pytest.raises(ValidationError):
            to_decimal("12,5")

    def test_to_decimal_rejects_infinity(self):
        with pytest.raises(ValidationError):
            to_decimal("Infinity")

    def test_require_positive_accepts_cents(self):
        assert require_positive("19.99") == Decimal("19.99")

    @pytest.mark.parametrize("value", ["0", "-0.01", "1.999"])
    def test_require_positive_rejects(self, value):
        with pytest.raises(ValidationError):
            require_positive(value)

    def test_quantize_rounds_half_up(self):
        assert quantize_money(Decimal("2.345")) == Decimal("2.35")

    def test_percentage_of_zero_total(self):
        assert percentage(Decimal("5"), Decimal("0")) == Decimal("0.00")

    @pytest.mark.parametrize(
        "current, previous, expected",
        [
            ("150", "100", "50.00"),
            ("50", "100", "-50.00"),
            ("10", "0", "100.00"),
            ("0", "0", "0.00"),
        ],
    )
    def test_percent_change(self, current, previous, expected):
        assert percent_change(Decimal(current), Decimal(previous)) == Decimal(expected)


class TestPeriods:
    """Tests for calendar windows."""

    def test_start_of_week_monday(self):
        # 2024-06-16 is a Sunday
        assert start_of_week(date(2024, 6, 16)) == date(2024, 6, 10)

    def test_start_of_week_sunday(self):
        assert start_of_week(date(2024, 6, 16), week_start=6) == date(2024, 6, 16)

    def test_week_window_spans_seven_days(self):
        window = week_window(date(2024, 6, 12))

        assert window.days == 7
        assert window.previous() == DateWindow(date(2024, 6, 3), date(2024, 6, 9))

    def test_add_months_clamps_day(self):
        assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
        assert add_months(date(2024, 3, 31), -13) == date(2023, 2, 28)

    def test_end_of_month_december(self):
        assert end_of_month(date(2023, 12, 5)) == date(2023, 12, 31)

    def test_trailing_month_ends_cross_year(self):
        ends = trailing_month_ends(date(2024, 2, 10), 3)

        assert ends == [date(2023, 12, 31), date(2024, 1, 31), date(2024, 2, 29)]

    def test_inverted_window_rejected(self):
        with pytest.raises(ValidationError):
            DateWindow(date(2024, 6, 2), date(2024, 6, 1))
