"""Tests for zenith.dates pure functions."""

from datetime import date

import pytest

from zenith.dates import current_month, month_range, resolve_month, to_month
from zenith.domain.models import Month


class TestMonthRange:
    """Tests for month_range."""

    def test_regular_month(self) -> None:
        """Should span the first day to the first day of next month."""
        assert month_range(Month("2025-04")) == ("2025-04-01", "2025-05-01", "April 2025")

    def test_december_crosses_year(self) -> None:
        """Should roll into January of the next year."""
        assert month_range(Month("2025-12")) == ("2025-12-01", "2026-01-01", "December 2025")

    def test_leap_february(self) -> None:
        """Should end February on the first of March in leap years."""
        since, until, _ = month_range(Month("2024-02"))

        assert since == "2024-02-01"
        assert until == "2024-03-01"

    @pytest.mark.parametrize("bad", ["invalid", "2025-13", "2025/01", ""])
    def test_invalid_month_raises(self, bad: str) -> None:
        """Should raise ValueError for malformed months."""
        with pytest.raises(ValueError):
            month_range(Month(bad))


class TestToMonth:
    """Tests for to_month."""

    def test_pads(self) -> None:
        """Should zero-pad the month number."""
        assert to_month(2025, 3) == Month("2025-03")

    def test_out_of_range(self) -> None:
        """Should reject month numbers outside 1-12."""
        with pytest.raises(ValueError):
            to_month(2025, 0)


class TestCurrentMonth:
    """Tests for current_month."""

    def test_given_date(self) -> None:
        """Should use the given date's month."""
        assert current_month(date(2025, 11, 30)) == Month("2025-11")


class TestResolveMonth:
    """Tests for resolve_month."""

    def test_explicit_month(self) -> None:
        """Should return the month and its label."""
        assert resolve_month("2025-01") == (Month("2025-01"), "January 2025")

    def test_default_is_current(self) -> None:
        """Should fall back to the current month."""
        month, _ = resolve_month(None)

        assert month == current_month()

    def test_invalid(self) -> None:
        """Should raise ValueError for bad input."""
        with pytest.raises(ValueError):
            resolve_month("Jan 2025")
