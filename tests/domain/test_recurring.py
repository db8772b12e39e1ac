"""Tests for zenith.domain.recurring pure functions."""

from datetime import date

import pytest

from zenith.domain.models import Merchant, Money, TransactionCategory, TransactionType
from zenith.domain.recurring import (
    RecurringFrequency,
    RecurringTransaction,
    add_months,
    next_due_date,
    process_due,
    upcoming,
)


def make_rule(next_due: str, frequency: RecurringFrequency = RecurringFrequency.MONTHLY, **kwargs) -> RecurringTransaction:
    return RecurringTransaction(
        merchant=Merchant("Netflix"),
        amount=Money(-1599),
        type=TransactionType.EXPENSE,
        category=TransactionCategory.ENTERTAINMENT,
        frequency=frequency,
        start_date=next_due,
        next_due=next_due,
        **kwargs,
    )


class TestAddMonths:
    """Tests for add_months."""

    def test_simple(self) -> None:
        """Should keep the day of month."""
        assert add_months(date(2025, 1, 15), 1) == date(2025, 2, 15)

    def test_clamps_short_month(self) -> None:
        """Should clamp to the end of February."""
        assert add_months(date(2025, 1, 31), 1) == date(2025, 2, 28)

    def test_clamps_leap_year(self) -> None:
        """Should clamp to Feb 29 in leap years."""
        assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)

    def test_crosses_year(self) -> None:
        """Should roll into the next year."""
        assert add_months(date(2025, 11, 30), 3) == date(2026, 2, 28)


class TestNextDueDate:
    """Tests for next_due_date."""

    @pytest.mark.parametrize(
        ("frequency", "expected"),
        [
            (RecurringFrequency.DAILY, "2025-01-31"),
            (RecurringFrequency.WEEKLY, "2025-02-06"),
            (RecurringFrequency.BIWEEKLY, "2025-02-13"),
            (RecurringFrequency.MONTHLY, "2025-02-28"),
            (RecurringFrequency.QUARTERLY, "2025-04-30"),
            (RecurringFrequency.YEARLY, "2026-01-30"),
        ],
    )
    def test_each_frequency(self, frequency: RecurringFrequency, expected: str) -> None:
        """Should advance by one period."""
        assert next_due_date("2025-01-30", frequency) == expected

    def test_invalid_date(self) -> None:
        """Should raise on malformed dates."""
        with pytest.raises(ValueError):
            next_due_date("not-a-date", RecurringFrequency.DAILY)


class TestProcessDue:
    """Tests for process_due."""

    def test_generates_due_rule(self) -> None:
        """Should emit a transaction and advance the rule."""
        rule = make_rule("2025-01-10", id=3)

        generated, updated = process_due([rule], "2025-01-10")

        assert len(generated) == 1
        assert generated[0].date == "2025-01-10"
        assert generated[0].amount == Money(-1599)
        assert generated[0].merchant == "Netflix"
        assert updated[0].id == 3
        assert updated[0].next_due == "2025-02-10"
        assert updated[0].last_generated == "2025-01-10"

    def test_skips_future_and_paused(self) -> None:
        """Should ignore rules not yet due or inactive."""
        rules = [make_rule("2025-01-11"), make_rule("2025-01-01", active=False)]

        assert process_due(rules, "2025-01-10") == ([], [])

    def test_one_step_per_run(self) -> None:
        """Should catch up one period at a time."""
        rule = make_rule("2024-11-10")

        generated, updated = process_due([rule], "2025-01-10")

        assert len(generated) == 1
        assert updated[0].next_due == "2024-12-10"

    def test_does_not_mutate_input(self) -> None:
        """Should leave the original rule unchanged."""
        rule = make_rule("2025-01-10")

        process_due([rule], "2025-01-10")

        assert rule.next_due == "2025-01-10"


class TestUpcoming:
    """Tests for upcoming."""

    def test_within_window_sorted(self) -> None:
        """Should return active rules due within seven days, soonest first."""
        rules = [
            make_rule("2025-01-17"),
            make_rule("2025-01-12"),
            make_rule("2025-01-18"),
            make_rule("2025-01-11", active=False),
        ]

        result = upcoming(rules, "2025-01-10")

        assert [r.next_due for r in result] == ["2025-01-12", "2025-01-17"]
