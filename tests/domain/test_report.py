"""Tests for zenith.domain.report pure functions."""

from zenith.domain.models import Merchant, Money, Transaction, TransactionCategory, TransactionType
from zenith.domain.report import (
    calculate_histogram_bar_length,
    calculate_savings_rate,
    category_breakdown,
    sort_breakdown,
    summarize_transactions,
)


def txn(amount: int, category: TransactionCategory) -> Transaction:
    return Transaction(
        merchant=Merchant("Somewhere"),
        date="2025-01-10",
        amount=Money(amount),
        type=TransactionType.EXPENSE if amount < 0 else TransactionType.INCOME,
        category=category,
    )


class TestCategoryBreakdown:
    """Tests for category_breakdown."""

    def test_sums_absolute_amounts(self) -> None:
        """Should total each category using absolute values."""
        transactions = [
            txn(-1000, TransactionCategory.FOOD_AND_DRINK),
            txn(-500, TransactionCategory.FOOD_AND_DRINK),
            txn(-2000, TransactionCategory.TRANSPORT),
        ]

        assert category_breakdown(transactions) == {
            TransactionCategory.FOOD_AND_DRINK: Money(1500),
            TransactionCategory.TRANSPORT: Money(2000),
        }


class TestSortBreakdown:
    """Tests for sort_breakdown."""

    def test_by_value(self) -> None:
        """Should put the largest amount first."""
        breakdown = {TransactionCategory.BILLS: Money(100), TransactionCategory.HEALTH: Money(300)}

        result = sort_breakdown(breakdown, "value")

        assert [cat for cat, _ in result] == [TransactionCategory.HEALTH, TransactionCategory.BILLS]

    def test_alpha(self) -> None:
        """Should sort by category name."""
        breakdown = {TransactionCategory.HEALTH: Money(300), TransactionCategory.BILLS: Money(100)}

        result = sort_breakdown(breakdown, "alpha")

        assert [cat for cat, _ in result] == [TransactionCategory.BILLS, TransactionCategory.HEALTH]


class TestCalculateSavingsRate:
    """Tests for calculate_savings_rate."""

    def test_with_income(self) -> None:
        """Should return the unspent fraction."""
        assert calculate_savings_rate(Money(10000), Money(7500)) == 0.25

    def test_without_income(self) -> None:
        """Should return None without income."""
        assert calculate_savings_rate(Money(0), Money(7500)) is None


class TestSummarizeTransactions:
    """Tests for summarize_transactions."""

    def test_summary(self) -> None:
        """Should total income, expenses and shares."""
        transactions = [
            txn(400000, TransactionCategory.SALARY),
            txn(-30000, TransactionCategory.FOOD_AND_DRINK),
            txn(-10000, TransactionCategory.TRANSPORT),
        ]

        summary = summarize_transactions(transactions)

        assert summary.total_income == Money(400000)
        assert summary.total_expenses == Money(40000)
        assert summary.balance == Money(360000)
        assert summary.transaction_count == 3
        assert summary.savings_rate == 0.9
        assert [r.category for r in summary.expenses] == [
            TransactionCategory.FOOD_AND_DRINK,
            TransactionCategory.TRANSPORT,
        ]
        assert summary.expenses[0].share == 0.75
        assert summary.income[0].share == 1.0

    def test_empty(self) -> None:
        """Should produce an empty summary."""
        summary = summarize_transactions([])

        assert summary.transaction_count == 0
        assert summary.expenses == []
        assert summary.savings_rate is None


class TestCalculateHistogramBarLength:
    """Tests for calculate_histogram_bar_length."""

    def test_half(self) -> None:
        """Should scale to the bar width."""
        assert calculate_histogram_bar_length(Money(500), Money(1000), 30) == 15

    def test_zero_max(self) -> None:
        """Should return 0 when max is zero."""
        assert calculate_histogram_bar_length(Money(500), Money(0), 30) == 0
