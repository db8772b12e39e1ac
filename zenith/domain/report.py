"""Pure functions for transaction summaries and breakdowns.

This module contains the functional core for reporting operations:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

All monetary amounts are in cents (Money type).
"""

from dataclasses import dataclass

from zenith.domain.models import Money, Transaction, TransactionCategory, TransactionType


@dataclass(frozen=True)
class CategoryReport:
    """Immutable category report data."""

    category: TransactionCategory
    amount: Money  # absolute
    share: float  # fraction of the section total


@dataclass(frozen=True)
class TransactionSummary:
    """Immutable summary over a set of transactions."""

    total_income: Money
    total_expenses: Money  # absolute
    balance: Money
    transaction_count: int
    savings_rate: float | None
    expenses: list[CategoryReport]
    income: list[CategoryReport]


def split_by_type(transactions: list[Transaction]) -> tuple[list[Transaction], list[Transaction]]:
    """Split transactions into (expenses, income)."""
    expenses = [t for t in transactions if t.type == TransactionType.EXPENSE]
    income = [t for t in transactions if t.type == TransactionType.INCOME]
    return expenses, income


def category_breakdown(transactions: list[Transaction]) -> dict[TransactionCategory, Money]:
    """Sum absolute amounts per category.

    Args:
        transactions: Transactions of a single type.

    Returns:
        Dictionary of category to total in cents.
    """
    breakdown: dict[TransactionCategory, Money] = {}
    for txn in transactions:
        breakdown[txn.category] = Money(breakdown.get(txn.category, 0) + abs(txn.amount))
    return breakdown


def sort_breakdown(
    breakdown: dict[TransactionCategory, Money],
    sort_by: str = "value",
) -> list[tuple[TransactionCategory, Money]]:
    """Sort a breakdown by value (largest first) or alphabetically.

    Args:
        breakdown: Dictionary of category amounts.
        sort_by: Sort method - "value" or "alpha".

    Returns:
        Sorted list of (category, amount) tuples.
    """
    if sort_by == "alpha":
        return sorted(breakdown.items(), key=lambda x: x[0].value)
    return sorted(breakdown.items(), key=lambda x: x[1], reverse=True)


def create_category_reports(
    breakdown: dict[TransactionCategory, Money],
    sort_by: str = "value",
) -> list[CategoryReport]:
    """Create per-category report rows with their share of the total."""
    total = sum(breakdown.values())
    return [
        CategoryReport(category=cat, amount=amt, share=(amt / total) if total > 0 else 0.0)
        for cat, amt in sort_breakdown(breakdown, sort_by)
    ]


def calculate_savings_rate(total_income: Money, total_expenses: Money) -> float | None:
    """Fraction of income not spent, or None without income."""
    if total_income <= 0:
        return None
    return (total_income - total_expenses) / total_income


def summarize_transactions(transactions: list[Transaction], sort_by: str = "value") -> TransactionSummary:
    """Summarize income, expenses and balance.

    Args:
        transactions: Transactions to summarize.
        sort_by: Sort method for category rows - "value" or "alpha".

    Returns:
        TransactionSummary with totals and per-category rows.
    """
    expenses, income = split_by_type(transactions)
    total_income = Money(sum(abs(t.amount) for t in income))
    total_expenses = Money(sum(abs(t.amount) for t in expenses))

    return TransactionSummary(
        total_income=total_income,
        total_expenses=total_expenses,
        balance=Money(total_income - total_expenses),
        transaction_count=len(transactions),
        savings_rate=calculate_savings_rate(total_income, total_expenses),
        expenses=create_category_reports(category_breakdown(expenses), sort_by),
        income=create_category_reports(category_breakdown(income), sort_by),
    )


def calculate_histogram_bar_length(
    amount: Money,
    max_amount: Money,
    bar_width: int,
) -> int:
    """Calculate histogram bar length.

    Args:
        amount: Amount to display.
        max_amount: Maximum amount in dataset.
        bar_width: Maximum bar width in characters.

    Returns:
        Bar length in characters.
    """
    if max_amount <= 0:
        return 0
    return int((abs(amount) / max_amount) * bar_width)
