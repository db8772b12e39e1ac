"""Domain type definitions for zenith.

These NewTypes and records provide semantic clarity and help with type checking:
- Money: Amount in cents (minor units)
- Month: Month in YYYY-MM format
- CategoryId: Identifier of a budget category
- Merchant: Merchant name text
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import NewType

# Money amounts are stored as cents (minor units) to avoid floating point errors
Money = NewType("Money", int)

# Month is always in YYYY-MM format (e.g., "2025-01")
Month = NewType("Month", str)

# Category identifier; for built-in categories this is the category's display value
CategoryId = NewType("CategoryId", str)

# Merchant name as shown to the user
Merchant = NewType("Merchant", str)


class TransactionType(str, Enum):
    """Direction of a transaction."""

    INCOME = "Income"
    EXPENSE = "Expense"


class TransactionCategory(str, Enum):
    """Closed set of transaction categories."""

    FOOD_AND_DRINK = "Food & Drink"
    TRANSPORT = "Transport"
    SHOPPING = "Shopping"
    ENTERTAINMENT = "Entertainment"
    HEALTH = "Health"
    BILLS = "Bills"
    SALARY = "Salary"
    INVESTMENT = "Investment"
    FREELANCE = "Freelance"
    OTHER = "Other"

    @property
    def icon(self) -> str:
        """Display hint for the category."""
        return _CATEGORY_ICONS[self]


_CATEGORY_ICONS: dict[TransactionCategory, str] = {
    TransactionCategory.FOOD_AND_DRINK: "cup.and.saucer.fill",
    TransactionCategory.TRANSPORT: "car.fill",
    TransactionCategory.SHOPPING: "bag.fill",
    TransactionCategory.ENTERTAINMENT: "film.fill",
    TransactionCategory.HEALTH: "heart.fill",
    TransactionCategory.BILLS: "doc.text.fill",
    TransactionCategory.SALARY: "banknote.fill",
    TransactionCategory.INVESTMENT: "chart.line.uptrend.xyaxis",
    TransactionCategory.FREELANCE: "briefcase.fill",
    TransactionCategory.OTHER: "questionmark.circle.fill",
}


@dataclass(frozen=True)
class Transaction:
    """Immutable transaction record.

    Expenses carry a negative amount, income a positive one.
    """

    merchant: Merchant
    date: str  # YYYY-MM-DD
    amount: Money
    type: TransactionType
    category: TransactionCategory
    id: int | None = None
    icon: str | None = None

    @property
    def display_icon(self) -> str:
        return self.icon or self.category.icon


@dataclass(frozen=True)
class CategoryBudget:
    """Standing monthly limit for a category."""

    category: CategoryId
    name: str
    limit: Money
    order_index: int = 0
    hidden: bool = False


@dataclass(frozen=True)
class MonthlyBudgetOverride:
    """Limit that replaces a category's standing limit for one month."""

    category: CategoryId
    month: Month
    limit: Money


@dataclass(frozen=True)
class MonthlyIncome:
    """Expected income for one month."""

    month: Month
    amount: Money


def find_category(text: str) -> TransactionCategory | None:
    """Look up a category by display value or enum name, ignoring case.

    Args:
        text: User input such as "Food & Drink", "food_and_drink" or "bills".

    Returns:
        Matching category, or None.
    """
    needle = text.strip().casefold()
    for category in TransactionCategory:
        if needle in (category.value.casefold(), category.name.casefold()):
            return category
    return None


# Largest dollar amount accepted from user input
MAX_AMOUNT = 1_000_000_000.0


def validate_amount(value: float) -> tuple[bool, str | None]:
    """Check that a dollar amount typed by the user can be stored.

    Args:
        value: Amount in dollars.

    Returns:
        Tuple of (is_valid, error_message).
    """
    if not math.isfinite(value):
        return False, "Amount must be a finite number"
    if abs(value) > MAX_AMOUNT:
        return False, f"Amount must not exceed {MAX_AMOUNT:,.0f}"
    return True, None


def dollars_to_money(value: float | int | str) -> Money:
    """Convert a dollar amount to cents.

    Args:
        value: Amount in dollars (e.g., 12.34 or "12.34").

    Returns:
        Money amount in cents, rounded to the nearest cent.

    Raises:
        ValueError: If the value cannot be parsed as a number.
    """
    return Money(int(round(float(value) * 100)))


def format_money(amount: Money, symbol: str = "$", include_sign: bool = False) -> str:
    """Format money amount for display.

    Args:
        amount: Amount in cents.
        symbol: Currency symbol to prefix.
        include_sign: Whether to include + or - sign.

    Returns:
        Formatted string (e.g., "$1,234.56" or "-$12.00").
    """
    formatted = f"{symbol}{abs(amount) / 100:,.2f}"
    if amount < 0:
        return f"-{formatted}"
    if include_sign:
        return f"+{formatted}"
    return formatted
