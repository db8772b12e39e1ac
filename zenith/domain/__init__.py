"""Domain models and types for zenith.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Parsing and budgeting logic separated from infrastructure
"""

from zenith.domain.models import (
    CategoryBudget,
    CategoryId,
    Merchant,
    Money,
    Month,
    MonthlyBudgetOverride,
    MonthlyIncome,
    Transaction,
    TransactionCategory,
    TransactionType,
)

__all__ = [
    "CategoryBudget",
    "CategoryId",
    "Merchant",
    "Money",
    "Month",
    "MonthlyBudgetOverride",
    "MonthlyIncome",
    "Transaction",
    "TransactionCategory",
    "TransactionType",
]
