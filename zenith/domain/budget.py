"""Pure functions for monthly budget aggregation.

This module contains the functional core for the monthly planner:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations over caller-supplied lists
- Easy to test

All monetary amounts are in cents (Money type). Any non-finite term
(NaN or infinity) contributes zero instead of raising.
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass

from zenith.domain.models import (
    CategoryBudget,
    CategoryId,
    Money,
    Month,
    MonthlyBudgetOverride,
    MonthlyIncome,
    Transaction,
    TransactionType,
)


@dataclass(frozen=True)
class CategoryStatus:
    """Immutable spending status for one category in one month."""

    category: CategoryId
    name: str
    spent: Money
    budget: Money
    available: Money
    progress: float


@dataclass(frozen=True)
class BudgetAggregate:
    """Immutable planner figures for one month."""

    month: Month
    income: Money
    total_budget: Money
    total_spent: Money
    free_cash_flow: Money
    categories: list[CategoryStatus]


def finite_or_zero(value: float | int) -> Money:
    """Return the value as Money, or zero if it is NaN or infinite."""
    if isinstance(value, float) and not math.isfinite(value):
        return Money(0)
    return Money(int(value))


def transactions_in_month(transactions: Iterable[Transaction], month: Month) -> list[Transaction]:
    """Filter transactions to a single month.

    Args:
        transactions: Transactions to filter.
        month: Month in YYYY-MM format.

    Returns:
        Transactions whose date falls in the month.
    """
    return [t for t in transactions if t.date[:7] == month]


def spent_in_category(transactions: Iterable[Transaction], category: CategoryId, month: Month) -> Money:
    """Sum expense amounts for a category in a month.

    Args:
        transactions: All known transactions.
        category: Category identifier.
        month: Month in YYYY-MM format.

    Returns:
        Total spent in cents (always non-negative).
    """
    total = 0
    for txn in transactions_in_month(transactions, month):
        if txn.type != TransactionType.EXPENSE or txn.category.value != category:
            continue
        total += abs(finite_or_zero(txn.amount))
    return Money(total)


def budget_for_category(
    budget: CategoryBudget,
    overrides: Iterable[MonthlyBudgetOverride],
    month: Month,
) -> Money:
    """Resolve the limit for a category in a month.

    Args:
        budget: The category's standing budget.
        overrides: Per-month overrides for any category.
        month: Month in YYYY-MM format.

    Returns:
        The override limit if one exists for (category, month), else the standing limit.
    """
    for override in overrides:
        if override.category == budget.category and override.month == month:
            return finite_or_zero(override.limit)
    return finite_or_zero(budget.limit)


def income_for_month(incomes: Iterable[MonthlyIncome], month: Month, default_income: Money) -> Money:
    """Resolve expected income for a month.

    Args:
        incomes: Per-month income records.
        month: Month in YYYY-MM format.
        default_income: Standing income used when the month has no record.

    Returns:
        Income in cents.
    """
    for income in incomes:
        if income.month == month:
            return finite_or_zero(income.amount)
    return finite_or_zero(default_income)


def visible_categories(budgets: Iterable[CategoryBudget]) -> list[CategoryBudget]:
    """Non-hidden categories in display order."""
    return sorted((b for b in budgets if not b.hidden), key=lambda b: b.order_index)


def budget_progress(spent: Money, budget: Money) -> float:
    """Fraction of the budget used, capped at 1.0.

    Args:
        spent: Amount spent in cents.
        budget: Budget in cents.

    Returns:
        Progress between 0.0 and 1.0 (0.0 when there is no budget).
    """
    if budget <= 0:
        return 0.0
    return min(spent / budget, 1.0)


def aggregate_budget(
    transactions: list[Transaction],
    budgets: list[CategoryBudget],
    month: Month,
    overrides: list[MonthlyBudgetOverride] | None = None,
    incomes: list[MonthlyIncome] | None = None,
    default_income: Money = Money(0),
) -> BudgetAggregate:
    """Compute planner figures for a month.

    Args:
        transactions: All known transactions.
        budgets: Category budgets (hidden ones are skipped).
        month: Month in YYYY-MM format.
        overrides: Optional per-month budget overrides.
        incomes: Optional per-month income records.
        default_income: Income used when the month has no income record.

    Returns:
        BudgetAggregate where total_spent and total_budget sum the visible
        categories and free_cash_flow is income minus total_budget.
    """
    overrides = overrides or []
    incomes = incomes or []
    month_transactions = transactions_in_month(transactions, month)

    categories: list[CategoryStatus] = []
    for budget in visible_categories(budgets):
        spent = spent_in_category(month_transactions, budget.category, month)
        limit = budget_for_category(budget, overrides, month)
        categories.append(
            CategoryStatus(
                category=budget.category,
                name=budget.name,
                spent=spent,
                budget=limit,
                available=Money(limit - spent),
                progress=budget_progress(spent, limit),
            )
        )

    total_spent = Money(sum(c.spent for c in categories))
    total_budget = Money(sum(c.budget for c in categories))
    income = income_for_month(incomes, month, default_income)

    return BudgetAggregate(
        month=month,
        income=income,
        total_budget=total_budget,
        total_spent=total_spent,
        free_cash_flow=Money(income - total_budget),
        categories=categories,
    )


def top_spending_category(aggregate: BudgetAggregate) -> CategoryStatus | None:
    """Category with the highest spend, or None if nothing was spent.

    Ties keep the earlier category in display order.
    """
    top: CategoryStatus | None = None
    for status in aggregate.categories:
        if status.spent > 0 and (top is None or status.spent > top.spent):
            top = status
    return top


def resolve_budget_category(selection: str, budgets: list[CategoryBudget]) -> CategoryBudget | None:
    """Resolve a category by 1-based display index, id or name.

    Indexes count visible categories only, matching the planner table.
    Names and ids also match hidden categories.

    Args:
        selection: User input (e.g., "2", "Transport", "transport").
        budgets: All category budgets.

    Returns:
        Matching CategoryBudget, or None.
    """
    selection = selection.strip()
    if selection.isdigit():
        shown = visible_categories(budgets)
        index = int(selection) - 1
        return shown[index] if 0 <= index < len(shown) else None

    needle = selection.casefold()
    for budget in budgets:
        if needle in (budget.category.casefold(), budget.name.casefold()):
            return budget
    return None


def validate_budget_limit(amount: Money) -> tuple[bool, str | None]:
    """Validate a budget limit entered by the user.

    Args:
        amount: Limit in cents.

    Returns:
        Tuple of (is_valid, error_message).
    """
    if amount < 0:
        return False, "Amount must be positive"
    return True, None
