"""Pure functions for recurring transactions.

Recurring rules generate one transaction each time they fall due. Month-based
frequencies use calendar arithmetic and clamp to the end of shorter months
(Jan 31 + 1 month = Feb 28/29).
"""

import calendar
from dataclasses import dataclass, replace
from datetime import date, timedelta
from enum import Enum

from zenith.domain.models import Merchant, Money, Transaction, TransactionCategory, TransactionType


class RecurringFrequency(str, Enum):
    """How often a recurring transaction repeats."""

    DAILY = "Daily"
    WEEKLY = "Weekly"
    BIWEEKLY = "Bi-weekly"
    MONTHLY = "Monthly"
    QUARTERLY = "Quarterly"
    YEARLY = "Yearly"


@dataclass(frozen=True)
class RecurringTransaction:
    """Immutable recurring transaction rule."""

    merchant: Merchant
    amount: Money  # signed like Transaction.amount
    type: TransactionType
    category: TransactionCategory
    frequency: RecurringFrequency
    start_date: str
    next_due: str
    last_generated: str | None = None
    active: bool = True
    id: int | None = None


def add_months(value: date, months: int) -> date:
    """Add calendar months, clamping the day to the target month's length."""
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def next_due_date(due: str, frequency: RecurringFrequency) -> str:
    """Advance a due date by one period.

    Args:
        due: Current due date (YYYY-MM-DD).
        frequency: Repeat frequency.

    Returns:
        Next due date (YYYY-MM-DD).

    Raises:
        ValueError: If due is not a valid ISO date.
    """
    current = date.fromisoformat(due)

    if frequency == RecurringFrequency.DAILY:
        nxt = current + timedelta(days=1)
    elif frequency == RecurringFrequency.WEEKLY:
        nxt = current + timedelta(weeks=1)
    elif frequency == RecurringFrequency.BIWEEKLY:
        nxt = current + timedelta(weeks=2)
    elif frequency == RecurringFrequency.MONTHLY:
        nxt = add_months(current, 1)
    elif frequency == RecurringFrequency.QUARTERLY:
        nxt = add_months(current, 3)
    else:
        nxt = add_months(current, 12)

    return nxt.isoformat()


def process_due(
    recurring: list[RecurringTransaction],
    today: str,
) -> tuple[list[Transaction], list[RecurringTransaction]]:
    """Generate transactions for rules that have fallen due.

    Each due rule produces exactly one transaction per call and advances by
    one period, so a rule that is several periods behind catches up over
    several runs.

    Args:
        recurring: All recurring rules.
        today: Current date (YYYY-MM-DD).

    Returns:
        Tuple of (generated_transactions, updated_rules). Updated rules only
        include the ones that changed.
    """
    generated: list[Transaction] = []
    updated: list[RecurringTransaction] = []

    for rule in recurring:
        if not rule.active or rule.next_due > today:
            continue

        generated.append(
            Transaction(
                merchant=rule.merchant,
                date=rule.next_due,
                amount=rule.amount,
                type=rule.type,
                category=rule.category,
            )
        )
        updated.append(
            replace(
                rule,
                last_generated=rule.next_due,
                next_due=next_due_date(rule.next_due, rule.frequency),
            )
        )

    return generated, updated


def upcoming(recurring: list[RecurringTransaction], today: str, days: int = 7) -> list[RecurringTransaction]:
    """Active rules due within the next `days` days, soonest first.

    Args:
        recurring: All recurring rules.
        today: Current date (YYYY-MM-DD).
        days: Window size in days.

    Returns:
        Rules sorted by next due date.
    """
    horizon = (date.fromisoformat(today) + timedelta(days=days)).isoformat()
    due_soon = [r for r in recurring if r.active and r.next_due <= horizon]
    return sorted(due_soon, key=lambda r: r.next_due)
