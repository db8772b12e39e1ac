"""Pure functions for savings goals."""

import math
from dataclasses import dataclass, replace

from zenith.domain.models import Money


@dataclass(frozen=True)
class Goal:
    """Savings goal with a running balance and a planned monthly contribution."""

    title: str
    current: Money
    target: Money
    monthly_contribution: Money = Money(0)
    id: int | None = None


def goal_progress(goal: Goal) -> float:
    """Fraction of the target saved, capped at 1.0. A goal without a target has no progress."""
    if goal.target <= 0:
        return 0.0
    return min(goal.current / goal.target, 1.0)


def months_to_goal(goal: Goal) -> int | None:
    """Whole months of contributions still needed to reach the target.

    Returns:
        0 once the target is reached, None when nothing is being contributed.
    """
    remaining = goal.target - goal.current
    if remaining <= 0:
        return 0
    if goal.monthly_contribution <= 0:
        return None
    return math.ceil(remaining / goal.monthly_contribution)


def contribute(goal: Goal, amount: Money) -> Goal:
    """New goal with amount added to its balance. The balance never goes below zero."""
    return replace(goal, current=Money(max(goal.current + amount, 0)))


def validate_goal(title: str, target: Money) -> tuple[bool, str | None]:
    """Check a goal before it is stored.

    Returns:
        Tuple of (is_valid, error_message).
    """
    if not title.strip():
        return False, "Goal title cannot be empty"
    if target <= 0:
        return False, "Goal target must be positive"
    return True, None
