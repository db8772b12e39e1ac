"""Date utilities for zenith.

Pure functions for month calculations and formatting.
"""

from datetime import date, datetime, timedelta

from zenith.domain.models import Month


def month_range(month: Month) -> tuple[str, str, str]:
    """Calculate date range and label for a month.

    Args:
        month: Month in YYYY-MM format.

    Returns:
        Tuple of (since_date, until_date, label) where:
        - since_date: First day of month (YYYY-MM-DD)
        - until_date: First day of next month (YYYY-MM-DD)
        - label: Human-readable month (e.g., "January 2025")

    Raises:
        ValueError: If month is not a valid YYYY-MM string.
    """
    dt = datetime.strptime(month, "%Y-%m")
    since = dt.strftime("%Y-%m-01")
    next_month = (dt.replace(day=28) + timedelta(days=4)).replace(day=1)
    until = next_month.strftime("%Y-%m-%d")
    label = dt.strftime("%B %Y")
    return since, until, label


def to_month(year: int, month: int) -> Month:
    """Build a Month from a (year, month) pair.

    Raises:
        ValueError: If month is outside 1-12.
    """
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month number: {month}")
    return Month(f"{year:04d}-{month:02d}")


def current_month(today: date | None = None) -> Month:
    """Month containing today (or the given date)."""
    today = today or date.today()
    return to_month(today.year, today.month)


def resolve_month(month: str | None) -> tuple[Month, str]:
    """Validate an optional --month argument.

    Args:
        month: Month string (YYYY-MM) or None for the current month.

    Returns:
        Tuple of (month, label).

    Raises:
        ValueError: If month is not a valid YYYY-MM string.
    """
    target = Month(month) if month else current_month()
    _, _, label = month_range(target)
    return target, label
