"""
Common date/time helpers.

Storage: timestamps are stored in UTC.
Display: clients format dates locally; the API returns ISO 8601 strings.
"""

from datetime import date, datetime, timezone


def utc_now() -> datetime:
    """
    Get current UTC datetime.

    Returns:
        Current datetime in UTC timezone
    """
    return datetime.now(timezone.utc)


def utc_today() -> date:
    """Current calendar date in UTC."""
    return utc_now().date()


def days_until(target: date, today: date) -> int:
    """
    Whole days from `today` to `target`; negative once `target` has passed.

    Args:
        target: the date being counted down to (e.g. an expiry date)
        today: reference date

    Returns:
        Number of calendar days between the two dates
    """
    return (target - today).days
