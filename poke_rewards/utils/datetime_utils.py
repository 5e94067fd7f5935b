"""
Datetime utilities.

Provides timezone-aware datetime functions.
"""

from datetime import UTC, date, datetime


def utc_now() -> datetime:
    """
    Get current UTC datetime with timezone info.

    Returns:
        Current datetime in UTC with timezone awareness
    """
    return datetime.now(UTC)


def utc_today(now: datetime | None = None) -> date:
    """
    Get the UTC calendar date for a moment (default: now).

    Args:
        now: Timezone-aware datetime; naive values are taken as UTC

    Returns:
        UTC calendar date
    """
    moment = ensure_utc(now or utc_now())
    return moment.date()


def ensure_utc(moment: datetime) -> datetime:
    """
    Normalize a datetime to UTC.

    Naive datetimes (as returned by some database drivers) are assumed
    to already be UTC.
    """
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)
