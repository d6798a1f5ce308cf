"""Datetime helpers for the API layer.

All datetime fields in responses are UTC (ISO 8601). Dates of birth and
other calendar dates are plain ``date`` values with no timezone.
"""

from datetime import date, datetime, timezone


def now_utc() -> datetime:
    """Get the current time in UTC, timezone-aware."""
    return datetime.now(timezone.utc)


def today_utc() -> date:
    """Return the current date in UTC timezone."""
    return now_utc().date()
