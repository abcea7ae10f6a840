"""
UTC datetime utilities for consistent timezone handling.

All datetime values in the system should be timezone-aware UTC.
Use these helpers instead of datetime.now() or datetime.utcnow().
"""

from datetime import UTC, date, datetime, time


def utc_now() -> datetime:
    """Return the current UTC datetime with timezone info."""
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Ensure a datetime is UTC-aware.

    - If None, returns None
    - If naive, assumes UTC and attaches timezone
    - If aware, converts to UTC
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def start_of_day_utc(day: date) -> datetime:
    """Midnight UTC at the start of the given calendar day."""
    return datetime.combine(day, time.min, tzinfo=UTC)


def parse_api_datetime(value: str | None) -> datetime | None:
    """
    Parse an ISO-8601 timestamp from an external API as UTC.

    WooCommerce ``*_gmt`` fields carry no offset; they are treated as UTC.
    Returns None for empty or unparseable values.
    """
    if not value:
        return None
    try:
        return ensure_utc(datetime.fromisoformat(value))
    except ValueError:
        return None
