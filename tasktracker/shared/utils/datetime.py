"""
UTC datetime utilities for consistent timezone handling.

All datetime values in the system should be timezone-aware UTC.
Use these helpers instead of datetime.now() or datetime.utcnow().
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """
    Return the current UTC datetime with timezone info.

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Ensure a datetime is UTC-aware.

    - If None, returns None
    - If naive, assumes UTC and attaches timezone
    - If aware, converts to UTC

    Used wherever two instants are compared (e.g. due dates) so that
    equal instants in different offsets compare equal.

    Args:
        dt: A datetime that may be naive or aware

    Returns:
        UTC-aware datetime or None
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        # Naive datetime - assume it's UTC and attach timezone
        return dt.replace(tzinfo=UTC)

    return dt.astimezone(UTC)


def monotonic_utc_now(previous: datetime | None) -> datetime:
    """
    Return utc_now(), but never earlier than previous.

    Keeps updated_at non-decreasing even if the wall clock steps back.

    Args:
        previous: Last timestamp recorded for the same object, if any

    Returns:
        Timezone-aware datetime in UTC, >= previous
    """
    now = utc_now()
    if previous is not None and now < previous:
        return previous
    return now
