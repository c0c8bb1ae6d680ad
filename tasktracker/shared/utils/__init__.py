"""Shared utilities: datetime helpers."""

from tasktracker.shared.utils.datetime import ensure_utc, monotonic_utc_now, utc_now

__all__ = [
    "utc_now",
    "ensure_utc",
    "monotonic_utc_now",
]
