"""Shared utilities: telemetry and cross-cutting helpers.

Used by domain, application, and API layers. No business logic.
"""

from tasktracker.shared.utils import ensure_utc, monotonic_utc_now, utc_now

__all__ = [
    "utc_now",
    "ensure_utc",
    "monotonic_utc_now",
]
