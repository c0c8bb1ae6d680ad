"""Rate limiter instance for SlowAPI.

Shared so both main (app.state.limiter) and route modules can use the same
instance without circular imports.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from tasktracker.core.config import get_settings

limiter = Limiter(key_func=get_remote_address)


def _write_limit() -> str:
    return get_settings().write_rate_limit


# Resolved per request so WRITE_RATE_LIMIT can change without re-importing routes.
limit_writes = limiter.limit(_write_limit)


def configure_limiter(enabled: bool) -> Limiter:
    """Switch rate limiting on or off (e.g. off in tests) and return the limiter."""
    limiter.enabled = enabled
    return limiter
