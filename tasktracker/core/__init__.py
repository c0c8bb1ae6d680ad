"""Core: config, exception handlers, lifespan, rate limiter.

Single place for settings and application bootstrap helpers.
"""

from tasktracker.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
