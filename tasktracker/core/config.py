"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Settings are validated at load time.
"""

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_EXPORTERS = ("console", "otlp", "none")


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings have defaults; the service starts with no environment at all.
    Cross-field rules are checked in validate_telemetry.
    """

    # App
    app_name: str = "tasktracker"
    app_version: str = "1.0.0"
    debug: bool = False

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Server (python -m tasktracker)
    host: str = "127.0.0.1"
    port: int = 8000

    # Request / middleware
    max_request_size: int = Field(default=64 * 1024, gt=0)  # 64KB
    request_timeout_seconds: int = 30
    request_id_header: str = "X-Request-ID"
    correlation_id_header: str = "X-Correlation-ID"

    # Rate limiting (slowapi) on write endpoints
    rate_limit_enabled: bool = True
    write_rate_limit: str = "120/minute"

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_telemetry(self) -> "Settings":
        """Validate telemetry exporter settings.

        - Exporter must be one of console, otlp, none.
        - otlp requires TELEMETRY_OTLP_ENDPOINT.
        - Sample rate must be within [0, 1].
        """
        if self.telemetry_exporter not in _EXPORTERS:
            raise ValueError(
                f"telemetry_exporter must be one of {', '.join(_EXPORTERS)}, "
                f"got: {self.telemetry_exporter!r}"
            )
        if self.telemetry_exporter == "otlp" and not self.telemetry_otlp_endpoint:
            raise ValueError(
                "TELEMETRY_OTLP_ENDPOINT is required when telemetry_exporter is 'otlp'."
            )
        if not 0.0 <= self.telemetry_sample_rate <= 1.0:
            raise ValueError("telemetry_sample_rate must be between 0.0 and 1.0")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
