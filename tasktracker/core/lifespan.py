"""Application lifespan: startup and shutdown.

Single place for startup/shutdown logic. Used by main.py; no business logic
here, only wiring of logging and telemetry. The task store and history log
are created in create_app() so they exist even when the lifespan does not
run (e.g. httpx ASGITransport in tests). Telemetry is set up there too, via
init_telemetry(): request instrumentation adds middleware, which Starlette
only accepts before the app has started.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from tasktracker.core.config import Settings, get_settings
from tasktracker.shared.telemetry.logging import setup_logging
from tasktracker.shared.telemetry.telemetry import (
    TelemetryConfig,
    get_telemetry,
    set_telemetry,
)

logger = logging.getLogger(__name__)


def init_telemetry(app: FastAPI, settings: Settings) -> TelemetryConfig:
    """Build the tracer provider, register it and instrument app and logging."""
    telemetry = TelemetryConfig(
        service_name=settings.app_name,
        service_version=settings.app_version,
        environment=settings.telemetry_environment,
    )
    telemetry.setup_telemetry(
        exporter_type=settings.telemetry_exporter,
        otlp_endpoint=settings.telemetry_otlp_endpoint,
        sample_rate=settings.telemetry_sample_rate,
    )
    set_telemetry(telemetry)
    telemetry.instrument_fastapi(app)
    telemetry.instrument_logging()
    return telemetry


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup: logging. Shutdown: flush and unregister telemetry.
    """
    settings = get_settings()

    # ---- Startup ----
    setup_logging()
    logger.info(
        "%s %s started (telemetry %s)",
        settings.app_name,
        settings.app_version,
        "on" if get_telemetry() is not None else "off",
    )

    yield

    # ---- Shutdown ----
    telemetry = get_telemetry()
    if telemetry is not None:
        telemetry.shutdown()
        set_telemetry(None)

    task_store = getattr(app.state, "task_store", None)
    if task_store is not None:
        logger.info("Shutting down; %s in-memory tasks discarded", len(task_store))
