"""FastAPI application entry point.

Wiring only: lifespan, exception handlers, middleware, routers, and the
per-app TaskStore/HistoryLog. No business logic here.

Settings are loaded inside create_app() so that tests can set env (and
clear the get_settings cache) before calling create_app().
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from tasktracker.api.v1 import api_router
from tasktracker.application.services.change_detector import ChangeDetector
from tasktracker.application.services.history_log import HistoryLog
from tasktracker.application.use_cases.tasks import TaskStore
from tasktracker.core.config import get_settings
from tasktracker.core.exception_handlers import register_exception_handlers
from tasktracker.core.lifespan import create_lifespan, init_telemetry
from tasktracker.core.limiter import configure_limiter
from tasktracker.middleware import (
    RequestIDMiddleware,
    RequestSizeLimitMiddleware,
    SecurityHeadersMiddleware,
    TimeoutMiddleware,
)
from tasktracker.pages import render_root_page


def create_app() -> FastAPI:
    """Build and return the FastAPI application with a fresh, empty store."""
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    history_log = HistoryLog()
    app.state.history_log = history_log
    app.state.task_store = TaskStore(history_log, ChangeDetector())

    app.state.limiter = configure_limiter(settings.rate_limit_enabled)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    register_exception_handlers(app)

    # Middleware: last added = outermost. Order: timeout → size limit → request ID → security → CORS.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware, api_prefix="/api/")
    app.add_middleware(
        RequestIDMiddleware,
        header_name=settings.request_id_header,
        correlation_header_name=settings.correlation_id_header,
    )
    app.add_middleware(RequestSizeLimitMiddleware, max_bytes=settings.max_request_size)
    app.add_middleware(TimeoutMiddleware, timeout_seconds=settings.request_timeout_seconds)

    app.include_router(api_router, prefix="/api/v1")

    if settings.telemetry_enabled:
        init_telemetry(app, settings)

    @app.get("/", response_class=HTMLResponse, include_in_schema=False)
    def root() -> HTMLResponse:
        """Landing page with links to API documentation."""
        return HTMLResponse(content=render_root_page(settings.app_name, settings.app_version))

    return app


app = create_app()
