"""Pytest configuration and fixtures for tasktracker.

HTTP tests run against a fresh create_app() per test (empty store) through
httpx ASGITransport. Unit tests build TaskStore/HistoryLog directly.
"""

import os
from datetime import datetime, timedelta, timezone

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

# High write limit so the shared in-memory rate limiter never trips across tests.
os.environ.setdefault("WRITE_RATE_LIMIT", "10000/minute")
os.environ.setdefault("TELEMETRY_ENABLED", "false")

from tasktracker.application.dtos.task import TaskCreate  # noqa: E402
from tasktracker.application.services.history_log import HistoryLog  # noqa: E402
from tasktracker.application.use_cases.tasks import TaskStore  # noqa: E402
from tasktracker.core.config import get_settings  # noqa: E402
from tasktracker.domain.enums import TaskPriority, TaskStatus  # noqa: E402
from tasktracker.main import create_app  # noqa: E402
from tasktracker.shared.telemetry.telemetry import TelemetryConfig, set_telemetry  # noqa: E402


@pytest.fixture
def app() -> FastAPI:
    """A new application with its own empty TaskStore and HistoryLog."""
    get_settings.cache_clear()
    return create_app()


@pytest.fixture
async def client(app: FastAPI) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def history() -> HistoryLog:
    return HistoryLog()


@pytest.fixture
def store(history: HistoryLog) -> TaskStore:
    return TaskStore(history)


@pytest.fixture
def make_task(store: TaskStore):
    """Factory creating a task in `store` with sensible defaults."""

    def _make(
        title: str = "Write report",
        description: str = "Quarterly numbers",
        status: TaskStatus = TaskStatus.TODO,
        priority: TaskPriority = TaskPriority.MEDIUM,
        category: str | None = None,
        tags: list[str] | None = None,
        due_date: datetime | None = None,
    ):
        return store.create(
            TaskCreate(
                title=title,
                description=description,
                status=status,
                priority=priority,
                category=category,
                tags=tags or [],
                due_date=due_date,
            )
        )

    return _make


@pytest.fixture
def clock(monkeypatch: pytest.MonkeyPatch):
    """Controllable UTC clock patched into every module that reads the time.

    Call clock.advance(seconds) to move time forward.
    """

    class _Clock:
        def __init__(self) -> None:
            self.now = datetime(2025, 1, 15, 12, 0, 0, tzinfo=timezone.utc)

        def __call__(self) -> datetime:
            return self.now

        def advance(self, seconds: float = 1.0) -> datetime:
            self.now = self.now + timedelta(seconds=seconds)
            return self.now

    fake = _Clock()
    monkeypatch.setattr("tasktracker.shared.utils.datetime.utc_now", fake)
    monkeypatch.setattr("tasktracker.application.services.history_log.utc_now", fake)
    monkeypatch.setattr("tasktracker.application.use_cases.tasks.task_store.utc_now", fake)
    return fake


@pytest.fixture
def span_exporter():
    """Register a tracer provider whose finished spans land in memory."""
    exporter = InMemorySpanExporter()
    telemetry = TelemetryConfig(service_name="tasktracker-test", service_version="test")
    provider = telemetry.setup_telemetry(exporter_type="none")
    provider.add_span_processor(SimpleSpanProcessor(exporter))
    set_telemetry(telemetry)
    yield exporter
    set_telemetry(None)
    telemetry.shutdown()
