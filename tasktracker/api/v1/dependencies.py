"""Presentation-layer dependency injection.

The task store and history log are created once per app in create_app()
and kept on app.state; routes receive them through these dependencies and
never construct them.
"""

from fastapi import Request

from tasktracker.application.services.history_log import HistoryLog
from tasktracker.application.use_cases.tasks import TaskStore


def get_task_store(request: Request) -> TaskStore:
    """Return the TaskStore owned by the running app."""
    return request.app.state.task_store


def get_history_log(request: Request) -> HistoryLog:
    """Return the HistoryLog owned by the running app."""
    return request.app.state.history_log
