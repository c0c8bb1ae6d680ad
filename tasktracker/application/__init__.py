"""Application layer: DTOs, interfaces, services, use cases.

Depends only on the domain and protocol definitions (DIP).
"""

from tasktracker.application.interfaces import IHistoryLog
from tasktracker.application.services import ChangeDetector, HistoryLog
from tasktracker.application.use_cases.tasks import TaskStore

__all__ = [
    "ChangeDetector",
    "HistoryLog",
    "IHistoryLog",
    "TaskStore",
]
