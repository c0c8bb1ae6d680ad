"""Domain entities."""

from tasktracker.domain.entities.history import HistoryEntry
from tasktracker.domain.entities.task import TaskEntity

__all__ = [
    "HistoryEntry",
    "TaskEntity",
]
