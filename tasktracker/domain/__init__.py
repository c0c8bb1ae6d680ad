"""Domain layer: entities, value objects, enums, and exceptions.

No dependencies on the application or API layers.
"""

from tasktracker.domain.entities import HistoryEntry, TaskEntity
from tasktracker.domain.enums import HistoryAction, TaskPriority, TaskStatus
from tasktracker.domain.exceptions import (
    ResourceNotFoundException,
    TaskTrackerException,
    ValidationException,
)
from tasktracker.domain.value_objects import FieldValue, ValueKind

__all__ = [
    # Entities
    "HistoryEntry",
    "TaskEntity",
    # Enums
    "HistoryAction",
    "TaskPriority",
    "TaskStatus",
    # Exceptions
    "ResourceNotFoundException",
    "TaskTrackerException",
    "ValidationException",
    # Value objects
    "FieldValue",
    "ValueKind",
]
