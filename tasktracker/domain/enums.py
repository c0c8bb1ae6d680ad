"""Domain enumerations for the task tracker.

Enums represent fixed sets of domain values. String values equal member
names and are what clients send and receive.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class TaskStatus(_ValuesMixin, str, Enum):
    """Task lifecycle status. Any status may move to any other."""

    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"
    CANCELLED = "CANCELLED"


class TaskPriority(_ValuesMixin, str, Enum):
    """Task priority."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"


class HistoryAction(_ValuesMixin, str, Enum):
    """Kind of a history entry.

    STATUS/PRIORITY/CATEGORY/TAGS changes have their own kinds; title,
    description and due date changes are recorded as UPDATED.
    """

    CREATED = "CREATED"
    UPDATED = "UPDATED"
    STATUS_CHANGED = "STATUS_CHANGED"
    PRIORITY_CHANGED = "PRIORITY_CHANGED"
    CATEGORY_CHANGED = "CATEGORY_CHANGED"
    TAGS_CHANGED = "TAGS_CHANGED"
    DELETED = "DELETED"
