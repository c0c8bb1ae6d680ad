"""History entry domain entity (immutable audit record of one change)."""

from dataclasses import dataclass
from datetime import datetime

from tasktracker.domain.enums import HistoryAction
from tasktracker.domain.value_objects.core import FieldValue


@dataclass(frozen=True)
class HistoryEntry:
    """One field-level change or lifecycle event on a task.

    task_id is a plain reference: it may point at a task that has since
    been deleted. field, old_value and new_value are None for lifecycle
    events (CREATED, DELETED).
    """

    id: str
    task_id: str
    action: HistoryAction
    timestamp: datetime
    description: str
    field: str | None = None
    old_value: FieldValue | None = None
    new_value: FieldValue | None = None
