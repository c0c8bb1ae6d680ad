"""DTOs for task use cases (no dependency on FastAPI or pydantic)."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Any, Final

from tasktracker.domain.entities.task import TaskEntity
from tasktracker.domain.enums import TaskPriority, TaskStatus


class _Unset:
    """Marker type for 'field not present in the patch'."""

    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Final = _Unset()


@dataclass(frozen=True)
class TaskCreate:
    """Input for creating a task. Omitted optionals get their defaults."""

    title: str
    description: str
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    category: str | None = None
    tags: list[str] = field(default_factory=list)
    due_date: datetime | None = None


@dataclass(frozen=True)
class TaskUpdate:
    """Partial update. A field left as UNSET is not part of the patch.

    category and due_date accept None to clear the value.
    """

    title: str | _Unset = UNSET
    description: str | _Unset = UNSET
    status: TaskStatus | _Unset = UNSET
    priority: TaskPriority | _Unset = UNSET
    category: str | None | _Unset = UNSET
    tags: list[str] | _Unset = UNSET
    due_date: datetime | None | _Unset = UNSET

    def provided(self) -> dict[str, Any]:
        """Return {field_name: value} for every field present in the patch."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not UNSET
        }


@dataclass(frozen=True)
class TaskStatistics:
    """Aggregate counts. by_status and by_priority cover every enum value."""

    total: int
    by_status: dict[TaskStatus, int]
    by_priority: dict[TaskPriority, int]
    by_category: dict[str, int]


@dataclass(frozen=True)
class BulkItemOutcome:
    """Result of one per-id attempt inside a bulk operation."""

    task_id: str
    ok: bool
    task: TaskEntity | None = None
    error: str | None = None


@dataclass(frozen=True)
class BulkDeleteResult:
    """Counters returned by bulk delete."""

    deleted: int
    failed: int

    @classmethod
    def from_outcomes(cls, outcomes: list[BulkItemOutcome]) -> BulkDeleteResult:
        deleted = sum(1 for o in outcomes if o.ok)
        return cls(deleted=deleted, failed=len(outcomes) - deleted)
