"""Task API schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from tasktracker.application.dtos.task import (
    BulkDeleteResult,
    TaskCreate,
    TaskStatistics,
    TaskUpdate,
)
from tasktracker.domain.enums import TaskPriority, TaskStatus

TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 1000
CATEGORY_MAX_LENGTH = 50

# Fields that may be omitted from an update but not sent as null.
_NON_NULLABLE_UPDATE_FIELDS = ("title", "description", "status", "priority", "tags")


class TaskCreateRequest(BaseModel):
    """Request body for creating a task."""

    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str = Field(..., min_length=1, max_length=DESCRIPTION_MAX_LENGTH)
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    category: str | None = Field(default=None, min_length=1, max_length=CATEGORY_MAX_LENGTH)
    tags: list[str] | None = None
    due_date: datetime | None = None

    def to_dto(self) -> TaskCreate:
        return TaskCreate(
            title=self.title,
            description=self.description,
            status=self.status or TaskStatus.TODO,
            priority=self.priority or TaskPriority.MEDIUM,
            category=self.category,
            tags=list(self.tags or []),
            due_date=self.due_date,
        )


class TaskUpdateRequest(BaseModel):
    """Request body for updating a task (partial).

    Only fields present in the body take part in the update. category and
    due_date may be null to clear them.
    """

    title: str | None = Field(default=None, min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str | None = Field(
        default=None, min_length=1, max_length=DESCRIPTION_MAX_LENGTH
    )
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    category: str | None = Field(default=None, min_length=1, max_length=CATEGORY_MAX_LENGTH)
    tags: list[str] | None = None
    due_date: datetime | None = None

    @model_validator(mode="after")
    def _reject_nulls(self) -> "TaskUpdateRequest":
        for name in _NON_NULLABLE_UPDATE_FIELDS:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} must not be null")
        return self

    def to_dto(self) -> TaskUpdate:
        return TaskUpdate(**self.model_dump(exclude_unset=True))


class TaskResponse(BaseModel):
    """Task representation returned by every task endpoint."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str
    status: TaskStatus
    priority: TaskPriority
    category: str | None = None
    tags: list[str]
    due_date: datetime | None = None
    created_at: datetime
    updated_at: datetime


class BulkUpdateStatusRequest(BaseModel):
    """Request body for bulk status update."""

    ids: list[str]
    status: TaskStatus


class BulkDeleteRequest(BaseModel):
    """Request body for bulk delete."""

    ids: list[str]


class BulkDeleteResponse(BaseModel):
    """Counts of deleted and not-found ids."""

    model_config = ConfigDict(from_attributes=True)

    deleted: int = Field(..., ge=0)
    failed: int = Field(..., ge=0)

    @classmethod
    def from_result(cls, result: BulkDeleteResult) -> "BulkDeleteResponse":
        return cls.model_validate(result)


class TaskStatisticsResponse(BaseModel):
    """Aggregate counts keyed by status, priority and category labels."""

    total: int
    by_status: dict[str, int]
    by_priority: dict[str, int]
    by_category: dict[str, int]

    @classmethod
    def from_statistics(cls, stats: TaskStatistics) -> "TaskStatisticsResponse":
        return cls(
            total=stats.total,
            by_status={k.value: v for k, v in stats.by_status.items()},
            by_priority={k.value: v for k, v in stats.by_priority.items()},
            by_category=dict(stats.by_category),
        )


def task_response_list(tasks: list[Any]) -> list[TaskResponse]:
    """Serialize a list of task entities."""
    return [TaskResponse.model_validate(t) for t in tasks]
