"""Task domain entity.

Represents a unit of trackable work, independent of storage and transport.
"""

from dataclasses import dataclass, field
from datetime import datetime

from tasktracker.domain.enums import TaskPriority, TaskStatus
from tasktracker.domain.exceptions import ValidationException
from tasktracker.shared.utils.datetime import monotonic_utc_now


@dataclass
class TaskEntity:
    """Domain entity for a task.

    Mutable: the store updates fields in place. id and created_at are set
    once at construction and never changed. Validation runs on construction.
    """

    id: str
    title: str
    description: str
    created_at: datetime
    updated_at: datetime
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    category: str | None = None
    tags: list[str] = field(default_factory=list)
    due_date: datetime | None = None

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Validate task business rules. Raises ValidationException if invalid."""
        if not self.id:
            raise ValidationException("Task ID is required", field="id")
        if not self.title:
            raise ValidationException("Task title must not be empty", field="title")

    def touch(self) -> None:
        """Bump updated_at to now (never backwards)."""
        self.updated_at = monotonic_utc_now(self.updated_at)

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags

    def matches(self, query: str) -> bool:
        """Return whether query occurs (case-insensitive) in title, description, category or a tag."""
        needle = query.lower()
        if needle in self.title.lower() or needle in self.description.lower():
            return True
        if self.category and needle in self.category.lower():
            return True
        return any(needle in tag.lower() for tag in self.tags)
