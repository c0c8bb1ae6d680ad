"""Application DTOs (plain dataclasses passed between API and use cases)."""

from tasktracker.application.dtos.task import (
    UNSET,
    BulkDeleteResult,
    BulkItemOutcome,
    TaskCreate,
    TaskStatistics,
    TaskUpdate,
)

__all__ = [
    "UNSET",
    "BulkDeleteResult",
    "BulkItemOutcome",
    "TaskCreate",
    "TaskStatistics",
    "TaskUpdate",
]
