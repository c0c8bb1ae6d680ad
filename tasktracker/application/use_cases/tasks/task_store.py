"""Task operations: create, query, update, delete, bulk, statistics.

TaskStore owns the task collection and writes to the history log; the log
never calls back into the store.
"""

from __future__ import annotations

import itertools

from tasktracker.application.dtos.task import (
    BulkDeleteResult,
    BulkItemOutcome,
    TaskCreate,
    TaskStatistics,
    TaskUpdate,
)
from tasktracker.application.interfaces.services import IHistoryLog
from tasktracker.application.services.change_detector import ChangeDetector
from tasktracker.domain.entities.task import TaskEntity
from tasktracker.domain.enums import HistoryAction, TaskPriority, TaskStatus
from tasktracker.domain.exceptions import ResourceNotFoundException
from tasktracker.shared.telemetry.logging import get_logger
from tasktracker.shared.telemetry.tracing import add_span_attributes, traced
from tasktracker.shared.utils.datetime import ensure_utc, utc_now

logger = get_logger(__name__)


class TaskStore:
    """In-memory task collection. Order of insertion is the store order.

    Not thread-safe: callers must serialize mutating calls (the API does so
    by running every handler on the event loop).
    """

    def __init__(
        self,
        history: IHistoryLog,
        change_detector: ChangeDetector | None = None,
    ) -> None:
        self.history = history
        self.change_detector = change_detector or ChangeDetector()
        self._tasks: list[TaskEntity] = []
        self._ids = itertools.count(1)

    def __len__(self) -> int:
        return len(self._tasks)

    # ---- lifecycle ----

    @traced("task_store.create")
    def create(self, data: TaskCreate) -> TaskEntity:
        """Create a task with a fresh id and log a CREATED entry."""
        now = utc_now()
        task = TaskEntity(
            id=str(next(self._ids)),
            title=data.title,
            description=data.description,
            status=data.status,
            priority=data.priority,
            category=data.category,
            tags=list(data.tags),
            due_date=ensure_utc(data.due_date),
            created_at=now,
            updated_at=now,
        )
        self._tasks.append(task)
        add_span_attributes(
            id=task.id, status=task.status.value, priority=task.priority.value
        )
        self.history.append(
            task.id, HistoryAction.CREATED, f'Task "{task.title}" created'
        )
        logger.info(
            "Task created id=%s status=%s priority=%s",
            task.id,
            task.status.value,
            task.priority.value,
        )
        return task

    def find_one(self, task_id: str) -> TaskEntity:
        """Return the task with task_id; raise ResourceNotFoundException if absent."""
        for task in self._tasks:
            if task.id == task_id:
                return task
        raise ResourceNotFoundException("task", task_id)

    @traced("task_store.update")
    def update(self, task_id: str, patch: TaskUpdate) -> TaskEntity:
        """Apply the fields of patch that really change; one history entry per change.

        updated_at is refreshed even when nothing changed.
        """
        add_span_attributes(id=task_id)
        task = self.find_one(task_id)
        changes = self.change_detector.detect(task, patch.provided())
        for change in changes:
            setattr(task, change.field, change.value)
            self.history.append(
                task.id,
                change.action,
                change.description,
                field=change.field,
                old_value=change.old_value,
                new_value=change.new_value,
            )
        task.touch()
        add_span_attributes(changed_fields=[c.field for c in changes])
        if changes:
            logger.info(
                "Task updated id=%s fields=%s",
                task.id,
                ",".join(c.field for c in changes),
            )
        return task

    @traced("task_store.remove")
    def remove(self, task_id: str) -> None:
        """Delete the task and log a DELETED entry. Its earlier history is kept."""
        add_span_attributes(id=task_id)
        task = self.find_one(task_id)
        self._tasks.remove(task)
        self.history.append(
            task.id, HistoryAction.DELETED, f'Task "{task.title}" deleted'
        )
        logger.info("Task deleted id=%s", task.id)

    # ---- queries ----

    def find_all(self) -> list[TaskEntity]:
        return list(self._tasks)

    def find_by_status(self, status: TaskStatus) -> list[TaskEntity]:
        return [t for t in self._tasks if t.status == status]

    def find_by_priority(self, priority: TaskPriority) -> list[TaskEntity]:
        return [t for t in self._tasks if t.priority == priority]

    def find_by_category(self, category: str) -> list[TaskEntity]:
        return [t for t in self._tasks if t.category == category]

    def find_by_tag(self, tag: str) -> list[TaskEntity]:
        """Return tasks whose tags contain tag (exact match)."""
        return [t for t in self._tasks if t.has_tag(tag)]

    def search(self, query: str) -> list[TaskEntity]:
        """Case-insensitive substring search over title, description, category and tags."""
        return [t for t in self._tasks if t.matches(query)]

    def get_categories(self) -> list[str]:
        """Return distinct non-empty categories in first-seen order."""
        return list(dict.fromkeys(t.category for t in self._tasks if t.category))

    def get_tags(self) -> list[str]:
        """Return distinct tags across all tasks in first-seen order."""
        return list(dict.fromkeys(tag for t in self._tasks for tag in t.tags))

    def get_statistics(self) -> TaskStatistics:
        """Count tasks by status, priority (both zero-filled) and category (occurring only)."""
        by_status = dict.fromkeys(TaskStatus, 0)
        by_priority = dict.fromkeys(TaskPriority, 0)
        by_category: dict[str, int] = {}
        for task in self._tasks:
            by_status[task.status] += 1
            by_priority[task.priority] += 1
            if task.category:
                by_category[task.category] = by_category.get(task.category, 0) + 1
        return TaskStatistics(
            total=len(self._tasks),
            by_status=by_status,
            by_priority=by_priority,
            by_category=by_category,
        )

    # ---- bulk ----

    def _attempt_status_change(self, task_id: str, status: TaskStatus) -> BulkItemOutcome:
        try:
            task = self.update(task_id, TaskUpdate(status=status))
        except ResourceNotFoundException as e:
            return BulkItemOutcome(task_id=task_id, ok=False, error=e.message)
        return BulkItemOutcome(task_id=task_id, ok=True, task=task)

    def _attempt_remove(self, task_id: str) -> BulkItemOutcome:
        try:
            self.remove(task_id)
        except ResourceNotFoundException as e:
            return BulkItemOutcome(task_id=task_id, ok=False, error=e.message)
        return BulkItemOutcome(task_id=task_id, ok=True)

    @traced("task_store.bulk_update_status")
    def bulk_update_status(self, ids: list[str], status: TaskStatus) -> list[TaskEntity]:
        """Set status on every known id; unknown ids are skipped.

        Returns the updated tasks in input order.
        """
        outcomes = [self._attempt_status_change(task_id, status) for task_id in ids]
        skipped = [o.task_id for o in outcomes if not o.ok]
        if skipped:
            logger.info("Bulk status update skipped unknown ids=%s", skipped)
        add_span_attributes(
            ids=ids, status=status.value, requested=len(ids), skipped=len(skipped)
        )
        return [o.task for o in outcomes if o.ok and o.task is not None]

    @traced("task_store.bulk_delete")
    def bulk_delete(self, ids: list[str]) -> BulkDeleteResult:
        """Delete every known id; one failure never stops the rest."""
        result = BulkDeleteResult.from_outcomes(
            [self._attempt_remove(task_id) for task_id in ids]
        )
        add_span_attributes(ids=ids, deleted=result.deleted, failed=result.failed)
        logger.info("Bulk delete deleted=%s failed=%s", result.deleted, result.failed)
        return result
