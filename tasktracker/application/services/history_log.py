"""In-memory, append-only change history for tasks."""

from __future__ import annotations

import itertools
from collections.abc import Iterable

from tasktracker.domain.entities.history import HistoryEntry
from tasktracker.domain.enums import HistoryAction
from tasktracker.domain.value_objects.core import FieldValue
from tasktracker.shared.telemetry.logging import get_logger
from tasktracker.shared.utils.datetime import utc_now

logger = get_logger(__name__)


def _newest_first(entries: Iterable[HistoryEntry]) -> list[HistoryEntry]:
    """Sort by timestamp descending; equal timestamps keep later insertions first."""
    # sorted() is stable under reverse=True, so reversing the input first
    # puts the later of two equal-timestamp entries ahead.
    return sorted(reversed(list(entries)), key=lambda e: e.timestamp, reverse=True)


class HistoryLog:
    """Owns the history entries. Entries are never edited once appended.

    Has no reference to the task store: task_id is not checked and may
    refer to a task that no longer exists.
    """

    def __init__(self) -> None:
        self._entries: list[HistoryEntry] = []
        self._ids = itertools.count(1)

    def __len__(self) -> int:
        return len(self._entries)

    def append(
        self,
        task_id: str,
        action: HistoryAction,
        description: str,
        field: str | None = None,
        old_value: FieldValue | None = None,
        new_value: FieldValue | None = None,
    ) -> HistoryEntry:
        """Create and store a new entry with a fresh id and the current time."""
        entry = HistoryEntry(
            id=str(next(self._ids)),
            task_id=task_id,
            action=action,
            timestamp=utc_now(),
            description=description,
            field=field,
            old_value=old_value,
            new_value=new_value,
        )
        self._entries.append(entry)
        logger.debug(
            "History appended id=%s task_id=%s action=%s field=%s",
            entry.id,
            task_id,
            action.value,
            field,
        )
        return entry

    def for_task(self, task_id: str) -> list[HistoryEntry]:
        """Return all entries for task_id, newest first."""
        return _newest_first(e for e in self._entries if e.task_id == task_id)

    def all(self) -> list[HistoryEntry]:
        """Return every entry across all tasks, newest first."""
        return _newest_first(self._entries)

    def by_action(self, action: HistoryAction) -> list[HistoryEntry]:
        """Return every entry of the given action kind, newest first."""
        return _newest_first(e for e in self._entries if e.action == action)

    def clear_for_task(self, task_id: str) -> int:
        """Remove all entries for task_id. Idempotent; returns the number removed."""
        before = len(self._entries)
        self._entries = [e for e in self._entries if e.task_id != task_id]
        removed = before - len(self._entries)
        if removed:
            logger.info("History cleared task_id=%s removed=%s", task_id, removed)
        return removed
