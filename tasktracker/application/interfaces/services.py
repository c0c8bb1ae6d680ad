"""Service interfaces (ports) for the application layer.

Protocols define the contracts the task store depends on (DIP).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from tasktracker.domain.entities.history import HistoryEntry
    from tasktracker.domain.enums import HistoryAction
    from tasktracker.domain.value_objects.core import FieldValue


class IHistoryLog(Protocol):
    """Protocol for the append-only change log the task store writes to."""

    def append(
        self,
        task_id: str,
        action: HistoryAction,
        description: str,
        field: str | None = None,
        old_value: FieldValue | None = None,
        new_value: FieldValue | None = None,
    ) -> HistoryEntry:
        """Append one entry and return it."""

    def for_task(self, task_id: str) -> list[HistoryEntry]:
        """Return entries for task_id, newest first."""

    def all(self) -> list[HistoryEntry]:
        """Return every entry, newest first."""

    def by_action(self, action: HistoryAction) -> list[HistoryEntry]:
        """Return entries of one action kind, newest first."""

    def clear_for_task(self, task_id: str) -> int:
        """Remove entries for task_id; return how many were removed."""
