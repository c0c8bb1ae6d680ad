"""Request/response schemas for the task history API."""

from datetime import datetime

from pydantic import BaseModel

from tasktracker.domain.entities.history import HistoryEntry
from tasktracker.domain.enums import HistoryAction

HistoryPrimitive = str | list[str] | None


class HistoryEntryResponse(BaseModel):
    """Single history entry (read). old_value/new_value are JSON primitives."""

    id: str
    task_id: str
    action: HistoryAction
    field: str | None = None
    old_value: HistoryPrimitive = None
    new_value: HistoryPrimitive = None
    value_kind: str | None = None
    timestamp: datetime
    description: str

    @classmethod
    def from_entry(cls, entry: HistoryEntry) -> "HistoryEntryResponse":
        snapshot = entry.new_value or entry.old_value
        return cls(
            id=entry.id,
            task_id=entry.task_id,
            action=entry.action,
            field=entry.field,
            old_value=entry.old_value.to_primitive() if entry.old_value else None,
            new_value=entry.new_value.to_primitive() if entry.new_value else None,
            value_kind=snapshot.kind.value if snapshot else None,
            timestamp=entry.timestamp,
            description=entry.description,
        )


def history_response_list(entries: list[HistoryEntry]) -> list[HistoryEntryResponse]:
    """Serialize history entries, keeping their order."""
    return [HistoryEntryResponse.from_entry(e) for e in entries]
