"""Domain value objects for the task tracker.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from tasktracker.domain.enums import TaskPriority, TaskStatus
from tasktracker.shared.utils.datetime import ensure_utc


class ValueKind(str, Enum):
    """Tag of a FieldValue; decides which Python type the value holds."""

    TEXT = "text"
    STATUS = "status"
    PRIORITY = "priority"
    TAGS = "tags"
    TIMESTAMP = "timestamp"


_EXPECTED_TYPES: dict[ValueKind, type] = {
    ValueKind.TEXT: str,
    ValueKind.STATUS: TaskStatus,
    ValueKind.PRIORITY: TaskPriority,
    ValueKind.TAGS: tuple,
    ValueKind.TIMESTAMP: datetime,
}


@dataclass(frozen=True)
class FieldValue:
    """Snapshot of one task attribute, as recorded in history.

    A closed tagged value: kind says which of str, TaskStatus, TaskPriority,
    tuple[str, ...] or datetime the value is. An absent value is represented
    by None in place of a FieldValue, never by a FieldValue wrapping None.
    """

    kind: ValueKind
    value: str | TaskStatus | TaskPriority | tuple[str, ...] | datetime

    def __post_init__(self) -> None:
        expected = _EXPECTED_TYPES[self.kind]
        if not isinstance(self.value, expected):
            raise TypeError(
                f"FieldValue of kind {self.kind.value} needs {expected.__name__}, "
                f"got {type(self.value).__name__}"
            )

    @classmethod
    def text(cls, value: str) -> "FieldValue":
        return cls(ValueKind.TEXT, value)

    @classmethod
    def status(cls, value: TaskStatus) -> "FieldValue":
        return cls(ValueKind.STATUS, value)

    @classmethod
    def priority(cls, value: TaskPriority) -> "FieldValue":
        return cls(ValueKind.PRIORITY, value)

    @classmethod
    def tags(cls, value: list[str] | tuple[str, ...]) -> "FieldValue":
        return cls(ValueKind.TAGS, tuple(value))

    @classmethod
    def timestamp(cls, value: datetime) -> "FieldValue":
        return cls(ValueKind.TIMESTAMP, ensure_utc(value))  # type: ignore[arg-type]

    def to_primitive(self) -> str | list[str]:
        """Return the JSON-ready form: str, list of str, or ISO-8601 string."""
        if self.kind is ValueKind.TAGS:
            return list(self.value)  # type: ignore[arg-type]
        if self.kind is ValueKind.TIMESTAMP:
            return self.value.isoformat()  # type: ignore[union-attr]
        if isinstance(self.value, Enum):
            return self.value.value
        return self.value  # type: ignore[return-value]

    def __str__(self) -> str:
        primitive = self.to_primitive()
        if isinstance(primitive, list):
            return "[" + ", ".join(primitive) + "]"
        return primitive
