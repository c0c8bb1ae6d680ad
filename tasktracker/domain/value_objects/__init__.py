"""Domain value objects."""

from tasktracker.domain.value_objects.core import FieldValue, ValueKind

__all__ = [
    "FieldValue",
    "ValueKind",
]
