"""Application services: history log and change detection."""

from tasktracker.application.services.change_detector import (
    UPDATABLE_FIELDS,
    ChangeDetector,
    FieldChange,
)
from tasktracker.application.services.history_log import HistoryLog

__all__ = [
    "UPDATABLE_FIELDS",
    "ChangeDetector",
    "FieldChange",
    "HistoryLog",
]
