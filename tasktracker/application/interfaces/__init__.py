"""Application interfaces (Protocols)."""

from tasktracker.application.interfaces.services import IHistoryLog

__all__ = ["IHistoryLog"]
