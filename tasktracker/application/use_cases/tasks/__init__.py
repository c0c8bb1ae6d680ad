"""Task use cases."""

from tasktracker.application.use_cases.tasks.task_store import TaskStore

__all__ = ["TaskStore"]
