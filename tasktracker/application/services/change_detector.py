"""Field-by-field diff of a task against a partial update.

Each attribute present in the patch and different from the current value
yields one FieldChange carrying the history action, old/new snapshots and
a human-readable description. Nothing here mutates the task.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from tasktracker.domain.entities.task import TaskEntity
from tasktracker.domain.enums import HistoryAction
from tasktracker.domain.value_objects.core import FieldValue
from tasktracker.shared.utils.datetime import ensure_utc


@dataclass(frozen=True)
class FieldChange:
    """One detected change: what to write to the task and what to log."""

    field: str
    action: HistoryAction
    value: Any
    old_value: FieldValue | None
    new_value: FieldValue | None
    description: str


def _same_value(old: Any, new: Any) -> bool:
    return old == new


def _same_tags(old: list[str], new: list[str]) -> bool:
    return sorted(old) == sorted(new)


def _same_instant(old: datetime | None, new: datetime | None) -> bool:
    return ensure_utc(old) == ensure_utc(new)


def _copy_tags(tags: list[str]) -> list[str]:
    return list(tags)


def _keep(value: Any) -> Any:
    return value


@dataclass(frozen=True)
class _FieldRule:
    label: str
    action: HistoryAction
    snapshot: Callable[[Any], FieldValue]
    same: Callable[[Any, Any], bool] = _same_value
    normalize: Callable[[Any], Any] = _keep


_RULES: dict[str, _FieldRule] = {
    "title": _FieldRule("Title", HistoryAction.UPDATED, FieldValue.text),
    "description": _FieldRule("Description", HistoryAction.UPDATED, FieldValue.text),
    "status": _FieldRule("Status", HistoryAction.STATUS_CHANGED, FieldValue.status),
    "priority": _FieldRule("Priority", HistoryAction.PRIORITY_CHANGED, FieldValue.priority),
    "category": _FieldRule("Category", HistoryAction.CATEGORY_CHANGED, FieldValue.text),
    "tags": _FieldRule(
        "Tags", HistoryAction.TAGS_CHANGED, FieldValue.tags, _same_tags, _copy_tags
    ),
    "due_date": _FieldRule(
        "Due date", HistoryAction.UPDATED, FieldValue.timestamp, _same_instant, ensure_utc
    ),
}

UPDATABLE_FIELDS: tuple[str, ...] = tuple(_RULES)


def _describe(label: str, old: FieldValue | None, new: FieldValue | None) -> str:
    if old is None:
        return f"{label} set to {new}"
    if new is None:
        return f"{label} cleared (was {old})"
    return f"{label} changed from {old} to {new}"


class ChangeDetector:
    """Compares a task with a patch and reports the fields that really change.

    Rule per attribute: present in the patch AND not equal to the current
    value. Tags compare as sorted sequences, due dates as UTC instants,
    everything else by value. For optional attributes, None on both sides is
    unchanged and None on exactly one side is a change.
    """

    def detect(self, task: TaskEntity, patch: dict[str, Any]) -> list[FieldChange]:
        """Return one FieldChange per changed attribute, in patch order.

        Raises:
            KeyError: If patch names an attribute that cannot be updated.
        """
        changes: list[FieldChange] = []
        for name, raw in patch.items():
            rule = _RULES[name]
            current = getattr(task, name)
            if rule.same(current, raw):
                continue
            old_value = rule.snapshot(current) if current is not None else None
            new_value = rule.snapshot(raw) if raw is not None else None
            changes.append(
                FieldChange(
                    field=name,
                    action=rule.action,
                    value=rule.normalize(raw),
                    old_value=old_value,
                    new_value=new_value,
                    description=_describe(rule.label, old_value, new_value),
                )
            )
        return changes
