"""Tests for the FieldValue tagged value."""

from datetime import datetime, timedelta, timezone

import pytest

from tasktracker.domain.enums import TaskPriority, TaskStatus
from tasktracker.domain.value_objects.core import FieldValue, ValueKind


class TestConstruction:
    def test_constructors_set_kind(self) -> None:
        assert FieldValue.text("x").kind is ValueKind.TEXT
        assert FieldValue.status(TaskStatus.DONE).kind is ValueKind.STATUS
        assert FieldValue.priority(TaskPriority.LOW).kind is ValueKind.PRIORITY
        assert FieldValue.tags(["a"]).kind is ValueKind.TAGS
        assert FieldValue.timestamp(datetime(2025, 1, 1)).kind is ValueKind.TIMESTAMP

    def test_wrong_type_for_kind_raises(self) -> None:
        with pytest.raises(TypeError):
            FieldValue(ValueKind.STATUS, "DONE")
        with pytest.raises(TypeError):
            FieldValue(ValueKind.TAGS, ["a"])  # type: ignore[arg-type]

    def test_tags_are_frozen_to_tuple(self) -> None:
        tags = ["a", "b"]
        value = FieldValue.tags(tags)
        tags.append("c")
        assert value.value == ("a", "b")

    def test_timestamp_normalized_to_utc(self) -> None:
        local = datetime(2025, 1, 1, 14, 0, tzinfo=timezone(timedelta(hours=2)))
        value = FieldValue.timestamp(local)
        assert value.value == datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)
        assert value.value.utcoffset() == timedelta(0)


class TestPrimitive:
    def test_text(self) -> None:
        assert FieldValue.text("hello").to_primitive() == "hello"

    def test_enums_become_their_value(self) -> None:
        assert FieldValue.status(TaskStatus.IN_PROGRESS).to_primitive() == "IN_PROGRESS"
        assert FieldValue.priority(TaskPriority.URGENT).to_primitive() == "URGENT"

    def test_tags_become_list(self) -> None:
        assert FieldValue.tags(("a", "b")).to_primitive() == ["a", "b"]

    def test_timestamp_becomes_iso(self) -> None:
        value = FieldValue.timestamp(datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc))
        assert value.to_primitive() == "2025-01-01T12:00:00+00:00"

    def test_str(self) -> None:
        assert str(FieldValue.tags(["a", "b"])) == "[a, b]"
        assert str(FieldValue.status(TaskStatus.DONE)) == "DONE"
