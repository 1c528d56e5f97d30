"""Tests for task models."""

from __future__ import annotations

from datetime import datetime

import pytest
from pydantic import ValidationError

from taskboard_cli.models import (
    BooleanField,
    NumberField,
    QuickUpdate,
    Recurrence,
    Task,
    TaskCreate,
    TaskMetadata,
)


class TestTaskMetadata:
    def test_slash_dates_are_day_first(self):
        metadata = TaskMetadata(due="05/03/2024")
        assert metadata.due == datetime(2024, 3, 5)

    def test_invalid_date_rejected(self):
        with pytest.raises(ValidationError):
            TaskMetadata(due="not a date")

    def test_tags_deduplicated_in_order(self):
        assert TaskMetadata(tags=["b", "a", "b"]).tags == ["b", "a"]

    def test_custom_fields_discriminated_by_type(self):
        metadata = TaskMetadata(
            custom_fields={
                "urgent": {"type": "boolean", "value": True},
                "points": {"type": "number", "value": 3},
                "flag": None,
            }
        )
        assert isinstance(metadata.custom_fields["urgent"], BooleanField)
        assert isinstance(metadata.custom_fields["points"], NumberField)
        assert metadata.custom_fields["flag"] is None
        assert list(metadata.custom_fields) == ["urgent", "points", "flag"]


class TestRecurrence:
    def test_zero_interval_means_every_period(self):
        assert Recurrence(type="weekly", interval=0).interval == 1

    def test_negative_interval_rejected(self):
        with pytest.raises(ValidationError):
            Recurrence(type="weekly", interval=-2)

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            Recurrence(type="hourly")


def test_number_field_text_drops_integral_fraction():
    assert NumberField(value=3.0).as_text() == "3"
    assert NumberField(value=2.5).as_text() == "2.5"


def test_task_is_frozen():
    task = Task(id="a", name="A")
    with pytest.raises(ValidationError):
        task.name = "B"


def test_task_create_requires_name():
    with pytest.raises(ValidationError):
        TaskCreate(name="")


class TestQuickUpdate:
    def test_only_provided_fields_are_set(self):
        update = QuickUpdate(priority="high")
        assert update.model_fields_set == {"priority"}

    def test_empty_dates_clear(self):
        update = QuickUpdate(due="", started="")
        assert update.due is None
        assert update.started is None
        assert update.model_fields_set == {"due", "started"}

    def test_progress_coerced_to_number(self):
        assert QuickUpdate(progress="0.5").progress == 0.5
        assert QuickUpdate(progress="").progress is None

    def test_due_parsed(self):
        assert QuickUpdate(due="2024-06-01").due == datetime(2024, 6, 1)
