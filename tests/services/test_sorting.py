"""Tests for column sorting."""

from __future__ import annotations

from taskboard_cli.models import CustomFieldSchema, SortField, Task
from taskboard_cli.services.sorting import resolve_sort_field, sort_tasks, sort_value


def _task(task_id: str, **metadata) -> Task:
    return Task.model_validate({"id": task_id, "name": task_id, "metadata": metadata})


def _ids(tasks: list[Task]) -> list[str]:
    return [task.id for task in tasks]


def test_resolve_sort_field():
    assert resolve_sort_field("Count sub-tasks") == "countSubTasks"
    assert resolve_sort_field("Due") == "due"
    assert resolve_sort_field("points") == "points"


def test_sort_by_due_missing_last():
    tasks = [
        _task("none"),
        _task("late", due="2024-03-01"),
        _task("early", due="2024-01-01"),
    ]
    assert _ids(sort_tasks(tasks, [SortField(field="due")])) == ["early", "late", "none"]


def test_descending_keeps_missing_last():
    tasks = [
        _task("none"),
        _task("late", due="2024-03-01"),
        _task("early", due="2024-01-01"),
    ]
    result = sort_tasks(tasks, [SortField(field="due", order="descending")])
    assert _ids(result) == ["late", "early", "none"]


def test_multi_key_sort_is_stable():
    tasks = [
        _task("b", priority="high", assigned="zoe"),
        _task("a", priority="high", assigned="amy"),
        _task("c", priority="low"),
    ]
    result = sort_tasks(tasks, [SortField(field="priority"), SortField(field="assigned")])
    assert _ids(result) == ["a", "b", "c"]


def test_sort_by_count_tags():
    tasks = [_task("two", tags=["x", "y"]), _task("zero"), _task("one", tags=["x"])]
    assert _ids(sort_tasks(tasks, [SortField(field="countTags")])) == ["zero", "one", "two"]


def test_sort_value_for_custom_field():
    task = _task("a", custom_fields={"points": {"type": "number", "value": 5}})
    assert sort_value(task, "points", frozenset({"points"})) == 5
    assert sort_value(task, "points") == "5"
    assert sort_value(task, "missing") is None


def test_declared_number_field_sorts_numerically():
    tasks = [
        _task("ten", custom_fields={"points": {"type": "number", "value": 10}}),
        _task("two", custom_fields={"points": {"type": "number", "value": 2}}),
    ]
    schema = [CustomFieldSchema(name="points", type="number")]
    assert _ids(sort_tasks(tasks, [SortField(field="points")], schema)) == ["two", "ten"]


def test_undeclared_field_with_mixed_types_sorts_as_text():
    tasks = [
        _task("word", custom_fields={"size": {"type": "string", "value": "Large"}}),
        _task("number", custom_fields={"size": {"type": "number", "value": 3}}),
        _task("flag", custom_fields={"size": {"type": "boolean", "value": True}}),
        _task("none"),
    ]
    result = sort_tasks(tasks, [SortField(field="size")])
    assert _ids(result) == ["number", "word", "flag", "none"]


def test_empty_field_list_keeps_order():
    tasks = [_task("b"), _task("a")]
    assert _ids(sort_tasks(tasks, [])) == ["b", "a"]
