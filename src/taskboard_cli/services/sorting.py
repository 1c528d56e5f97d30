"""Column sorting for tasks."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from taskboard_cli.models import CustomFieldSchema, SortField, Task
from taskboard_cli.models.task import BooleanField, DateField
from taskboard_cli.utils.dates import as_aware

# Menu label -> sort field name
SORT_BY_FIELDS: dict[str, str] = {
    "Name": "name",
    "Created": "created",
    "Updated": "updated",
    "Started": "started",
    "Completed": "completed",
    "Due": "due",
    "Assigned": "assigned",
    "Count sub-tasks": "countSubTasks",
    "Count tags": "countTags",
    "Count relations": "countRelations",
    "Count comments": "countComments",
    "Workload": "workload",
    "Progress": "progress",
    "Priority": "priority",
}


def _text(value: str | None) -> str | None:
    return value.lower() if value else None


def _timestamp(task: Task, name: str) -> float | None:
    value = getattr(task.metadata, name)
    return as_aware(value).timestamp() if value is not None else None


_FIELD_KEYS: dict[str, Callable[[Task], Any]] = {
    "name": lambda task: task.name.lower(),
    "created": lambda task: _timestamp(task, "created"),
    "updated": lambda task: _timestamp(task, "updated"),
    "started": lambda task: _timestamp(task, "started"),
    "completed": lambda task: _timestamp(task, "completed"),
    "due": lambda task: _timestamp(task, "due"),
    "assigned": lambda task: _text(task.metadata.assigned),
    "countSubTasks": lambda task: len(task.sub_tasks),
    "countTags": lambda task: len(task.metadata.tags),
    "countRelations": lambda task: len(task.relations),
    "countComments": lambda task: len(task.comments),
    "workload": lambda task: task.workload,
    "progress": lambda task: (
        task.progress if task.progress is not None else task.metadata.progress
    ),
    "priority": lambda task: _text(task.metadata.priority),
}


def resolve_sort_field(label: str) -> str:
    """Map a menu label to its field name; unknown labels are custom fields."""
    return SORT_BY_FIELDS.get(label, label)


def sort_value(task: Task, field: str, declared: frozenset[str] = frozenset()) -> Any:
    """Comparable sort value of *field* for *task*, or None when missing.

    Custom fields named in *declared* compare by their typed value. Undeclared
    ones may hold different types on different tasks, so they compare as text.
    """
    if field in _FIELD_KEYS:
        return _FIELD_KEYS[field](task)

    value = task.metadata.custom_fields.get(field)
    if value is None:
        return None
    if field not in declared:
        return value.as_text().lower()
    if isinstance(value, BooleanField):
        return int(value.value)
    if isinstance(value, DateField):
        return as_aware(value.value).timestamp()
    if isinstance(value.value, str):
        return value.value.lower()
    return value.value


def sort_tasks(
    tasks: list[Task],
    fields: list[SortField],
    custom_fields: Iterable[CustomFieldSchema] = (),
) -> list[Task]:
    """Sort tasks by several fields; missing values always sort last.

    Sorting is stable, so tasks with equal keys keep their current order.
    """
    declared = frozenset(schema.name for schema in custom_fields)
    result = list(tasks)
    for sort_field in reversed(fields):
        descending = sort_field.order == "descending"

        def key(task: Task, field: str = sort_field.field) -> tuple[bool, Any]:
            value = sort_value(task, field, declared)
            missing = value is None
            # reverse=True flips the flag too, so invert it to keep missing last
            return (not missing if descending else missing, value)

        result.sort(key=key, reverse=descending)
    return result
