"""Filter query language for the task board.

A query is split on whitespace into terms and a task matches only when every
term matches. Each term is either a bare token or a ``key:value`` pair, both
compared case-insensitively:

* ``overdue`` - the due date is strictly before now
* a boolean custom field name - the field is present on the task with no value
* any other bare token - substring of the task id or name
* ``description:``, ``assigned:``, ``tag:``, ``relation:``, ``subtask:``,
  ``comment:`` or a non-boolean custom field name - substring of that property
* anything else - ignored (always matches)

The engine only filters; it never reorders tasks.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import datetime

from taskboard_cli.models import CustomFieldSchema, Task
from taskboard_cli.utils.dates import is_before, parse_date

OVERDUE_TOKEN = "overdue"


def _description_text(task: Task) -> str:
    return " ".join([task.description, *(sub_task.text for sub_task in task.sub_tasks)])


def _assigned_text(task: Task) -> str:
    return task.metadata.assigned or ""


def _tag_text(task: Task) -> str:
    return " ".join(task.metadata.tags)


def _relation_text(task: Task) -> str:
    return " ".join(f"{relation.type} {relation.task}" for relation in task.relations)


def _subtask_text(task: Task) -> str:
    return " ".join(sub_task.text for sub_task in task.sub_tasks)


def _comment_text(task: Task) -> str:
    return " ".join(f"{comment.author} {comment.text}" for comment in task.comments)


PROPERTY_TEXT: dict[str, Callable[[Task], str]] = {
    "description": _description_text,
    "assigned": _assigned_text,
    "tag": _tag_text,
    "relation": _relation_text,
    "subtask": _subtask_text,
    "comment": _comment_text,
}


def is_overdue(task: Task, now: datetime | None = None) -> bool:
    """Check whether the task's due date lies strictly before *now*."""
    due = parse_date(task.metadata.due)
    if due is None:
        return False
    return is_before(due, now or datetime.now().astimezone())


def _custom_field_text(task: Task, field: CustomFieldSchema) -> str:
    if field.name not in task.metadata.custom_fields:
        return ""
    value = task.metadata.custom_fields[field.name]
    # Present without a value stringifies like an empty field.
    return value.as_text() if value is not None else ""


def _match_bare(
    task: Task, token: str, fields: dict[str, CustomFieldSchema], now: datetime | None
) -> bool:
    if token == OVERDUE_TOKEN:
        return is_overdue(task, now)

    field = fields.get(token)
    if field is not None and field.type == "boolean":
        # Boolean fields match when set on the task without a stored value.
        custom_fields = task.metadata.custom_fields
        return field.name in custom_fields and custom_fields[field.name] is None

    return token in task.id.lower() or token in task.name.lower()


def _match_pair(
    task: Task, key: str, value: str, fields: dict[str, CustomFieldSchema]
) -> bool:
    if key in PROPERTY_TEXT:
        text = PROPERTY_TEXT[key](task)
    elif key in fields:
        field = fields[key]
        text = _custom_field_text(task, field) if field.type != "boolean" else ""
    else:
        return True
    return value in text.lower()


def match_term(
    task: Task,
    term: str,
    custom_fields: dict[str, CustomFieldSchema],
    now: datetime | None = None,
) -> bool:
    """Evaluate a single query term.

    Args:
        task: Task to test
        term: One whitespace-free query term
        custom_fields: Custom field schema keyed by lower-case field name
        now: Current instant, defaults to the wall clock

    Returns:
        Whether the task satisfies the term
    """
    parts = term.lower().split(":")
    if len(parts) == 1:
        return _match_bare(task, parts[0], custom_fields, now)
    if len(parts) == 2:
        return _match_pair(task, parts[0], parts[1], custom_fields)
    return True


def _field_map(custom_fields: Iterable[CustomFieldSchema]) -> dict[str, CustomFieldSchema]:
    return {field.name.lower(): field for field in custom_fields}


def matches(
    task: Task,
    query: str,
    custom_fields: Iterable[CustomFieldSchema] = (),
    now: datetime | None = None,
) -> bool:
    """Check whether *task* satisfies every term of *query*.

    Args:
        task: Task to test
        query: Filter string
        custom_fields: Board custom field schema
        now: Current instant used by ``overdue``, defaults to the wall clock

    Returns:
        True if all terms match (an empty query matches everything)
    """
    fields = _field_map(custom_fields)
    return all(match_term(task, term, fields, now) for term in query.split())


def filter_tasks(
    tasks: Iterable[Task],
    query: str,
    custom_fields: Iterable[CustomFieldSchema] = (),
    now: datetime | None = None,
) -> list[Task]:
    """Return the tasks matching *query*, preserving their order."""
    fields = list(custom_fields)
    if not query.strip():
        return list(tasks)
    return [task for task in tasks if matches(task, query, fields, now)]
