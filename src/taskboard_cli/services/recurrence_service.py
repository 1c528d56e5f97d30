"""Recurrence scheduler.

Derives the successor of a recurring task when it lands in a completed column.
Everything here is pure: the caller decides whether and where to create the
returned task.
"""

from __future__ import annotations

from datetime import UTC, datetime

from taskboard_cli.models import BoardIndex, Recurrence, Task, TaskCreate, TaskMetadata
from taskboard_cli.utils.dates import add_days, add_months, add_years, last_day_of_month


def next_due_date(rule: Recurrence, base: datetime) -> datetime:
    """Compute the next due date for *rule* starting from *base*.

    Monthly rules with a target day clamp it to the last day of the resulting
    month, so day 31 in February gives the 28th (or 29th).
    """
    if rule.type == "daily":
        return add_days(base, rule.interval)
    if rule.type == "weekly":
        return add_days(base, rule.interval * 7)
    if rule.type == "monthly":
        next_due = add_months(base, rule.interval)
        if rule.day_of_month is not None:
            last_day = last_day_of_month(next_due.year, next_due.month)
            next_due = next_due.replace(day=min(rule.day_of_month, last_day))
        return next_due
    return add_years(base, rule.interval)


def derive_next(
    task: Task,
    index: BoardIndex,
    target_column: str,
    now: datetime | None = None,
) -> tuple[TaskCreate, str] | None:
    """Build the successor of a completed recurring task.

    Args:
        task: Task that was moved or updated
        index: Current board index
        target_column: Column the task landed in
        now: Current instant, defaults to the wall clock

    Returns:
        (task to create, column to create it in), or None when the column is
        not a completed column or the task has no recurrence rule
    """
    if target_column not in index.options.completed_columns:
        return None
    rule = task.metadata.recurrence
    if rule is None:
        return None

    now = now or datetime.now(UTC)
    base = task.metadata.due or now
    metadata = TaskMetadata(
        created=now,
        due=next_due_date(rule, base),
        priority=task.metadata.priority,
        assigned=task.metadata.assigned,
        tags=list(task.metadata.tags),
        attachments=list(task.metadata.attachments),
        recurrence=rule,
    )
    successor = TaskCreate(name=task.name, description=task.description, metadata=metadata)
    return successor, index.first_open_column()
