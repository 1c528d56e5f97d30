"""Task service - Business logic for task operations.

This service layer sits between the board coordinator and the task store,
turning partial edits into explicit read-modify-write replacements.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from taskboard_cli.models import (
    QuickUpdate,
    Recurrence,
    Task,
    TaskCreate,
    TaskMetadata,
    coerce_custom_fields,
)
from taskboard_cli.repositories import TaskStore


def apply_quick_update(task: Task, updates: QuickUpdate) -> Task:
    """Build a new task value with the provided quick-update fields applied.

    Only fields explicitly set on *updates* are applied. An empty priority,
    due or started value removes it.

    Args:
        task: Current task value
        updates: Partial update

    Returns:
        Replacement Task (the column is left to the store call)
    """
    provided = updates.model_fields_set
    changes: dict[str, Any] = {}

    if "priority" in provided:
        changes["priority"] = updates.priority or None
    if "progress" in provided:
        changes["progress"] = updates.progress
    if "due" in provided:
        changes["due"] = updates.due
    if "started" in provided:
        changes["started"] = updates.started
    if "tags" in provided:
        changes["tags"] = list(dict.fromkeys(updates.tags or []))

    if not changes:
        return task
    return task.model_copy(update={"metadata": task.metadata.model_copy(update=changes)})


class TaskService:
    """Service for task business logic.

    This service encapsulates business rules and orchestrates task operations
    using the task store.
    """

    def __init__(self, store: TaskStore):
        """Initialize the task service.

        Args:
            store: TaskStore implementation for data access
        """
        self.store = store

    async def get_task(self, task_id: str) -> Task:
        """Get a specific task by ID.

        Raises:
            TaskNotFoundError: If the task does not exist
        """
        return await self.store.get_task(task_id)

    async def add_task(
        self,
        name: str,
        column: str,
        *,
        description: str = "",
        due: datetime | None = None,
        priority: str | None = None,
        assigned: str | None = None,
        tags: list[str] | None = None,
        recurrence: Recurrence | None = None,
        custom_fields: dict[str, Any] | None = None,
    ) -> Task:
        """Create a new task at the end of *column*.

        Args:
            name: Task name; the id is derived from it
            column: Target column
            description: Markdown description
            due: Due date
            priority: Priority label
            assigned: Assignee
            tags: Tags
            recurrence: Recurrence rule
            custom_fields: Raw custom field values, coerced to the board schema

        Returns:
            Created Task object
        """
        typed_fields = {}
        if custom_fields:
            index = await self.store.get_index()
            typed_fields = coerce_custom_fields(custom_fields, index.options.custom_fields)

        metadata = TaskMetadata(
            due=due,
            priority=priority,
            assigned=assigned,
            tags=tags or [],
            recurrence=recurrence,
            custom_fields=typed_fields,
        )
        task_data = TaskCreate(name=name, description=description, metadata=metadata)
        return await self.store.create_task(task_data, column)

    async def quick_update(
        self, task_id: str, updates: QuickUpdate
    ) -> tuple[Task, str | None]:
        """Apply a quick update as fetch, rebuild and replace.

        Returns:
            (stored task, new column or None when the column did not change)

        Raises:
            TaskNotFoundError: If the task does not exist
        """
        current = await self.store.get_task(task_id)
        replacement = apply_quick_update(current, updates)
        target_column = (
            updates.column
            if updates.column is not None and updates.column != current.column
            else None
        )
        stored = await self.store.update_task(task_id, replacement, target_column)
        return stored, target_column

    async def rename_task(self, task_id: str, name: str) -> Task:
        """Rename a task; its id is kept."""
        current = await self.store.get_task(task_id)
        return await self.store.update_task(task_id, current.model_copy(update={"name": name}))
