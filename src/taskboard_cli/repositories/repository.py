"""Task store abstraction for the task board.

This module defines the abstract base class (interface) for the task store,
following the hexagonal architecture (Ports & Adapters) pattern.

The board core never mutates store state directly: every change goes through
one of these calls, and the locally mirrored snapshot is only replaced by the
result of a full refresh.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from taskboard_cli.models import BoardIndex, SortField, Task, TaskCreate


class TaskStore(ABC):
    """Abstract base class for task store operations.

    All methods are coroutines and may complete in any relative order.
    Implementations raise ``StoreError`` for I/O failures,
    ``TaskNotFoundError`` / ``ColumnNotFoundError`` for unknown references and
    ``TaskValidationError`` for invalid data.
    """

    @abstractmethod
    async def get_index(self) -> BoardIndex:
        """Load the board index.

        Returns:
            A copy of the current BoardIndex

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
            StoreError: If the store cannot be read
        """
        raise NotImplementedError("TaskStore.get_index() must be implemented by adapter")

    @abstractmethod
    async def load_all_tasks(self, index: BoardIndex) -> list[Task]:
        """Load every task tracked by *index*, hydrated with its column.

        Args:
            index: Board index returned by get_index()

        Returns:
            List of Task objects in index order

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
            StoreError: If the store cannot be read
        """
        raise NotImplementedError(
            "TaskStore.load_all_tasks() must be implemented by adapter"
        )

    @abstractmethod
    async def get_task(self, task_id: str) -> Task:
        """Get a specific tracked task by id.

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
            TaskNotFoundError: If the task does not exist
        """
        raise NotImplementedError("TaskStore.get_task() must be implemented by adapter")

    @abstractmethod
    async def create_task(self, task_data: TaskCreate, column: str) -> Task:
        """Create a new task at the end of *column*.

        Args:
            task_data: TaskCreate object; the id is derived from its name
            column: Target column

        Returns:
            Created Task object

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
            ColumnNotFoundError: If the column does not exist
            TaskValidationError: If no id can be derived from the name or a
                custom field does not fit the board schema
        """
        raise NotImplementedError(
            "TaskStore.create_task() must be implemented by adapter"
        )

    @abstractmethod
    async def update_task(
        self, task_id: str, task: Task, column: str | None = None
    ) -> Task:
        """Replace a task record, optionally moving it to another column.

        Args:
            task_id: Id of the task to replace (ids never change on rename)
            task: Replacement value
            column: Target column, or None to keep the current one

        Returns:
            Stored Task object

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
            TaskNotFoundError: If the task does not exist
            ColumnNotFoundError: If the column does not exist
        """
        raise NotImplementedError(
            "TaskStore.update_task() must be implemented by adapter"
        )

    @abstractmethod
    async def move_task(self, task_id: str, column: str, position: int = -1) -> Task:
        """Move a task to *position* in *column*; -1 appends.

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
            TaskNotFoundError: If the task does not exist
            ColumnNotFoundError: If the column does not exist
        """
        raise NotImplementedError("TaskStore.move_task() must be implemented by adapter")

    @abstractmethod
    async def archive_task(self, task_id: str) -> None:
        """Remove a task from the index and keep it in the archive.

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
            TaskNotFoundError: If the task does not exist
        """
        raise NotImplementedError(
            "TaskStore.archive_task() must be implemented by adapter"
        )

    @abstractmethod
    async def sort_column(
        self, column: str, fields: list[SortField], persist: bool
    ) -> None:
        """Sort a column by *fields*, optionally saving the setting.

        Sorting without *persist*, or with an empty *fields* list, clears the
        saved setting.

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
            ColumnNotFoundError: If the column does not exist
        """
        raise NotImplementedError(
            "TaskStore.sort_column() must be implemented by adapter"
        )

    @abstractmethod
    async def start_sprint(self, name: str, description: str, start: datetime) -> None:
        """Start a new sprint.

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "TaskStore.start_sprint() must be implemented by adapter"
        )
