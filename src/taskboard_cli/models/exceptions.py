"""Custom exceptions for the task board core."""


class TaskBoardError(Exception):
    """Base exception for all task board errors."""


class StoreError(TaskBoardError):
    """Raised when the task store cannot be read or written."""


class TaskNotFoundError(TaskBoardError):
    """Raised when a command references a task id the store does not know."""

    def __init__(self, task_id: str):
        super().__init__(f"Task not found: {task_id}")
        self.task_id = task_id


class ColumnNotFoundError(TaskBoardError):
    """Raised when a command references a column missing from the board index."""

    def __init__(self, column: str):
        super().__init__(f"Column not found: {column}")
        self.column = column


class TaskValidationError(TaskBoardError):
    """Raised when task data does not satisfy the board schema."""
