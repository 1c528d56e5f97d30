"""Task board domain models.

This package contains Pydantic models that represent the core domain entities
of the task board: tasks, the board index and the snapshot pushed to the
rendering layer.
"""

from .board import (
    BoardIndex,
    BoardOptions,
    BoardSnapshot,
    CustomFieldSchema,
    SortField,
    Sprint,
    coerce_custom_fields,
)
from .exceptions import (
    ColumnNotFoundError,
    StoreError,
    TaskBoardError,
    TaskNotFoundError,
    TaskValidationError,
)
from .task import (
    Attachment,
    BooleanField,
    Comment,
    CustomFieldValue,
    DateField,
    NumberField,
    QuickUpdate,
    Recurrence,
    Relation,
    StringField,
    SubTask,
    Task,
    TaskCreate,
    TaskMetadata,
)

__all__ = [
    # Task models
    "Task",
    "TaskCreate",
    "TaskMetadata",
    "QuickUpdate",
    "SubTask",
    "Relation",
    "Comment",
    "Attachment",
    "Recurrence",
    # Custom fields
    "CustomFieldValue",
    "BooleanField",
    "DateField",
    "NumberField",
    "StringField",
    "coerce_custom_fields",
    # Board models
    "BoardIndex",
    "BoardOptions",
    "BoardSnapshot",
    "CustomFieldSchema",
    "SortField",
    "Sprint",
    # Errors
    "TaskBoardError",
    "StoreError",
    "TaskNotFoundError",
    "ColumnNotFoundError",
    "TaskValidationError",
]
