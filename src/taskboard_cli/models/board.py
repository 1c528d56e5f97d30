"""Board index and snapshot models."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from taskboard_cli.models.exceptions import TaskValidationError
from taskboard_cli.models.task import CustomFieldValue, Task

CustomFieldType = Literal["boolean", "date", "number", "string"]
SortOrder = Literal["ascending", "descending"]

_custom_value_adapter: TypeAdapter = TypeAdapter(CustomFieldValue)


class CustomFieldSchema(BaseModel):
    """Board-level declaration of a custom task field."""

    name: str
    type: CustomFieldType


class SortField(BaseModel):
    """One key of a column sort setting."""

    field: str
    order: SortOrder = "ascending"


class Sprint(BaseModel):
    """A sprint started on the board."""

    name: str
    description: str = ""
    start: datetime


class BoardOptions(BaseModel):
    """Board-wide options stored alongside the column index.

    Attributes:
        hidden_columns: Columns not shown on the board
        started_columns: Columns that mark a task as started
        completed_columns: Columns that mark a task as completed
        column_sorting: Saved sort settings per column
        custom_fields: Custom field schema
        sprints: Sprints in start order; the last one is current
        date_format: strftime format used to display dates
    """

    hidden_columns: list[str] = Field(default_factory=list)
    started_columns: list[str] = Field(default_factory=list)
    completed_columns: list[str] = Field(default_factory=list)
    column_sorting: dict[str, list[SortField]] = Field(default_factory=dict)
    custom_fields: list[CustomFieldSchema] = Field(default_factory=list)
    sprints: list[Sprint] = Field(default_factory=list)
    date_format: str = "%d/%m/%Y"


class BoardIndex(BaseModel):
    """Ordered mapping of columns to task ids plus board options."""

    name: str
    description: str = ""
    columns: dict[str, list[str]] = Field(default_factory=dict)
    options: BoardOptions = Field(default_factory=BoardOptions)

    def column_of(self, task_id: str) -> str | None:
        """Return the column holding *task_id*, or None if untracked."""
        for column, task_ids in self.columns.items():
            if task_id in task_ids:
                return column
        return None

    def first_open_column(self) -> str:
        """First column that is neither hidden nor completed.

        Falls back to the first column overall.
        """
        closed = set(self.options.hidden_columns) | set(self.options.completed_columns)
        for column in self.columns:
            if column not in closed:
                return column
        return next(iter(self.columns))


class BoardSnapshot(BaseModel):
    """Fully hydrated board state pushed to the rendering layer."""

    name: str
    description: str = ""
    columns: dict[str, list[str]] = Field(default_factory=dict)
    hidden_columns: list[str] = Field(default_factory=list)
    started_columns: list[str] = Field(default_factory=list)
    completed_columns: list[str] = Field(default_factory=list)
    column_sorting: dict[str, list[SortField]] = Field(default_factory=dict)
    custom_fields: list[CustomFieldSchema] = Field(default_factory=list)
    date_format: str = "%d/%m/%Y"
    current_sprint: Sprint | None = None
    tasks: list[Task] = Field(default_factory=list)

    @classmethod
    def from_index(cls, index: BoardIndex, tasks: list[Task]) -> "BoardSnapshot":
        options = index.options
        return cls(
            name=index.name,
            description=index.description,
            columns={column: list(ids) for column, ids in index.columns.items()},
            hidden_columns=list(options.hidden_columns),
            started_columns=list(options.started_columns),
            completed_columns=list(options.completed_columns),
            column_sorting=dict(options.column_sorting),
            custom_fields=list(options.custom_fields),
            date_format=options.date_format,
            current_sprint=options.sprints[-1] if options.sprints else None,
            tasks=tasks,
        )

    def task_map(self) -> dict[str, Task]:
        return {task.id: task for task in self.tasks}

    def tasks_in(self, column: str) -> list[Task]:
        """Tasks of *column* in index order; ids without a loaded task are skipped."""
        tasks = self.task_map()
        return [tasks[task_id] for task_id in self.columns.get(column, []) if task_id in tasks]

    def visible_columns(self) -> list[str]:
        hidden = set(self.hidden_columns)
        return [column for column in self.columns if column not in hidden]

    def position_of(self, task_id: str) -> tuple[int, int] | None:
        """(column order, position in column) of *task_id*, or None."""
        for column_order, task_ids in enumerate(self.columns.values()):
            if task_id in task_ids:
                return column_order, task_ids.index(task_id)
        return None


def coerce_custom_fields(
    raw: dict[str, Any], schema: list[CustomFieldSchema]
) -> dict[str, CustomFieldValue | None]:
    """Validate raw custom field values against the board schema.

    Declared fields are coerced to their declared type; ``None`` is kept as a
    present-but-empty value. Undeclared fields are typed from their Python value.

    Args:
        raw: Mapping of field name to raw value (plain or ``{"type", "value"}``)
        schema: Board custom field declarations

    Returns:
        Ordered mapping of field name to typed value

    Raises:
        TaskValidationError: If a value does not fit its declared type
    """
    declared = {field.name: field.type for field in schema}
    result: dict[str, CustomFieldValue | None] = {}
    for name, value in raw.items():
        if value is None:
            result[name] = None
            continue
        if isinstance(value, dict) and "type" in value:
            payload = value
        else:
            payload = {"type": declared.get(name) or _infer_type(value), "value": value}
        if name in declared and payload["type"] != declared[name]:
            raise TaskValidationError(
                f"Custom field '{name}' must be {declared[name]}, got {payload['type']}"
            )
        try:
            result[name] = _custom_value_adapter.validate_python(payload)
        except ValidationError as e:
            raise TaskValidationError(f"Invalid value for custom field '{name}': {value!r}") from e
    return result


def _infer_type(value: Any) -> CustomFieldType:
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int | float):
        return "number"
    if isinstance(value, datetime):
        return "date"
    return "string"
