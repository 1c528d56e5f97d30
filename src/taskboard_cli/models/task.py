"""Task data models."""

from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from taskboard_cli.utils.dates import parse_date

RecurrenceType = Literal["daily", "weekly", "monthly", "annually"]


def _parse_optional_date(value: object) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    parsed = parse_date(value)
    if parsed is None:
        raise ValueError(f"Unrecognised date: {value!r}")
    return parsed


class SubTask(BaseModel):
    """A checklist item inside a task."""

    model_config = ConfigDict(frozen=True)

    text: str
    completed: bool = False


class Relation(BaseModel):
    """A typed link to another task.

    The target id is not validated and may reference a task that no longer exists.
    """

    model_config = ConfigDict(frozen=True)

    type: str = ""
    task: str


class Comment(BaseModel):
    """A comment left on a task."""

    model_config = ConfigDict(frozen=True)

    author: str = ""
    date: datetime | None = None
    text: str


class Attachment(BaseModel):
    """A file or link attached to a task."""

    model_config = ConfigDict(frozen=True)

    type: str = "file"
    path: str | None = None
    url: str | None = None
    title: str


class Recurrence(BaseModel):
    """Recurrence rule for deriving a successor task.

    Attributes:
        type: One of daily, weekly, monthly, annually
        interval: Number of periods between occurrences (at least 1)
        day_of_month: Target day for monthly rules, clamped to month length
    """

    model_config = ConfigDict(frozen=True)

    type: RecurrenceType
    interval: int = Field(default=1, ge=1)
    day_of_month: int | None = Field(default=None, ge=1, le=31)

    @field_validator("interval", mode="before")
    @classmethod
    def _default_interval(cls, value: object) -> object:
        # A missing or zero interval means "every period".
        return value or 1


class BooleanField(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["boolean"] = "boolean"
    value: bool

    def as_text(self) -> str:
        return "true" if self.value else "false"


class DateField(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["date"] = "date"
    value: datetime

    @field_validator("value", mode="before")
    @classmethod
    def _parse(cls, value: object) -> object:
        return _parse_optional_date(value)

    def as_text(self) -> str:
        return self.value.isoformat()


class NumberField(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["number"] = "number"
    value: int | float

    def as_text(self) -> str:
        if isinstance(self.value, float) and self.value.is_integer():
            return str(int(self.value))
        return str(self.value)


class StringField(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["string"] = "string"
    value: str

    def as_text(self) -> str:
        return self.value


CustomFieldValue = Annotated[
    BooleanField | DateField | NumberField | StringField,
    Field(discriminator="type"),
]


class TaskMetadata(BaseModel):
    """Task metadata.

    ``custom_fields`` keeps insertion order. A key mapped to ``None`` is a field
    that is present on the task without a stored value.
    """

    model_config = ConfigDict(frozen=True)

    created: datetime | None = None
    updated: datetime | None = None
    started: datetime | None = None
    due: datetime | None = None
    completed: datetime | None = None
    priority: str | None = None
    assigned: str | None = None
    progress: float | None = None
    tags: list[str] = Field(default_factory=list)
    attachments: list[Attachment] = Field(default_factory=list)
    recurrence: Recurrence | None = None
    custom_fields: dict[str, CustomFieldValue | None] = Field(default_factory=dict)

    @field_validator("created", "updated", "started", "due", "completed", mode="before")
    @classmethod
    def _parse_dates(cls, value: object) -> object:
        return _parse_optional_date(value)

    @field_validator("tags")
    @classmethod
    def _dedupe_tags(cls, value: list[str]) -> list[str]:
        return list(dict.fromkeys(value))


class Task(BaseModel):
    """Task model representing a hydrated task record.

    Attributes:
        id: Identifier derived from the name at creation, never recomputed
        name: Task name
        description: Markdown description
        column: Column the task belongs to (filled in by the store)
        workload: Optional estimated workload
        progress: Optional progress between 0 and 1
        sub_tasks: Ordered checklist items
        relations: Ordered relations to other tasks
        comments: Ordered comments
        metadata: Dates, assignment, tags, recurrence and custom fields
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str = ""
    column: str = ""
    workload: int | None = None
    progress: float | None = None
    sub_tasks: list[SubTask] = Field(default_factory=list)
    relations: list[Relation] = Field(default_factory=list)
    comments: list[Comment] = Field(default_factory=list)
    metadata: TaskMetadata = Field(default_factory=TaskMetadata)


class TaskCreate(BaseModel):
    """Model for creating a new task; the store derives the id from the name."""

    name: str = Field(min_length=1)
    description: str = ""
    sub_tasks: list[SubTask] = Field(default_factory=list)
    relations: list[Relation] = Field(default_factory=list)
    comments: list[Comment] = Field(default_factory=list)
    metadata: TaskMetadata = Field(default_factory=TaskMetadata)


class QuickUpdate(BaseModel):
    """Partial update issued from the board context menu.

    Only fields that were explicitly provided are applied. An empty value
    (``""`` or ``None``) for priority, due or started clears the field.
    """

    priority: str | None = None
    progress: float | None = None
    due: datetime | None = None
    started: datetime | None = None
    tags: list[str] | None = None
    column: str | None = None

    @field_validator("due", "started", mode="before")
    @classmethod
    def _parse_dates(cls, value: object) -> object:
        if value == "":
            return None
        return _parse_optional_date(value)

    @field_validator("progress", mode="before")
    @classmethod
    def _coerce_progress(cls, value: object) -> object:
        if value == "":
            return None
        return value
