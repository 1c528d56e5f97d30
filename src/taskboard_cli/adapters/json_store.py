"""JSON document implementation of TaskStore.

The whole board lives in one JSON document::

    {
        "index": {...BoardIndex...},
        "tasks": {"task-id": {...Task without column...}},
        "archive": {"task-id": {...}}
    }

Every call re-reads the document so that external edits are picked up, and
every write replaces the file atomically.
"""

from __future__ import annotations

import json
import os
import tempfile
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from taskboard_cli.models import (
    BoardIndex,
    BoardOptions,
    ColumnNotFoundError,
    SortField,
    Sprint,
    StoreError,
    Task,
    TaskCreate,
    TaskNotFoundError,
    TaskValidationError,
    coerce_custom_fields,
)
from taskboard_cli.repositories import TaskStore
from taskboard_cli.services.sorting import sort_tasks
from taskboard_cli.utils.ids import task_id_from_name, unique_task_id
from taskboard_cli.utils.logger import get_logger

logger = get_logger(__name__)


class JsonTaskStore(TaskStore):
    """File-backed task store."""

    def __init__(self, path: str | Path):
        """Initialize the store.

        Args:
            path: Path of the board JSON document
        """
        self.path = Path(path)

    # ------------------------------------------------------------------
    # Document I/O
    # ------------------------------------------------------------------

    def exists(self) -> bool:
        return self.path.exists()

    def initialise(
        self,
        name: str,
        columns: list[str],
        *,
        description: str = "",
        options: BoardOptions | None = None,
    ) -> BoardIndex:
        """Create a new, empty board document.

        Raises:
            StoreError: If a board already exists at the path
        """
        if self.exists():
            raise StoreError(f"Board already exists: {self.path}")
        if not columns:
            raise TaskValidationError("A board needs at least one column")
        index = BoardIndex(
            name=name,
            description=description,
            columns={column: [] for column in columns},
            options=options or BoardOptions(),
        )
        self._write({"index": index.model_dump(mode="json"), "tasks": {}, "archive": {}})
        logger.info("initialised board %r at %s", name, self.path)
        return index

    def _read(self) -> dict[str, Any]:
        try:
            with open(self.path, encoding="utf-8") as f:
                document = json.load(f)
        except FileNotFoundError as e:
            raise StoreError(f"No board found at {self.path}") from e
        except (OSError, json.JSONDecodeError) as e:
            raise StoreError(f"Failed to read board {self.path}: {e}") from e

        document.setdefault("tasks", {})
        document.setdefault("archive", {})
        if "index" not in document:
            raise StoreError(f"Board document {self.path} has no index")
        return document

    def _write(self, document: dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2)
            os.replace(tmp_name, self.path)
        except OSError as e:
            raise StoreError(f"Failed to write board {self.path}: {e}") from e

    def _index(self, document: dict[str, Any]) -> BoardIndex:
        try:
            return BoardIndex.model_validate(document["index"])
        except ValidationError as e:
            raise StoreError(f"Board index is invalid: {e}") from e

    def _hydrate(self, raw: dict[str, Any], column: str, index: BoardIndex) -> Task:
        data = dict(raw)
        metadata = dict(data.get("metadata") or {})
        metadata["custom_fields"] = coerce_custom_fields(
            metadata.get("custom_fields") or {}, index.options.custom_fields
        )
        data["metadata"] = metadata
        data["column"] = column
        try:
            return Task.model_validate(data)
        except ValidationError as e:
            raise StoreError(f"Task record {data.get('id')!r} is invalid: {e}") from e

    @staticmethod
    def _dehydrate(task: Task) -> dict[str, Any]:
        return task.model_dump(mode="json", exclude={"column"})

    @staticmethod
    def _require_column(index: BoardIndex, column: str) -> None:
        if column not in index.columns:
            raise ColumnNotFoundError(column)

    def _validate_custom_fields(self, task: Task, index: BoardIndex) -> None:
        raw = {
            name: value.model_dump(mode="json") if value is not None else None
            for name, value in task.metadata.custom_fields.items()
        }
        coerce_custom_fields(raw, index.options.custom_fields)

    def _stamp_column_dates(
        self, task: Task, column: str, index: BoardIndex, now: datetime
    ) -> Task:
        updates: dict[str, Any] = {"updated": now}
        if column in index.options.started_columns and task.metadata.started is None:
            updates["started"] = now
        if column in index.options.completed_columns and task.metadata.completed is None:
            updates["completed"] = now
        return task.model_copy(
            update={"column": column, "metadata": task.metadata.model_copy(update=updates)}
        )

    def _apply_saved_sort(
        self, document: dict[str, Any], index: BoardIndex, column: str
    ) -> None:
        fields = index.options.column_sorting.get(column)
        if not fields:
            return
        index.columns[column] = self._sorted_ids(document, index, column, fields)

    def _record(self, document: dict[str, Any], task_id: str) -> dict[str, Any]:
        raw = document["tasks"].get(task_id)
        if raw is None:
            raise StoreError(f"No task record found for tracked task '{task_id}'")
        return raw

    def _sorted_ids(
        self,
        document: dict[str, Any],
        index: BoardIndex,
        column: str,
        fields: list[SortField],
    ) -> list[str]:
        tasks = [
            self._hydrate(self._record(document, task_id), column, index)
            for task_id in index.columns[column]
        ]
        return [
            task.id for task in sort_tasks(tasks, fields, index.options.custom_fields)
        ]

    def _lookup(self, document: dict[str, Any], index: BoardIndex, task_id: str) -> str:
        column = index.column_of(task_id)
        if column is None or task_id not in document["tasks"]:
            raise TaskNotFoundError(task_id)
        return column

    def _commit(self, document: dict[str, Any], index: BoardIndex) -> None:
        document["index"] = index.model_dump(mode="json")
        self._write(document)

    # ------------------------------------------------------------------
    # TaskStore
    # ------------------------------------------------------------------

    async def get_index(self) -> BoardIndex:
        return self._index(self._read())

    async def load_all_tasks(self, index: BoardIndex) -> list[Task]:
        document = self._read()
        tasks: list[Task] = []
        for column, task_ids in index.columns.items():
            for task_id in task_ids:
                tasks.append(self._hydrate(self._record(document, task_id), column, index))
        return tasks

    async def get_task(self, task_id: str) -> Task:
        document = self._read()
        index = self._index(document)
        column = self._lookup(document, index, task_id)
        return self._hydrate(document["tasks"][task_id], column, index)

    async def create_task(self, task_data: TaskCreate, column: str) -> Task:
        document = self._read()
        index = self._index(document)
        self._require_column(index, column)

        base_id = task_id_from_name(task_data.name)
        if not base_id:
            raise TaskValidationError(f"Cannot derive a task id from {task_data.name!r}")
        task_id = unique_task_id(base_id, set(document["tasks"]) | set(document["archive"]))

        now = datetime.now(UTC)
        metadata = task_data.metadata
        if metadata.created is None:
            metadata = metadata.model_copy(update={"created": now})
        task = Task(
            id=task_id,
            name=task_data.name,
            description=task_data.description,
            column=column,
            sub_tasks=task_data.sub_tasks,
            relations=task_data.relations,
            comments=task_data.comments,
            metadata=metadata,
        )
        self._validate_custom_fields(task, index)

        document["tasks"][task_id] = self._dehydrate(task)
        index.columns[column].append(task_id)
        self._apply_saved_sort(document, index, column)
        self._commit(document, index)
        logger.info("created task %s in %s", task_id, column)
        return task

    async def update_task(
        self, task_id: str, task: Task, column: str | None = None
    ) -> Task:
        document = self._read()
        index = self._index(document)
        current_column = self._lookup(document, index, task_id)
        target_column = column or current_column
        self._require_column(index, target_column)

        replacement = task.model_copy(update={"id": task_id})
        self._validate_custom_fields(replacement, index)
        replacement = self._stamp_column_dates(
            replacement, target_column, index, datetime.now(UTC)
        )

        document["tasks"][task_id] = self._dehydrate(replacement)
        if target_column != current_column:
            index.columns[current_column].remove(task_id)
            index.columns[target_column].append(task_id)
            self._apply_saved_sort(document, index, target_column)
        self._commit(document, index)
        logger.info("updated task %s", task_id)
        return replacement

    async def move_task(self, task_id: str, column: str, position: int = -1) -> Task:
        document = self._read()
        index = self._index(document)
        current_column = self._lookup(document, index, task_id)
        self._require_column(index, column)

        task = self._hydrate(document["tasks"][task_id], current_column, index)
        task = self._stamp_column_dates(task, column, index, datetime.now(UTC))

        index.columns[current_column].remove(task_id)
        target = index.columns[column]
        if position < 0 or position > len(target):
            position = len(target)
        target.insert(position, task_id)

        document["tasks"][task_id] = self._dehydrate(task)
        self._apply_saved_sort(document, index, column)
        self._commit(document, index)
        logger.info("moved task %s to %s[%d]", task_id, column, position)
        return task

    async def archive_task(self, task_id: str) -> None:
        document = self._read()
        index = self._index(document)
        column = self._lookup(document, index, task_id)

        index.columns[column].remove(task_id)
        record = document["tasks"].pop(task_id)
        record["archived_from"] = column
        document["archive"][task_id] = record
        self._commit(document, index)
        logger.info("archived task %s", task_id)

    async def sort_column(
        self, column: str, fields: list[SortField], persist: bool
    ) -> None:
        document = self._read()
        index = self._index(document)
        self._require_column(index, column)

        if fields:
            index.columns[column] = self._sorted_ids(document, index, column, fields)

        if persist and fields:
            index.options.column_sorting[column] = list(fields)
        else:
            index.options.column_sorting.pop(column, None)
        self._commit(document, index)
        logger.info("sorted column %s by %s", column, [f.field for f in fields])

    async def start_sprint(self, name: str, description: str, start: datetime) -> None:
        document = self._read()
        index = self._index(document)
        index.options.sprints.append(Sprint(name=name, description=description, start=start))
        self._commit(document, index)
        logger.info("started sprint %r", name)
