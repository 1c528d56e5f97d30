"""Unit tests for the abstract TaskStore in repository.py.

Creates a concrete subclass that delegates straight back to ``super()`` so
every abstract body is exercised.
"""

from __future__ import annotations

from datetime import datetime

import pytest

from taskboard_cli.models import BoardIndex, SortField, Task, TaskCreate
from taskboard_cli.repositories import TaskStore


# ---------------------------------------------------------------------------
# Concrete pass-through implementation
# ---------------------------------------------------------------------------


class _PassThroughStore(TaskStore):
    async def get_index(self) -> BoardIndex:
        return await super().get_index()

    async def load_all_tasks(self, index: BoardIndex) -> list[Task]:
        return await super().load_all_tasks(index)

    async def get_task(self, task_id: str) -> Task:
        return await super().get_task(task_id)

    async def create_task(self, task_data: TaskCreate, column: str) -> Task:
        return await super().create_task(task_data, column)

    async def update_task(self, task_id: str, task: Task, column: str | None = None) -> Task:
        return await super().update_task(task_id, task, column)

    async def move_task(self, task_id: str, column: str, position: int = -1) -> Task:
        return await super().move_task(task_id, column, position)

    async def archive_task(self, task_id: str) -> None:
        return await super().archive_task(task_id)

    async def sort_column(self, column: str, fields: list[SortField], persist: bool) -> None:
        return await super().sort_column(column, fields, persist)

    async def start_sprint(self, name: str, description: str, start: datetime) -> None:
        return await super().start_sprint(name, description, start)


@pytest.fixture()
def store() -> _PassThroughStore:
    return _PassThroughStore()


def test_cannot_instantiate_abstract_store():
    with pytest.raises(TypeError):
        TaskStore()


@pytest.mark.asyncio
class TestTaskStoreContract:
    async def test_get_index_raises(self, store):
        with pytest.raises(NotImplementedError, match="get_index"):
            await store.get_index()

    async def test_load_all_tasks_raises(self, store):
        with pytest.raises(NotImplementedError, match="load_all_tasks"):
            await store.load_all_tasks(BoardIndex(name="b"))

    async def test_get_task_raises(self, store):
        with pytest.raises(NotImplementedError, match="get_task"):
            await store.get_task("a")

    async def test_create_task_raises(self, store):
        with pytest.raises(NotImplementedError, match="create_task"):
            await store.create_task(TaskCreate(name="A"), "Todo")

    async def test_update_task_raises(self, store):
        with pytest.raises(NotImplementedError, match="update_task"):
            await store.update_task("a", Task(id="a", name="A"))

    async def test_move_task_raises(self, store):
        with pytest.raises(NotImplementedError, match="move_task"):
            await store.move_task("a", "Done")

    async def test_archive_task_raises(self, store):
        with pytest.raises(NotImplementedError, match="archive_task"):
            await store.archive_task("a")

    async def test_sort_column_raises(self, store):
        with pytest.raises(NotImplementedError, match="sort_column"):
            await store.sort_column("Todo", [], False)

    async def test_start_sprint_raises(self, store):
        with pytest.raises(NotImplementedError, match="start_sprint"):
            await store.start_sprint("S1", "", datetime(2024, 1, 1))
