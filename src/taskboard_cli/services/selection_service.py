"""Multi-card selection state and local drag reordering.

Only modified clicks reach this module; a plain click opens the task and is
handled by the rendering layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from taskboard_cli.models import Task


@dataclass(frozen=True)
class Anchor:
    """The last clicked card, meaningful only within its own column."""

    task_id: str
    column: str
    position: int


@dataclass
class Selection:
    """Selected task ids plus the anchor used for range selection."""

    selected: set[str] = field(default_factory=set)
    anchor: Anchor | None = None

    def __len__(self) -> int:
        return len(self.selected)

    def __contains__(self, task_id: object) -> bool:
        return task_id in self.selected

    def toggle(self, task_id: str, column: str, position: int) -> None:
        """Ctrl/Cmd-click: flip membership of *task_id* and move the anchor to it."""
        if task_id in self.selected:
            self.selected.discard(task_id)
        else:
            self.selected.add(task_id)
        self.anchor = Anchor(task_id, column, position)

    def extend(
        self, task_id: str, column: str, position: int, column_view: list[Task]
    ) -> None:
        """Shift-click: add the range between the anchor and *position*.

        The range is inclusive and taken from *column_view*, the filtered and
        ordered tasks of the column as displayed. Previously selected tasks
        stay selected. Without an anchor in the same column this behaves like
        ``toggle``.
        """
        if self.anchor is None or self.anchor.column != column:
            self.toggle(task_id, column, position)
            return

        start = min(self.anchor.position, position)
        end = max(self.anchor.position, position)
        for task in column_view[start : end + 1]:
            self.selected.add(task.id)
        self.anchor = Anchor(task_id, column, position)

    def clear(self) -> None:
        self.selected.clear()
        self.anchor = None


def splice_selection(
    columns: dict[str, list[Task]],
    selected: set[str],
    target_column: str,
    drop_index: int,
) -> dict[str, list[Task]]:
    """Move every selected task into *target_column* as one contiguous block.

    Selected tasks keep their relative order (column order, then position) and
    are inserted at *drop_index*, clamped to the target column's remaining
    length. The input mapping is not modified.

    Args:
        columns: Column name -> ordered tasks of the local view
        selected: Ids of the selected tasks
        target_column: Column the block is dropped into
        drop_index: Drop position within the target column

    Returns:
        New column mapping
    """
    moved: list[Task] = []
    result: dict[str, list[Task]] = {}
    for column, tasks in columns.items():
        remaining = []
        for task in tasks:
            if task.id in selected:
                moved.append(task)
            else:
                remaining.append(task)
        result[column] = remaining

    target = result.setdefault(target_column, [])
    insert_at = max(0, min(drop_index, len(target)))
    target[insert_at:insert_at] = moved
    return result


def move_within(
    columns: dict[str, list[Task]],
    task_id: str,
    target_column: str,
    position: int,
) -> dict[str, list[Task]]:
    """Move a single task in the local view; returns a new column mapping.

    A negative *position* appends to the target column.
    """
    result = {column: list(tasks) for column, tasks in columns.items()}
    for tasks in result.values():
        for i, task in enumerate(tasks):
            if task.id == task_id:
                moved = tasks.pop(i)
                target = result.setdefault(target_column, [])
                insert_at = len(target) if position < 0 else min(position, len(target))
                target.insert(insert_at, moved)
                return result
    return result
