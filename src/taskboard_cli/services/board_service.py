"""Board service - command handling for one open board.

A BoardService is the session object for a board: it owns the refresh
sequencer, the selection, the filter query and the locally mirrored column
view, and turns board commands into task store calls followed by a refresh.

Store failures never escape a command. Each failed call is reported once
through ``notify_error`` and returned in the CommandResult; bulk operations
keep going past failures and report the first one after the batch.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime

from taskboard_cli.models import (
    BoardSnapshot,
    QuickUpdate,
    SortField,
    Task,
    TaskBoardError,
)
from taskboard_cli.repositories import TaskStore
from taskboard_cli.services.query_engine import filter_tasks
from taskboard_cli.services.recurrence_service import derive_next
from taskboard_cli.services.refresh_sequencer import RefreshOutcome, RefreshSequencer
from taskboard_cli.services.selection_service import (
    Selection,
    move_within,
    splice_selection,
)
from taskboard_cli.services.task_service import TaskService
from taskboard_cli.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class CommandResult:
    """Outcome of a board command.

    Attributes:
        ok: True if every store call succeeded
        error: First error encountered, if any
        created: Recurrence successors created by the command
        refresh: Outcome of the closing refresh, if one was issued
    """

    ok: bool = True
    error: TaskBoardError | None = None
    created: list[Task] = field(default_factory=list)
    refresh: RefreshOutcome | None = None


class BoardService:
    """Coordinator for board commands, selection and refreshes."""

    def __init__(
        self,
        store: TaskStore,
        *,
        on_snapshot: Callable[[BoardSnapshot], None] | None = None,
        notify_error: Callable[[str], None] | None = None,
        notify_info: Callable[[str], None] | None = None,
    ):
        """Initialize the board service.

        Args:
            store: Task store for all reads and writes
            on_snapshot: Called with every accepted snapshot
            notify_error: Receives one message per failed command
            notify_info: Receives bulk operation summaries, if set
        """
        self.store = store
        self.task_service = TaskService(store)
        self.sequencer = RefreshSequencer(store, self._accept_snapshot)
        self.selection = Selection()
        self.query = ""
        self.view: dict[str, list[Task]] = {}
        self._on_snapshot = on_snapshot
        self._notify_error = notify_error
        self._notify_info = notify_info

    # ------------------------------------------------------------------
    # Snapshot and view
    # ------------------------------------------------------------------

    @property
    def snapshot(self) -> BoardSnapshot | None:
        return self.sequencer.snapshot

    def _accept_snapshot(self, snapshot: BoardSnapshot) -> None:
        self.view = {column: snapshot.tasks_in(column) for column in snapshot.columns}
        if self._on_snapshot is not None:
            self._on_snapshot(snapshot)

    def visible_columns(self) -> list[str]:
        return self.snapshot.visible_columns() if self.snapshot else []

    def column_view(self, column: str, now: datetime | None = None) -> list[Task]:
        """Filtered, ordered tasks of *column* as currently displayed."""
        custom_fields = self.snapshot.custom_fields if self.snapshot else []
        return filter_tasks(self.view.get(column, []), self.query, custom_fields, now)

    def set_filter(self, query: str) -> None:
        """Replace the filter query; the view is re-filtered without a fetch."""
        self.query = query.strip()

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def select_toggle(self, task_id: str, column: str, position: int) -> None:
        self.selection.toggle(task_id, column, position)

    def select_range(self, task_id: str, column: str, position: int) -> None:
        self.selection.extend(task_id, column, position, self.column_view(column))

    def deselect(self) -> None:
        """Clear the selection (explicit deselect, click-away or Escape)."""
        self.selection.clear()

    def ordered_ids(self, task_ids: Iterable[str]) -> list[str]:
        """Order ids by their position in the snapshot.

        Ids missing from the snapshot keep their given order after the others.
        """
        unique = list(dict.fromkeys(task_ids))
        if self.snapshot is None:
            return unique
        positions = {task_id: self.snapshot.position_of(task_id) for task_id in unique}
        known = sorted(
            (task_id for task_id in unique if positions[task_id] is not None),
            key=lambda task_id: positions[task_id],
        )
        return known + [task_id for task_id in unique if positions[task_id] is None]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _report(self, error: TaskBoardError, action: str, prefix: str = "") -> None:
        logger.error("%s failed: %s", action, error)
        if self._notify_error is not None:
            self._notify_error(f"{prefix}{error}")

    def _inform(self, message: str) -> None:
        logger.info(message)
        if self._notify_info is not None:
            self._notify_info(message)

    async def _handle_recurrence(self, task_id: str, target_column: str) -> Task | None:
        """Create the successor of *task_id* if it just landed in a completed column."""
        index = await self.store.get_index()
        if target_column not in index.options.completed_columns:
            return None
        task = await self.store.get_task(task_id)
        derived = derive_next(task, index, target_column)
        if derived is None:
            return None
        successor, column = derived
        created = await self.store.create_task(successor, column)
        logger.info("created recurrence %s for %s in %s", created.id, task_id, column)
        return created

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def refresh(self) -> CommandResult:
        """Request a full refresh; failures keep the displayed snapshot."""
        try:
            outcome = await self.sequencer.request_refresh()
        except TaskBoardError as e:
            self._report(e, "refresh")
            return CommandResult(ok=False, error=e)
        return CommandResult(refresh=outcome)

    async def open(self) -> CommandResult:
        """Initial refresh when the board is first shown."""
        return await self.refresh()

    async def move(self, task_id: str, column: str, position: int = -1) -> CommandResult:
        """Move a single task, then check recurrence and refresh."""
        if self.snapshot is not None:
            current = self.snapshot.columns.get(column, [])
            if position >= 0 and position < len(current) and current[position] == task_id:
                return CommandResult()
        self.view = move_within(self.view, task_id, column, position)

        result = CommandResult()
        try:
            await self.store.move_task(task_id, column, position)
            successor = await self._handle_recurrence(task_id, column)
            if successor is not None:
                result.created.append(successor)
        except TaskBoardError as e:
            self._report(e, f"move {task_id}")
            result.ok, result.error = False, e

        result.refresh = await self._closing_refresh(result)
        return result

    async def bulk_move(self, task_ids: Iterable[str], column: str) -> CommandResult:
        """Move several tasks to the end of *column* with a single closing refresh."""
        ordered = self.ordered_ids(task_ids)
        result = CommandResult()
        async with self.sequencer.suppressed_updates():
            for task_id in ordered:
                try:
                    await self.store.move_task(task_id, column, -1)
                except TaskBoardError as e:
                    self._record(result, e, f"move {task_id}")
                    continue
                try:
                    successor = await self._handle_recurrence(task_id, column)
                except TaskBoardError as e:
                    self._record(result, e, f"recurrence for {task_id}")
                    continue
                if successor is not None:
                    result.created.append(successor)

        self.selection.clear()
        batch_error = result.error
        result.refresh = await self._closing_refresh(result)
        if batch_error is not None:
            self._report(batch_error, "bulk move")
        count = len(ordered)
        self._inform(f"Moved {count} task{'' if count == 1 else 's'} to {column}.")
        return result

    async def bulk_archive(self, task_ids: Iterable[str]) -> CommandResult:
        """Archive several tasks with a single closing refresh."""
        ordered = self.ordered_ids(task_ids)
        result = CommandResult()
        async with self.sequencer.suppressed_updates():
            for task_id in ordered:
                try:
                    await self.store.archive_task(task_id)
                except TaskBoardError as e:
                    self._record(result, e, f"archive {task_id}")

        self.selection.clear()
        batch_error = result.error
        result.refresh = await self._closing_refresh(result)
        if batch_error is not None:
            self._report(batch_error, "bulk archive")
        count = len(ordered)
        self._inform(f"Archived {count} task{'' if count == 1 else 's'}.")
        return result

    async def drag(
        self, task_id: str, column: str, drop_index: int
    ) -> CommandResult:
        """Handle a card dropped at *drop_index* of *column*.

        When the card is part of a selection of more than one task, the whole
        selection moves as a contiguous block; otherwise only the card moves.
        """
        if task_id in self.selection and len(self.selection) > 1:
            selected = set(self.selection.selected)
            self.view = splice_selection(self.view, selected, column, drop_index)
            return await self.bulk_move(selected, column)

        self.selection.clear()
        return await self.move(task_id, column, drop_index)

    async def quick_update(self, task_id: str, updates: QuickUpdate) -> CommandResult:
        """Apply a context-menu update to one task."""
        result = CommandResult()
        try:
            _, target_column = await self.task_service.quick_update(task_id, updates)
            if target_column is not None:
                successor = await self._handle_recurrence(task_id, target_column)
                if successor is not None:
                    result.created.append(successor)
        except TaskBoardError as e:
            self._report(e, f"update {task_id}", prefix="Failed to update task: ")
            result.ok, result.error = False, e
            return result

        result.refresh = await self._closing_refresh(result)
        return result

    async def sort(
        self, column: str, fields: list[SortField], persist: bool
    ) -> CommandResult:
        """Sort a column; an empty field list clears the saved sorting."""
        result = CommandResult()
        try:
            await self.store.sort_column(column, fields, persist)
        except TaskBoardError as e:
            self._report(e, f"sort {column}")
            return CommandResult(ok=False, error=e)
        result.refresh = await self._closing_refresh(result)
        return result

    async def sprint(
        self, name: str, description: str = "", start: datetime | None = None
    ) -> CommandResult:
        """Start a new sprint."""
        result = CommandResult()
        try:
            await self.store.start_sprint(name, description, start or datetime.now().astimezone())
        except TaskBoardError as e:
            self._report(e, f"sprint {name}")
            return CommandResult(ok=False, error=e)
        result.refresh = await self._closing_refresh(result)
        return result

    @staticmethod
    def _record(result: CommandResult, error: TaskBoardError, action: str) -> None:
        logger.warning("%s failed: %s", action, error)
        result.ok = False
        if result.error is None:
            result.error = error

    async def _closing_refresh(self, result: CommandResult) -> RefreshOutcome | None:
        refreshed = await self.refresh()
        if not refreshed.ok:
            result.ok = False
            if result.error is None:
                result.error = refreshed.error
        return refreshed.refresh
