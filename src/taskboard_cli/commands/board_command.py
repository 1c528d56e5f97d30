"""Board commands - create a board, add tasks, show, move, archive, sort."""

from datetime import datetime

import typer

from taskboard_cli.config import get_config_manager
from taskboard_cli.models import BoardOptions, QuickUpdate, SortField
from taskboard_cli.services.board_context import get_board_service, get_store
from taskboard_cli.services.board_service import CommandResult
from taskboard_cli.services.sorting import resolve_sort_field
from taskboard_cli.utils.dates import parse_date
from taskboard_cli.utils.exit_codes import ERROR_INVALID_ARGS
from taskboard_cli.utils.recurrence import VALID_PATTERNS, resolve_recurrence
from taskboard_cli.utils.typer_helpers import SuggestingGroup
from taskboard_cli.utils.ui.formatters import (
    format_board,
    format_output,
    format_success,
    snapshot_to_dict,
)

from .decorators import AppError, command_wrapper, exit_code_for

app = typer.Typer(cls=SuggestingGroup, help="Board commands")

DEFAULT_COLUMNS = ["Backlog", "Todo", "In Progress", "Done"]


def _parse_date_option(value: str | None, option: str) -> datetime | None:
    if value is None:
        return None
    parsed = parse_date(value)
    if parsed is None:
        raise AppError(
            f"Invalid date for {option}: {value!r} (use DD/MM/YYYY or ISO 8601)",
            exit_code=ERROR_INVALID_ARGS,
        )
    return parsed


def _parse_fields(fields: list[str]) -> dict[str, str | None]:
    """Parse ``name=value`` pairs; a bare ``name`` sets the field with no value."""
    parsed: dict[str, str | None] = {}
    for item in fields:
        name, sep, value = item.partition("=")
        if not name:
            raise AppError(f"Invalid custom field: {item!r}", exit_code=ERROR_INVALID_ARGS)
        parsed[name] = value if sep else None
    return parsed


def _parse_sort_fields(specs: list[str], descending: bool) -> list[SortField]:
    """Parse ``Field`` or ``Field:desc`` sort keys."""
    result = []
    for spec in specs:
        label, _, order = spec.partition(":")
        if order.lower() in ("desc", "descending"):
            direction = "descending"
        elif order.lower() in ("", "asc", "ascending"):
            direction = "descending" if descending and not order else "ascending"
        else:
            raise AppError(f"Invalid sort order: {order!r}", exit_code=ERROR_INVALID_ARGS)
        result.append(SortField(field=resolve_sort_field(label), order=direction))
    return result


def _finish(result: CommandResult) -> None:
    """Exit non-zero after a failed board command; the error is already shown."""
    if not result.ok and result.error is not None:
        raise typer.Exit(code=exit_code_for(result.error))


@app.command("init")
@command_wrapper
def init_board(
    name: str = typer.Argument(..., help="Board name"),
    columns: list[str] = typer.Option(
        DEFAULT_COLUMNS, "--column", "-c", help="Column name (repeat for each column)"
    ),
    description: str = typer.Option("", "--description", "-d", help="Board description"),
    started: list[str] = typer.Option(
        [], "--started-column", help="Column that marks tasks as started"
    ),
    completed: list[str] = typer.Option(
        [], "--completed-column", help="Column that marks tasks as completed"
    ),
) -> None:
    """Create a new board file at the configured store path."""
    options = BoardOptions(
        started_columns=started or [c for c in columns if c == "In Progress"],
        completed_columns=completed or [c for c in columns if c == "Done"],
    )
    unknown = set(options.started_columns + options.completed_columns) - set(columns)
    if unknown:
        raise AppError(
            f"Unknown column(s): {', '.join(sorted(unknown))}", exit_code=ERROR_INVALID_ARGS
        )
    store = get_store()
    store.initialise(name, columns, description=description, options=options)
    format_success(f"Board created: {store.path}")


@app.command("add")
@command_wrapper
async def add_task(
    name: str = typer.Argument(..., help="Task name"),
    column: str | None = typer.Option(None, "--column", "-c", help="Target column"),
    description: str = typer.Option("", "--description", "-d", help="Task description"),
    due: str | None = typer.Option(None, "--due", help="Due date (DD/MM/YYYY or ISO)"),
    priority: str | None = typer.Option(None, "--priority", "-p", help="Priority"),
    assigned: str | None = typer.Option(None, "--assigned", "-a", help="Assignee"),
    tags: list[str] = typer.Option([], "--tag", "-t", help="Tag (repeatable)"),
    recurrence: str | None = typer.Option(
        None, "--recurrence", "-r", help=f"Recurrence ({', '.join(VALID_PATTERNS)})"
    ),
    day_of_month: int | None = typer.Option(
        None, "--day-of-month", min=1, max=31, help="Day of month for monthly recurrence"
    ),
    fields: list[str] = typer.Option([], "--field", "-f", help="Custom field name=value"),
    output: str = typer.Option("pretty", "--output", "-o", help="Output format"),
) -> None:
    """Add a task to a column (the first open column by default)."""
    if not name.strip():
        raise AppError("Task name must not be empty", exit_code=ERROR_INVALID_ARGS)

    rule = None
    if recurrence is not None:
        rule = resolve_recurrence(recurrence, day_of_month)
        if rule is None:
            raise AppError(
                f"Unknown recurrence: {recurrence!r}. Valid: {', '.join(VALID_PATTERNS)}",
                exit_code=ERROR_INVALID_ARGS,
            )

    board = get_board_service()
    if column is None:
        column = (await board.store.get_index()).first_open_column()

    task = await board.task_service.add_task(
        name,
        column,
        description=description,
        due=_parse_date_option(due, "--due"),
        priority=priority,
        assigned=assigned,
        tags=tags,
        recurrence=rule,
        custom_fields=_parse_fields(fields),
    )
    format_success(f"Task created: {task.id} in {column}")
    if output != "pretty":
        format_output(task.model_dump(mode="json"), output)


@app.command("show")
@command_wrapper
async def show_board(
    query: str | None = typer.Option(None, "--filter", "-f", help="Filter query"),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """Show the board, optionally filtered.

    Filter terms are space separated and all must match: free text matches
    id or name, ``key:value`` matches a property (description, assigned, tag,
    relation, subtask, comment or a custom field), ``overdue`` matches tasks
    past their due date.
    """
    config = get_config_manager().config
    board = get_board_service()
    board.set_filter(query if query is not None else config.board.default_filter)
    result = await board.open()
    _finish(result)

    columns = {column: board.column_view(column) for column in board.visible_columns()}
    output_format = output or config.output.format
    if output_format == "pretty":
        format_board(board.snapshot, columns, board.selection.selected, board.query)
    else:
        format_output(snapshot_to_dict(board.snapshot, columns), output_format)


@app.command("move")
@command_wrapper
async def move_task(
    task_id: str = typer.Argument(..., help="Task ID"),
    column: str = typer.Argument(..., help="Target column"),
    position: int = typer.Option(
        -1, "--position", "-p", help="Position (default: end; single task only)"
    ),
    together: list[str] = typer.Option(
        [], "--with", "-w", help="Also move this task; the block goes to the end of the column"
    ),
) -> None:
    """Move a task to a column position, or a block of tasks to the end of a column."""
    if together and position >= 0:
        raise AppError(
            "--position only applies to single moves; blocks moved with --with go to the end",
            exit_code=ERROR_INVALID_ARGS,
        )
    board = get_board_service()
    _finish(await board.open())

    snapshot = board.snapshot
    if together:
        tasks = snapshot.task_map()
        for selected_id in dict.fromkeys([task_id, *together]):
            located = snapshot.position_of(selected_id)
            source = tasks.get(selected_id)
            board.select_toggle(
                selected_id,
                source.column if source else column,
                located[1] if located else -1,
            )

    if len(board.selection) > 1:
        result = await board.drag(task_id, column, len(snapshot.columns.get(column, [])))
    else:
        result = await board.move(task_id, column, position)
    _finish(result)
    format_success(f"Moved {task_id} to {column}")
    for successor in result.created:
        format_success(f"Recurring task created: {successor.id}")


@app.command("bulk-move")
@command_wrapper
async def bulk_move(
    task_ids: list[str] = typer.Argument(..., help="Task IDs"),
    column: str = typer.Option(..., "--to", help="Target column"),
) -> None:
    """Move several tasks to the end of a column."""
    board = get_board_service()
    _finish(await board.open())
    result = await board.bulk_move(task_ids, column)
    for successor in result.created:
        format_success(f"Recurring task created: {successor.id}")
    _finish(result)


@app.command("bulk-archive")
@command_wrapper
async def bulk_archive(
    task_ids: list[str] = typer.Argument(..., help="Task IDs"),
) -> None:
    """Archive several tasks."""
    board = get_board_service()
    _finish(await board.open())
    _finish(await board.bulk_archive(task_ids))


@app.command("update")
@command_wrapper
async def update_task(
    task_id: str = typer.Argument(..., help="Task ID"),
    priority: str | None = typer.Option(None, "--priority", "-p", help="Priority ('' clears)"),
    progress: float | None = typer.Option(None, "--progress", help="Progress (0-1)"),
    due: str | None = typer.Option(None, "--due", help="Due date ('' clears)"),
    started: str | None = typer.Option(None, "--started", help="Started date ('' clears)"),
    tags: list[str] | None = typer.Option(None, "--tag", "-t", help="Replace tags"),
    clear_tags: bool = typer.Option(False, "--clear-tags", help="Remove all tags"),
    column: str | None = typer.Option(None, "--column", "-c", help="Move to column"),
) -> None:
    """Quick-update task properties."""
    changes: dict = {}
    if priority is not None:
        changes["priority"] = priority
    if progress is not None:
        changes["progress"] = progress
    if due is not None:
        changes["due"] = _parse_date_option(due, "--due") if due else ""
    if started is not None:
        changes["started"] = _parse_date_option(started, "--started") if started else ""
    if clear_tags:
        changes["tags"] = []
    elif tags:
        changes["tags"] = tags
    if column is not None:
        changes["column"] = column
    if not changes:
        raise AppError("Nothing to update", exit_code=ERROR_INVALID_ARGS)

    board = get_board_service()
    result = await board.quick_update(task_id, QuickUpdate(**changes))
    _finish(result)
    format_success(f"Task updated: {task_id}")
    for successor in result.created:
        format_success(f"Recurring task created: {successor.id}")


@app.command("rename")
@command_wrapper
async def rename_task(
    task_id: str = typer.Argument(..., help="Task ID"),
    name: str = typer.Argument(..., help="New task name"),
) -> None:
    """Rename a task. The task keeps its id."""
    if not name.strip():
        raise AppError("Task name must not be empty", exit_code=ERROR_INVALID_ARGS)
    task = await get_board_service().task_service.rename_task(task_id, name)
    format_success(f"Task renamed: {task.id} is now {task.name!r}")


@app.command("sort")
@command_wrapper
async def sort_column(
    column: str = typer.Argument(..., help="Column to sort"),
    fields: list[str] | None = typer.Argument(
        None, help="Sort keys, e.g. Due or Priority:desc (none clears saved sorting)"
    ),
    descending: bool = typer.Option(False, "--desc", help="Default to descending order"),
    save: bool = typer.Option(False, "--save", help="Keep the column sorted"),
) -> None:
    """Sort a column by one or more fields."""
    sort_fields = _parse_sort_fields(fields or [], descending)
    board = get_board_service()
    _finish(await board.sort(column, sort_fields, save))
    if sort_fields:
        format_success(f"Sorted {column}")
    else:
        format_success(f"Cleared sorting for {column}")


@app.command("sprint")
@command_wrapper
async def start_sprint(
    name: str = typer.Argument(..., help="Sprint name"),
    description: str = typer.Option("", "--description", "-d", help="Sprint description"),
    start: str | None = typer.Option(None, "--start", help="Start date (default: now)"),
) -> None:
    """Start a new sprint."""
    board = get_board_service()
    _finish(await board.sprint(name, description, _parse_date_option(start, "--start")))
    format_success(f"Sprint started: {name}")
