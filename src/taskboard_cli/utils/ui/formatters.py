"""Output formatters for different formats."""

import json
from collections.abc import Mapping
from datetime import datetime
from typing import Any

import yaml
from rich.table import Table
from rich.text import Text

from taskboard_cli.models import BoardSnapshot, Task
from taskboard_cli.services.query_engine import is_overdue
from taskboard_cli.utils.dates import format_date
from taskboard_cli.utils.recurrence import describe_recurrence
from taskboard_cli.utils.ui.console import get_console

console = get_console()


def format_output(data: Any, output_format: str = "pretty") -> None:
    """Format and display plain data (dicts, lists) in json, yaml or pretty form."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str))
    elif output_format == "yaml":
        print(yaml.safe_dump(json.loads(json.dumps(data, default=str)), sort_keys=False))
    elif isinstance(data, Mapping):
        format_single_item(data)
    else:
        console.print(data)


def format_single_item(item: Mapping) -> None:
    """Format a single item as a two column key/value table."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="bold cyan")
    table.add_column("Value")
    for key, value in item.items():
        if isinstance(value, list):
            value = ", ".join(str(v) for v in value)
        table.add_row(key.replace("_", " ").title(), "" if value is None else str(value))
    console.print(table)


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[bold blue]Info:[/bold blue] {message}")


# ============================================================================
# Board Format Implementation
# ============================================================================

PRIORITY_COLORS = {
    "urgent": "bold red",
    "high": "bold orange3",
    "medium": "bold yellow",
    "low": "green",
}

METADATA_ICONS = {
    "due": "📅",
    "assigned": "👤",
    "tags": "🏷️",
    "recurrence": "🔄",
    "sub_tasks": "☑️",
    "comments": "💬",
    "overdue": "⏱️",
}


def format_task_card(
    task: Task,
    date_format: str,
    selected: bool = False,
    now: datetime | None = None,
) -> Text:
    """Render one task card as rich Text."""
    card = Text()
    if selected:
        card.append("▶ ", style="bold magenta")

    priority = (task.metadata.priority or "").lower()
    card.append(task.name, style=PRIORITY_COLORS.get(priority, "bold"))
    card.append(f"\n{task.id}", style="dim")

    if task.metadata.due is not None:
        overdue = is_overdue(task, now)
        icon = METADATA_ICONS["overdue"] if overdue else METADATA_ICONS["due"]
        card.append(
            f"\n{icon} {format_date(task.metadata.due, date_format)}",
            style="red" if overdue else "",
        )
    if task.metadata.assigned:
        card.append(f"\n{METADATA_ICONS['assigned']} {task.metadata.assigned}")
    if task.metadata.tags:
        card.append(f"\n{METADATA_ICONS['tags']} {' '.join(task.metadata.tags)}", style="cyan")
    if task.metadata.recurrence is not None:
        card.append(
            f"\n{METADATA_ICONS['recurrence']} {describe_recurrence(task.metadata.recurrence)}",
            style="dim",
        )
    if task.sub_tasks:
        done = sum(1 for sub_task in task.sub_tasks if sub_task.completed)
        card.append(f"\n{METADATA_ICONS['sub_tasks']} {done}/{len(task.sub_tasks)}", style="dim")
    if task.comments:
        card.append(f"\n{METADATA_ICONS['comments']} {len(task.comments)}", style="dim")
    return card


def format_board(
    snapshot: BoardSnapshot,
    columns: Mapping[str, list[Task]],
    selected: set[str] | None = None,
    query: str = "",
) -> None:
    """Render the board as one table column per visible board column.

    Args:
        snapshot: Accepted board snapshot
        columns: Visible column name -> filtered, ordered tasks
        selected: Ids of selected tasks, highlighted on their cards
        query: Active filter, shown in the header
    """
    selected = selected or set()

    header = Text()
    header.append(f"📋 {snapshot.name}", style="bold cyan")
    if snapshot.current_sprint is not None:
        header.append(f"  sprint: {snapshot.current_sprint.name}", style="dim")
    if query:
        header.append(f"  filter: {query}", style="yellow")
    console.print(header)
    if snapshot.description:
        console.print(snapshot.description, style="dim")

    table = Table(show_lines=True, expand=True)
    for column, tasks in columns.items():
        title = f"{column} ({len(tasks)})"
        if column in snapshot.completed_columns:
            title = f"✔ {title}"
        if column in snapshot.column_sorting:
            title += " ⇅"
        table.add_column(title, overflow="fold")

    rows = max((len(tasks) for tasks in columns.values()), default=0)
    for i in range(rows):
        table.add_row(
            *[
                format_task_card(tasks[i], snapshot.date_format, tasks[i].id in selected)
                if i < len(tasks)
                else Text("")
                for tasks in columns.values()
            ]
        )
    console.print(table)


def snapshot_to_dict(snapshot: BoardSnapshot, columns: Mapping[str, list[Task]]) -> dict:
    """Serialisable board view for json and yaml output."""
    return {
        "name": snapshot.name,
        "description": snapshot.description,
        "current_sprint": snapshot.current_sprint.name if snapshot.current_sprint else None,
        "columns": {
            column: [task.model_dump(mode="json") for task in tasks]
            for column, tasks in columns.items()
        },
    }
