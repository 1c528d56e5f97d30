"""Tests for output formatters and the board renderer."""

from __future__ import annotations

import json
from datetime import datetime, timedelta

import yaml

from taskboard_cli.models import (
    BoardIndex,
    BoardOptions,
    BoardSnapshot,
    Sprint,
    Task,
    TaskMetadata,
)
from taskboard_cli.utils.ui.formatters import (
    format_board,
    format_error,
    format_output,
    format_success,
    format_task_card,
    snapshot_to_dict,
)


def _snapshot() -> BoardSnapshot:
    index = BoardIndex(
        name="Home",
        columns={"Todo": ["dishes"], "Done": ["laundry"], "Ideas": []},
        options=BoardOptions(
            completed_columns=["Done"],
            hidden_columns=["Ideas"],
            sprints=[Sprint(name="Week 1", start=datetime(2024, 1, 1))],
        ),
    )
    tasks = [
        Task(id="dishes", name="Dishes", column="Todo"),
        Task(id="laundry", name="Laundry", column="Done"),
    ]
    return BoardSnapshot.from_index(index, tasks)


def test_format_output_json(capsys):
    format_output({"name": "x", "count": 2}, "json")
    assert json.loads(capsys.readouterr().out) == {"name": "x", "count": 2}


def test_format_output_yaml(capsys):
    format_output({"name": "x", "when": datetime(2024, 1, 2)}, "yaml")
    data = yaml.safe_load(capsys.readouterr().out)
    assert data["name"] == "x"
    assert str(data["when"]).startswith("2024-01-02")


def test_format_output_pretty_mapping(capsys):
    format_output({"store_path": "/tmp/board.json", "tags": ["a", "b"]})
    out = capsys.readouterr().out
    assert "Store Path" in out
    assert "a, b" in out


def test_message_formatters(capsys):
    format_error("boom")
    format_success("done")
    out = capsys.readouterr().out
    assert "Error:" in out and "boom" in out
    assert "Success:" in out and "done" in out


class TestTaskCard:
    def test_overdue_card_uses_overdue_icon(self):
        task = Task(
            id="pay-rent",
            name="Pay rent",
            metadata=TaskMetadata(due=datetime.now() - timedelta(days=2)),
        )
        card = format_task_card(task, "%d/%m/%Y")
        assert "⏱️" in card.plain

    def test_selected_card_is_marked(self):
        task = Task(id="a", name="A")
        assert format_task_card(task, "%d/%m/%Y", selected=True).plain.startswith("▶")

    def test_sub_task_progress(self):
        task = Task.model_validate(
            {
                "id": "a",
                "name": "A",
                "sub_tasks": [{"text": "x", "completed": True}, {"text": "y"}],
            }
        )
        assert "1/2" in format_task_card(task, "%d/%m/%Y").plain


def test_format_board_shows_visible_columns(capsys):
    snapshot = _snapshot()
    columns = {column: snapshot.tasks_in(column) for column in snapshot.visible_columns()}
    format_board(snapshot, columns, query="dish")
    out = capsys.readouterr().out
    assert "Home" in out
    assert "Week 1" in out
    assert "Dishes" in out
    assert "Ideas" not in out


def test_snapshot_to_dict():
    snapshot = _snapshot()
    data = snapshot_to_dict(snapshot, {"Todo": snapshot.tasks_in("Todo")})
    assert data["current_sprint"] == "Week 1"
    assert [task["id"] for task in data["columns"]["Todo"]] == ["dishes"]
