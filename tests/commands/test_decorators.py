"""Unit tests for command decorators."""

from unittest.mock import patch

import pytest
import typer
from typer.testing import CliRunner

from taskboard_cli.commands.decorators import AppError, command_wrapper, exit_code_for
from taskboard_cli.models import (
    ColumnNotFoundError,
    StoreError,
    TaskBoardError,
    TaskNotFoundError,
    TaskValidationError,
)
from taskboard_cli.utils.exit_codes import (
    ERROR_GENERAL,
    ERROR_INVALID_ARGS,
    ERROR_NOT_FOUND,
    ERROR_STORE,
)

runner = CliRunner()


def _app(func) -> typer.Typer:
    app = typer.Typer()
    app.command()(command_wrapper(func))
    return app


@pytest.mark.parametrize(
    "error,code",
    [
        (TaskNotFoundError("a"), ERROR_NOT_FOUND),
        (ColumnNotFoundError("Later"), ERROR_NOT_FOUND),
        (TaskValidationError("bad"), ERROR_INVALID_ARGS),
        (StoreError("disk"), ERROR_STORE),
        (TaskBoardError("other"), ERROR_GENERAL),
    ],
)
def test_exit_code_for(error, code):
    assert exit_code_for(error) == code


def test_sync_command_runs():
    def hello() -> None:
        print("hello")

    result = runner.invoke(_app(hello))
    assert result.exit_code == 0
    assert "hello" in result.output


def test_async_command_runs_in_event_loop():
    async def hello() -> None:
        print("async hello")

    result = runner.invoke(_app(hello))
    assert result.exit_code == 0
    assert "async hello" in result.output


def test_app_error_uses_its_exit_code():
    def fail() -> None:
        raise AppError("bad input", exit_code=ERROR_INVALID_ARGS)

    result = runner.invoke(_app(fail))
    assert result.exit_code == ERROR_INVALID_ARGS
    assert "bad input" in result.output


def test_board_error_mapped_to_exit_code():
    async def fail() -> None:
        raise TaskNotFoundError("ghost")

    result = runner.invoke(_app(fail))
    assert result.exit_code == ERROR_NOT_FOUND
    assert "Task not found: ghost" in result.output


def test_unexpected_error_is_general_failure():
    def crash() -> None:
        raise RuntimeError("kaboom")

    result = runner.invoke(_app(crash))
    assert result.exit_code == ERROR_GENERAL
    assert "An unexpected error occurred: kaboom" in result.output


def test_explicit_exit_passes_through():
    def stop() -> None:
        raise typer.Exit(0)

    with patch("taskboard_cli.commands.decorators.format_error") as format_error:
        result = runner.invoke(_app(stop))
    assert result.exit_code == 0
    format_error.assert_not_called()
