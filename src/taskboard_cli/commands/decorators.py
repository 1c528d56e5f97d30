"""Decorators for command functions."""

import asyncio
import functools
import time
import traceback
from collections.abc import Callable

import typer

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
from taskboard_cli.utils.logger import get_logger
from taskboard_cli.utils.ui.formatters import format_error


class AppError(Exception):
    """Custom application error with exit code."""

    def __init__(self, message: str, exit_code: int = ERROR_GENERAL):
        super().__init__(message)
        self.exit_code = exit_code


def exit_code_for(error: TaskBoardError) -> int:
    """Map a board error to its semantic exit code."""
    if isinstance(error, (TaskNotFoundError, ColumnNotFoundError)):
        return ERROR_NOT_FOUND
    if isinstance(error, TaskValidationError):
        return ERROR_INVALID_ARGS
    if isinstance(error, StoreError):
        return ERROR_STORE
    return ERROR_GENERAL


def command_wrapper(func: Callable):
    """Run a sync or async command with timing logs and uniform error output."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger()
        cmd = func.__name__
        start = time.monotonic()
        logger.info("command started: %s", cmd)
        try:
            if asyncio.iscoroutinefunction(func):
                result = asyncio.run(func(*args, **kwargs))
            else:
                result = func(*args, **kwargs)

            elapsed = time.monotonic() - start
            logger.info("command completed: %s (%.3fs)", cmd, elapsed)
            return result

        except (AppError, TaskBoardError) as e:
            elapsed = time.monotonic() - start
            logger.error("command failed: %s (%.3fs) - %s", cmd, elapsed, str(e))
            format_error(str(e))
            code = e.exit_code if isinstance(e, AppError) else exit_code_for(e)
            raise typer.Exit(code=code) from e

        except typer.Exit:
            raise

        except Exception as e:
            elapsed = time.monotonic() - start
            logger.error(
                "command failed: %s (%.3fs) - %s\n%s",
                cmd,
                elapsed,
                str(e),
                traceback.format_exc(),
            )
            format_error(f"An unexpected error occurred: {str(e)}")
            raise typer.Exit(code=ERROR_GENERAL) from e

    return wrapper
