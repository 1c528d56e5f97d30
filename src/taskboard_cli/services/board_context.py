"""Board bootstrap for commands.

Key Functions:
- get_store(): JsonTaskStore for the configured board file
- get_board_service(): BoardService wired to the console notifiers

Usage Pattern:
    from taskboard_cli.services.board_context import get_board_service

    board = get_board_service()
    await board.open()
    await board.bulk_move(["task-a", "task-b"], "Done")
"""

from __future__ import annotations

from functools import lru_cache

from taskboard_cli.adapters import JsonTaskStore
from taskboard_cli.config import get_config_manager
from taskboard_cli.services.board_service import BoardService
from taskboard_cli.utils.ui.formatters import format_error, format_info


@lru_cache(maxsize=1)
def get_store() -> JsonTaskStore:
    """Get a cached JsonTaskStore for the board path in the active config."""
    config = get_config_manager().config
    return JsonTaskStore(config.store.path)


@lru_cache(maxsize=1)
def get_board_service() -> BoardService:
    """Get a cached BoardService over ``get_store()``.

    Failures are printed with ``format_error``. Bulk summaries are printed
    with ``format_info`` unless ``board.show_task_notifications`` is off.
    """
    config = get_config_manager().config
    return BoardService(
        get_store(),
        notify_error=format_error,
        notify_info=format_info if config.board.show_task_notifications else None,
    )
