"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real filesystem state and
builders for board fixtures.
"""

from __future__ import annotations

from unittest.mock import patch

import pytest

from taskboard_cli.adapters import JsonTaskStore
from taskboard_cli.models import BoardOptions, Recurrence


# ---------------------------------------------------------------------------
# Filesystem isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path):
    """Point every platformdirs lookup at *tmp_path* and reset cached singletons."""
    import taskboard_cli.config as config_mod
    import taskboard_cli.utils.logger as logger_mod
    from taskboard_cli.services.board_context import get_board_service, get_store

    tmpdir = str(tmp_path)
    config_mod._config_manager = None
    get_store.cache_clear()
    get_board_service.cache_clear()
    with patch("taskboard_cli.config.user_config_dir", return_value=tmpdir + "/config"):
        with patch("taskboard_cli.config.user_data_dir", return_value=tmpdir + "/data"):
            with patch("taskboard_cli.utils.logger.user_log_dir", return_value=tmpdir + "/log"):
                yield tmp_path
    config_mod._config_manager = None
    logger_mod._logger = None
    get_store.cache_clear()
    get_board_service.cache_clear()


# ---------------------------------------------------------------------------
# Board builders
# ---------------------------------------------------------------------------


@pytest.fixture()
def board_options() -> BoardOptions:
    return BoardOptions(started_columns=["Doing"], completed_columns=["Done"])


@pytest.fixture()
def json_store(tmp_path, board_options) -> JsonTaskStore:
    """A fresh board with Todo/Doing/Done columns in *tmp_path*."""
    store = JsonTaskStore(tmp_path / "board.json")
    store.initialise("Test board", ["Todo", "Doing", "Done"], options=board_options)
    return store


@pytest.fixture()
def daily() -> Recurrence:
    return Recurrence(type="daily")
