"""Tests for the application logger utility."""

from __future__ import annotations

import logging
from unittest.mock import patch

import pytest


@pytest.fixture(autouse=True)
def reset_logger():
    """Reset the logger singleton and logging state between tests."""
    import taskboard_cli.utils.logger as logger_mod

    logger_mod._logger = None
    logging.getLogger("taskboard_cli").handlers.clear()

    yield

    logger_mod._logger = None
    logging.getLogger("taskboard_cli").handlers.clear()


def test_get_logger_creates_log_file(tmp_path):
    """Logger creates the log file inside user_log_dir."""
    with patch("taskboard_cli.utils.logger.user_log_dir", return_value=str(tmp_path)):
        from taskboard_cli.utils.logger import get_logger

        logger = get_logger()

    assert (tmp_path / "taskboard.log").exists()
    assert isinstance(logger, logging.Logger)


def test_get_logger_returns_singleton(tmp_path):
    with patch("taskboard_cli.utils.logger.user_log_dir", return_value=str(tmp_path)):
        from taskboard_cli.utils.logger import get_logger

        assert get_logger() is get_logger()


def test_module_logger_propagates_to_app_log(tmp_path):
    """Module loggers write through the application handler."""
    with patch("taskboard_cli.utils.logger.user_log_dir", return_value=str(tmp_path)):
        from taskboard_cli.utils.logger import get_logger

        app_logger = get_logger()
        get_logger("taskboard_cli.services.board_service").warning("from a module")

    for handler in app_logger.handlers:
        handler.flush()
    content = (tmp_path / "taskboard.log").read_text()
    assert "from a module" in content
    assert "[taskboard_cli.services.board_service]" in content


def test_named_logger_does_not_touch_log_dir(tmp_path):
    nested = tmp_path / "never"
    with patch("taskboard_cli.utils.logger.user_log_dir", return_value=str(nested)):
        from taskboard_cli.utils.logger import get_logger

        get_logger("taskboard_cli.adapters.json_store")

    assert not nested.exists()


def test_set_level(tmp_path):
    with patch("taskboard_cli.utils.logger.user_log_dir", return_value=str(tmp_path)):
        from taskboard_cli.utils.logger import get_logger, set_level

        set_level("warning")
        assert get_logger().level == logging.WARNING

        set_level("nonsense")
        assert get_logger().level == logging.INFO


def test_log_file_path(tmp_path):
    with patch("taskboard_cli.utils.logger.user_log_dir", return_value=str(tmp_path)):
        from taskboard_cli.utils.logger import log_file_path

        assert log_file_path() == tmp_path / "taskboard.log"
