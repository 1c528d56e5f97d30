"""Tests for semantic exit codes."""

from taskboard_cli.utils import exit_codes


def test_codes_are_distinct():
    codes = [
        exit_codes.SUCCESS,
        exit_codes.ERROR_GENERAL,
        exit_codes.ERROR_INVALID_ARGS,
        exit_codes.ERROR_STORE,
        exit_codes.ERROR_NOT_FOUND,
    ]
    assert len(set(codes)) == len(codes)


def test_get_exit_code_name():
    assert exit_codes.get_exit_code_name(exit_codes.ERROR_NOT_FOUND) == "ERROR_NOT_FOUND"
    assert exit_codes.get_exit_code_name(42) == "UNKNOWN(42)"


def test_get_exit_code_description():
    assert "not found" in exit_codes.get_exit_code_description(exit_codes.ERROR_NOT_FOUND)
    assert exit_codes.get_exit_code_description(42) == "Unknown error"


def test_epilog_lists_every_code():
    epilog = exit_codes.exit_codes_epilog()
    assert epilog.startswith("Exit codes: 0 ok")
    assert "3 board file error" in epilog
    assert "5 not found" in epilog
