"""
Exit codes for the task board CLI.

Scripts can tell a missing task from a broken board file without parsing
the error text.
"""

SUCCESS = 0
ERROR_GENERAL = 1
ERROR_INVALID_ARGS = 2
ERROR_STORE = 3
ERROR_NOT_FOUND = 5

# code -> (name, description, short label for help text)
_EXIT_CODES = {
    SUCCESS: ("SUCCESS", "Command executed successfully", "ok"),
    ERROR_GENERAL: ("ERROR_GENERAL", "A general error occurred", "error"),
    ERROR_INVALID_ARGS: (
        "ERROR_INVALID_ARGS",
        "Invalid arguments or validation error",
        "invalid arguments",
    ),
    ERROR_STORE: ("ERROR_STORE", "Board file could not be read or written", "board file error"),
    ERROR_NOT_FOUND: ("ERROR_NOT_FOUND", "Task or column not found", "not found"),
}


def get_exit_code_name(code: int) -> str:
    """Get the name of an exit code for display purposes."""
    entry = _EXIT_CODES.get(code)
    return entry[0] if entry else f"UNKNOWN({code})"


def get_exit_code_description(code: int) -> str:
    """Get a human-readable description of an exit code."""
    entry = _EXIT_CODES.get(code)
    return entry[1] if entry else "Unknown error"


def exit_codes_epilog() -> str:
    """One-line summary of the exit codes for ``--help``."""
    labels = ", ".join(f"{code} {label}" for code, (_, _, label) in _EXIT_CODES.items())
    return f"Exit codes: {labels}."
