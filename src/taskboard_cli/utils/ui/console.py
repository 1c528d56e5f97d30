"""Shared Rich consoles for the task board CLI."""

from functools import lru_cache

from rich.console import Console


@lru_cache(maxsize=2)
def get_console(highlight: bool = True) -> Console:
    """Get the Rich Console used for output (one per highlight setting)."""
    return Console(highlight=highlight)


def set_color(enabled: bool) -> None:
    """Turn colour on or off for every shared console."""
    for highlight in (True, False):
        get_console(highlight).no_color = not enabled
