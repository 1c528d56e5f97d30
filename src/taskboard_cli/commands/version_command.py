"""Command 'version' of taskboard-cli"""

import platform

import typer

from taskboard_cli import __version__
from taskboard_cli.config import get_config_manager
from taskboard_cli.utils.logger import log_file_path
from taskboard_cli.utils.ui.console import get_console
from taskboard_cli.utils.ui.formatters import format_output

app = typer.Typer()
console = get_console(highlight=False)


@app.command()
def version(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Also show Python version and file locations"
    ),
) -> None:
    """Show version information"""
    if not verbose:
        console.print(__version__)
        return
    manager = get_config_manager()
    format_output(
        {
            "version": __version__,
            "python": platform.python_version(),
            "config_file": str(manager.config_file),
            "board_file": manager.config.store.path,
            "log_file": str(log_file_path()),
        }
    )
