"""Main entry point for the task board CLI."""

import typer

from taskboard_cli.commands import board_command, config_command, version_command
from taskboard_cli.config import get_config_manager
from taskboard_cli.utils.exit_codes import exit_codes_epilog
from taskboard_cli.utils.logger import set_level
from taskboard_cli.utils.typer_helpers import SuggestingGroup
from taskboard_cli.utils.ui.console import set_color

# Create main app with custom group class
app = typer.Typer(
    name="taskboard",
    cls=SuggestingGroup,
    help="A kanban task board kept in a single JSON file",
    epilog=exit_codes_epilog(),
    no_args_is_help=True,
)

# Board and version commands sit at the top level
app.add_typer(board_command.app)
app.add_typer(version_command.app)
app.add_typer(config_command.app, name="config", help="Configuration management")


@app.callback()
def main_callback() -> None:
    """Apply logging and output settings from the active configuration."""
    config = get_config_manager().config
    set_level(config.log.level)
    if not config.output.color:
        set_color(False)


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
