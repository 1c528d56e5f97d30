"""Configuration management commands."""

import typer
from pydantic import ValidationError

from taskboard_cli.config import get_config_manager
from taskboard_cli.utils.exit_codes import ERROR_INVALID_ARGS, ERROR_NOT_FOUND
from taskboard_cli.utils.typer_helpers import SuggestingGroup
from taskboard_cli.utils.ui.console import get_console
from taskboard_cli.utils.ui.formatters import format_output, format_success

from .decorators import AppError, command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Configuration management commands")
console = get_console(highlight=False)


def _parse_value(value: str) -> str | bool:
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    return value


@app.command("view")
@command_wrapper
def view_config(
    profile: str = typer.Option("default", "--profile", help="Profile name"),
    output: str = typer.Option("pretty", "--output", "-o", help="Output format"),
) -> None:
    """View current configuration."""
    config_manager = get_config_manager(profile)
    format_output(config_manager.config.model_dump(), output)


@app.command("get")
@command_wrapper
def get_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., store.path)"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Get a configuration value."""
    value = get_config_manager(profile).get(key)
    if value is None:
        raise AppError(f"Configuration key '{key}' not found", exit_code=ERROR_NOT_FOUND)
    console.print(value)


@app.command("set")
@command_wrapper
def set_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., store.path)"),
    value: str = typer.Argument(..., help="Configuration value"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Set a configuration value."""
    parsed_value = _parse_value(value)
    try:
        get_config_manager(profile).set(key, parsed_value)
    except KeyError as e:
        raise AppError(
            f"Configuration key '{key}' not found", exit_code=ERROR_NOT_FOUND
        ) from e
    except ValidationError as e:
        raise AppError(
            f"Invalid value for '{key}': {value!r}", exit_code=ERROR_INVALID_ARGS
        ) from e
    format_success(f"Configuration '{key}' set to '{parsed_value}'")


@app.command("reset")
@command_wrapper
def reset_config(
    key: str | None = typer.Argument(None, help="Configuration key to reset"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Reset configuration to defaults."""
    if not yes:
        msg = "entire configuration" if not key else f"'{key}'"
        if not typer.confirm(f"Are you sure you want to reset {msg}?"):
            console.print("[yellow]Cancelled.[/yellow]")
            raise typer.Exit(0)

    try:
        get_config_manager(profile).reset(key)
    except KeyError as e:
        raise AppError(
            f"Configuration key '{key}' not found", exit_code=ERROR_NOT_FOUND
        ) from e
    if key:
        format_success(f"Configuration '{key}' reset to default")
    else:
        format_success("Configuration reset to defaults")
