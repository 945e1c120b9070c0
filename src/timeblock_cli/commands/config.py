"""Configuration commands."""

import typer

from timeblock_cli.services.config_service import get_config_service
from timeblock_cli.utils import exit_codes
from timeblock_cli.utils.typer_helpers import SuggestingGroup
from timeblock_cli.utils.ui.console import get_console
from timeblock_cli.utils.ui.formatters import format_success, format_value

from .decorators import AppError, command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Configuration management")
console = get_console(highlight=False)


@app.command("show")
@command_wrapper
def show_config() -> None:
    """Show the full configuration."""
    config_service = get_config_service()
    console.print(f"[dim]{config_service.config_path}[/dim]")
    console.print_json(config_service.config.model_dump_json())


@app.command("get")
@command_wrapper
def get_config(
    key: str = typer.Argument(..., help="Dot-separated key, e.g. schedule.day_start"),
) -> None:
    """Print one configuration value."""
    try:
        value = get_config_service().get(key)
    except KeyError as e:
        raise AppError(
            f"Unknown config key: {key}", exit_codes.ERROR_INVALID_ARGS
        ) from e
    console.print(format_value(value))


@app.command("set")
@command_wrapper
def set_config(
    key: str = typer.Argument(..., help="Dot-separated key"),
    value: str = typer.Argument(..., help="New value"),
) -> None:
    """Set one configuration value."""
    try:
        get_config_service().set(key, value)
    except KeyError as e:
        raise AppError(
            f"Unknown config key: {key}", exit_codes.ERROR_INVALID_ARGS
        ) from e
    format_success(f"{key} = {value}")


@app.command("reset")
@command_wrapper
def reset_config(
    key: str | None = typer.Argument(None, help="Key to reset (default: all)"),
) -> None:
    """Reset configuration to defaults."""
    try:
        get_config_service().reset(key)
    except KeyError as e:
        raise AppError(
            f"Unknown config key: {key}", exit_codes.ERROR_INVALID_ARGS
        ) from e
    format_success(f"Reset {key or 'all settings'} to defaults")
