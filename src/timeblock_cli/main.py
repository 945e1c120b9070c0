"""Main entry point for timeblock-cli."""

import typer

from timeblock_cli import __version__
from timeblock_cli.commands import config, tasks
from timeblock_cli.services.config_service import get_config_service
from timeblock_cli.utils.logger import get_logger
from timeblock_cli.utils.typer_helpers import SuggestingGroup
from timeblock_cli.utils.ui.console import disable_color, get_console

app = typer.Typer(
    name="timeblock",
    cls=SuggestingGroup,
    help="Plan a day of non-overlapping time blocks",
    no_args_is_help=True,
)

console = get_console(highlight=False)

app.add_typer(tasks.app, name="tasks", help="Task management commands")
app.add_typer(config.app, name="config", help="Configuration management")


def _color_enabled() -> bool:
    try:
        return get_config_service().config.output.color
    except RuntimeError as e:
        # Leave `config reset` usable when the file is broken
        get_logger().warning("ignoring unreadable config: %s", e)
        return True


@app.callback()
def main_callback(
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored output"),
) -> None:
    """Plan a day of non-overlapping time blocks."""
    if no_color or not _color_enabled():
        disable_color()


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]timeblock[/bold] version [cyan]{__version__}[/cyan]")


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
