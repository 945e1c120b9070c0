"""Output formatters for different formats."""

import json
from typing import Any

import yaml
from rich.errors import StyleSyntaxError
from rich.markup import escape
from rich.style import Style
from rich.table import Table
from rich.text import Text

from timeblock_cli.models import Task
from timeblock_cli.utils.clock import MINUTES_PER_DAY, to_minutes
from timeblock_cli.utils.ui.console import get_console

console = get_console()


def format_output(tasks: list[Task], output_format: str = "pretty") -> None:
    """Display tasks in the requested format."""
    data = [task.model_dump() for task in tasks]
    if output_format == "json":
        print(json.dumps(data, indent=2))
    elif output_format == "yaml":
        print(yaml.safe_dump(data, sort_keys=False), end="")
    elif output_format == "table":
        format_table(tasks)
    else:
        format_tasks_pretty(tasks)


def format_table(tasks: list[Task]) -> None:
    """Display tasks as a table."""
    table = Table(show_header=True, header_style="bold cyan")
    for column in ("ID", "Start", "End", "Name", "Color"):
        table.add_column(column)

    for task in tasks:
        table.add_row(
            str(task.id),
            task.start,
            task.end,
            task.name,
            Text(task.color, style=_swatch_style(task.color, background=False)),
        )
    console.print(table)


def format_tasks_pretty(tasks: list[Task]) -> None:
    """Display the day as a timeline, marking free time between tasks."""
    if not tasks:
        console.print("[dim]No tasks scheduled.[/dim]")
        return

    previous_end: str | None = None
    for task in tasks:
        if previous_end is not None and previous_end < task.start:
            gap = to_minutes(task.start) - to_minutes(previous_end)
            console.print(f"      [dim]free {format_duration(gap)}[/dim]")
        line = Text()
        line.append("  ")
        line.append("  ", style=_swatch_style(task.color))
        line.append(f" {task.start}-{task.end} ", style="bold")
        line.append(task.name)
        line.append(
            f"  ({format_duration(_duration(task))})",
            style="dim",
        )
        line.append(f"  #{task.id}", style="cyan")
        console.print(line)
        previous_end = task.end


def format_task(task: Task) -> None:
    """Display a single task on one line."""
    console.print(
        f"[cyan]#{task.id}[/cyan] [bold]{task.start}-{task.end}[/bold] {escape(task.name)}"
    )


def format_duration(minutes: int) -> str:
    """Render a minute count as e.g. ``1h30m``."""
    hours, mins = divmod(minutes, 60)
    if hours and mins:
        return f"{hours}h{mins:02d}m"
    if hours:
        return f"{hours}h"
    return f"{mins}m"


def _duration(task: Task) -> int:
    return (to_minutes(task.end) - to_minutes(task.start)) % MINUTES_PER_DAY


def _swatch_style(color: str, background: bool = True) -> Style | str:
    try:
        return Style.parse(f"on {color}" if background else color)
    except StyleSyntaxError:
        return ""


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {escape(message)}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {escape(message)}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {escape(message)}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[bold blue]Info:[/bold blue] {escape(message)}")


def format_value(value: Any) -> str:
    """Render a configuration value for display."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
