"""Task management commands."""

import typer

from timeblock_cli.services.config_service import get_config_service
from timeblock_cli.services.task_service import get_task_service
from timeblock_cli.utils import exit_codes
from timeblock_cli.utils.clock import is_valid_time, shift_delta
from timeblock_cli.utils.typer_helpers import SuggestingGroup
from timeblock_cli.utils.ui.formatters import (
    format_duration,
    format_info,
    format_output,
    format_success,
    format_task,
    format_warning,
)

from .decorators import AppError, command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Task management commands")

DEFAULT_COLOR = "#4A90D9"


def _validate_interval(start: str, end: str) -> None:
    """Reject malformed times and intervals that do not end after they start."""
    for label, value in (("start", start), ("end", end)):
        if not is_valid_time(value):
            raise AppError(
                f"Invalid {label} time '{value}' (expected HH:MM)",
                exit_codes.ERROR_INVALID_ARGS,
            )
    if start >= end:
        raise AppError(
            f"End time {end} must be after start time {start} "
            "(tasks cannot cross midnight)",
            exit_codes.ERROR_INVALID_ARGS,
        )


@app.command("list")
@command_wrapper
async def list_tasks(
    output: str | None = typer.Option(
        None, "--output", "-o", help="Output format: pretty, table, json, yaml"
    ),
) -> None:
    """List the day's tasks in start-time order."""
    if output is None:
        output = get_config_service().config.output.format

    tasks = await get_task_service().list_tasks()
    format_output(tasks, output)


@app.command("add")
@command_wrapper
async def add_task(
    name: str = typer.Argument(..., help="Task name"),
    start: str = typer.Argument(..., help="Start time (HH:MM)"),
    end: str = typer.Argument(..., help="End time (HH:MM)"),
    color: str = typer.Option(DEFAULT_COLOR, "--color", "-c", help="Color (#RRGGBB)"),
) -> None:
    """Add a task. Fails if it overlaps an existing task."""
    _validate_interval(start, end)

    task = await get_task_service().create_task(name, start, end, color)
    format_success(f"Task #{task.id} created")
    format_task(task)


@app.command("edit")
@command_wrapper
async def edit_task(
    task_id: int = typer.Argument(..., help="Task ID"),
    name: str | None = typer.Option(None, "--name", "-n", help="New name"),
    start: str | None = typer.Option(None, "--start", "-s", help="New start (HH:MM)"),
    end: str | None = typer.Option(None, "--end", "-e", help="New end (HH:MM)"),
    color: str | None = typer.Option(None, "--color", "-c", help="New color"),
    shift: bool = typer.Option(
        False,
        "--shift",
        help="Move every later task by the change in this task's end time",
    ),
) -> None:
    """Edit a task, optionally shifting the rest of the day with it."""
    task_service = get_task_service()
    current = await task_service.get_task(task_id)

    new_name = name if name is not None else current.name
    new_start = start if start is not None else current.start
    new_end = end if end is not None else current.end
    new_color = color if color is not None else current.color
    _validate_interval(new_start, new_end)

    if shift:
        task = await task_service.update_task_with_shift(
            task_id,
            new_name,
            new_start,
            new_end,
            new_color,
            original_end=current.end,
        )
        delta = shift_delta(current.end, new_end)
        if delta:
            sign = "+" if delta > 0 else "-"
            format_info(f"Later tasks moved by {sign}{format_duration(abs(delta))}")
    else:
        task = await task_service.update_task(
            task_id, new_name, new_start, new_end, new_color
        )

    format_success(f"Task #{task.id} updated")
    format_task(task)


@app.command("delete")
@command_wrapper
async def delete_task(
    task_id: int = typer.Argument(..., help="Task ID"),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation"),
) -> None:
    """Delete a task. Deleting a missing task is not an error."""
    if not force:
        confirm = typer.confirm(f"Delete task #{task_id}?")
        if not confirm:
            format_info("Cancelled")
            raise typer.Exit(0)

    deleted = await get_task_service().delete_task(task_id)
    if deleted:
        format_success(f"Task #{task_id} deleted")
    else:
        format_warning(f"Task #{task_id} does not exist; nothing deleted")


@app.command("clear")
@command_wrapper
async def clear_tasks(
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation"),
) -> None:
    """Delete every task."""
    if not force:
        confirm = typer.confirm("Delete ALL tasks?")
        if not confirm:
            format_info("Cancelled")
            raise typer.Exit(0)

    count = await get_task_service().delete_all_tasks()
    format_success(f"Deleted {count} task(s)")


@app.command("check")
@command_wrapper
async def check_overlap(
    start: str = typer.Argument(..., help="Start time (HH:MM)"),
    end: str = typer.Argument(..., help="End time (HH:MM)"),
    exclude: int | None = typer.Option(
        None, "--exclude", "-x", help="Task ID to ignore (the task being edited)"
    ),
) -> None:
    """Check whether an interval is free. Exits non-zero on overlap."""
    _validate_interval(start, end)

    conflicts = await get_task_service().find_conflicts(start, end, exclude_id=exclude)
    if not conflicts:
        format_success(f"{start}-{end} is free")
        return

    format_warning(f"{start}-{end} overlaps {len(conflicts)} task(s):")
    for task in conflicts:
        format_task(task)
    format_info(exit_codes.get_exit_code_description(exit_codes.ERROR_OVERLAP))
    raise typer.Exit(exit_codes.ERROR_OVERLAP)
