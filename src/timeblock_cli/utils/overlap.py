"""Overlap detection for same-day time intervals."""

from __future__ import annotations

from collections.abc import Iterable

from timeblock_cli.models import Task


def overlaps(start1: str, end1: str, start2: str, end2: str) -> bool:
    """Return True if ``[start1, end1)`` and ``[start2, end2)`` intersect.

    Zero-padded ``HH:MM`` strings compare lexically in time order, so no
    parsing is needed. Touching intervals (``end1 == start2``) do not
    overlap. Both intervals are assumed not to cross midnight.
    """
    return start1 < end2 and start2 < end1


def find_conflicts(
    start: str,
    end: str,
    tasks: Iterable[Task],
    exclude_id: int | None = None,
) -> list[Task]:
    """Return the tasks that overlap ``[start, end)``.

    Args:
        start: Proposed start time
        end: Proposed end time
        tasks: Tasks to check against
        exclude_id: Task ID to skip (the task being edited)

    Returns:
        Overlapping tasks, in input order
    """
    return [
        task
        for task in tasks
        if task.id != exclude_id and overlaps(start, end, task.start, task.end)
    ]
