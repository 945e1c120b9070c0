"""Errors raised by the scheduling engine and its storage."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .core import Task


class TimeblockError(Exception):
    """Base exception for all timeblock errors."""


class OverlapConflictError(TimeblockError):
    """Raised when a proposed interval intersects an existing task."""

    def __init__(self, start: str, end: str, conflicts: list[Task] | None = None):
        self.start = start
        self.end = end
        self.conflicts = conflicts or []
        message = f"Task {start}-{end} overlaps with an existing task"
        if self.conflicts:
            names = ", ".join(
                f"'{t.name}' ({t.start}-{t.end})" for t in self.conflicts
            )
            message += f": {names}"
        super().__init__(message)


class TaskNotFoundError(TimeblockError):
    """Raised when a referenced task does not exist."""

    def __init__(self, task_id: int):
        self.task_id = task_id
        super().__init__(f"Task not found: {task_id}")


class StorageError(TimeblockError):
    """Raised when the storage backend fails (I/O, locking, aborted transaction)."""
