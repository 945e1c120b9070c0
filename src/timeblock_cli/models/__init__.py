"""timeblock-cli domain models.

Pydantic models for tasks and configuration, plus the error types the
scheduling engine raises.
"""

from .core import Task, TaskCreate, TaskUpdate
from .exceptions import (
    OverlapConflictError,
    StorageError,
    TaskNotFoundError,
    TimeblockError,
)

__all__ = [
    # Task models
    "Task",
    "TaskCreate",
    "TaskUpdate",
    # Errors
    "TimeblockError",
    "OverlapConflictError",
    "TaskNotFoundError",
    "StorageError",
]
