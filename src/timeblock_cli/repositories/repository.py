"""Storage port for the scheduling engine.

TaskService only talks to storage through :class:`TaskRepository`; the
SQLite adapter in ``timeblock_cli.adapters.sqlite`` is the one shipped
implementation. Adapters report every backend failure as ``StorageError``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager

from timeblock_cli.models import Task, TaskCreate, TaskUpdate


class TaskRepository(ABC):
    """Persistence contract for tasks.

    Writes outside :meth:`transaction` are durable as soon as they return.
    None of these methods enforce the no-overlap rule; that is the
    service's job.
    """

    @abstractmethod
    async def list_all(self) -> list[Task]:
        """Every stored task, ordered by start time (ties by ID)."""

    @abstractmethod
    async def get(self, task_id: int) -> Task:
        """Look up one task.

        Raises:
            TaskNotFoundError: If no task has this ID
        """

    @abstractmethod
    async def add(self, task_data: TaskCreate) -> Task:
        """Store a new task and return it with its assigned ID.

        IDs are never reused, even after the task is deleted.
        """

    @abstractmethod
    async def update(self, task_id: int, updates: TaskCreate | TaskUpdate) -> bool:
        """Overwrite the non-None fields of a task.

        Returns:
            False if no task has this ID
        """

    @abstractmethod
    async def delete(self, task_id: int) -> bool:
        """Remove a task; False if it did not exist."""

    @abstractmethod
    async def delete_all(self) -> int:
        """Remove every task and return how many there were."""

    @abstractmethod
    def transaction(self) -> AbstractAsyncContextManager[None]:
        """Group writes into one all-or-nothing unit.

        ::

            async with repository.transaction():
                await repository.update(...)
                await repository.update(...)

        The block commits when it exits normally and discards every write
        when it raises. A nested block joins the outermost one.
        """
