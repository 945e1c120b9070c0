"""Task service - the interval-scheduling engine.

This service sits between commands and the task repository. It enforces
the no-overlap rule on create and update, and moves every later task when
an edit changes a task's end time (the cascading shift).

All operations are serialized behind a single lock; every overlap scan and
the write that depends on it run in one storage transaction.
"""

from __future__ import annotations

import asyncio

from timeblock_cli.models import (
    OverlapConflictError,
    Task,
    TaskCreate,
    TaskNotFoundError,
    TaskUpdate,
)
from timeblock_cli.repositories import TaskRepository
from timeblock_cli.utils.clock import (
    DAY_START_CUTOFF,
    shift_delta,
    shift_time,
    tasks_after,
    to_minutes,
)
from timeblock_cli.utils.logger import get_logger
from timeblock_cli.utils.overlap import find_conflicts


class TaskService:
    """Service for task scheduling rules.

    Intervals are half-open ``[start, end)`` and must not cross midnight
    for the overlap rule to hold; the service itself does not reject such
    input.
    """

    def __init__(
        self,
        task_repository: TaskRepository,
        day_start: int = DAY_START_CUTOFF,
    ):
        """Initialize the task service.

        Args:
            task_repository: TaskRepository implementation for data access
            day_start: Minute of the day at which the logical day begins
        """
        self.repository = task_repository
        self.day_start = day_start
        self._lock = asyncio.Lock()

    async def list_tasks(self) -> list[Task]:
        """List every task, ordered by start time."""
        async with self._lock:
            return await self.repository.list_all()

    async def get_task(self, task_id: int) -> Task:
        """Get a specific task by ID.

        Raises:
            TaskNotFoundError: If the task does not exist
        """
        async with self._lock:
            return await self.repository.get(task_id)

    async def create_task(self, name: str, start: str, end: str, color: str) -> Task:
        """Create a task if its interval is free.

        Args:
            name: Display label
            start: Start time (``HH:MM``)
            end: End time (``HH:MM``)
            color: 7-character color code

        Returns:
            The stored task, with its generated ID

        Raises:
            OverlapConflictError: If any existing task overlaps ``[start, end)``
        """
        task_data = TaskCreate(name=name, start=start, end=end, color=color)
        async with self._lock, self.repository.transaction():
            existing = await self.repository.list_all()
            conflicts = find_conflicts(start, end, existing)
            if conflicts:
                get_logger().info("rejected task %s-%s: overlap", start, end)
                raise OverlapConflictError(start, end, conflicts)

            task = await self.repository.add(task_data)

        get_logger().info("created task %d (%s %s-%s)", task.id, name, start, end)
        return task

    async def update_task(
        self, task_id: int, name: str, start: str, end: str, color: str
    ) -> Task:
        """Overwrite every field of a task if its new interval is free.

        The returned task is built from the arguments, not re-read from
        storage.

        Raises:
            TaskNotFoundError: If the task does not exist
            OverlapConflictError: If another task overlaps ``[start, end)``
        """
        task_data = TaskCreate(name=name, start=start, end=end, color=color)
        async with self._lock, self.repository.transaction():
            existing = await self.repository.list_all()
            if not any(task.id == task_id for task in existing):
                raise TaskNotFoundError(task_id)

            conflicts = find_conflicts(start, end, existing, exclude_id=task_id)
            if conflicts:
                get_logger().info("rejected update of task %d: overlap", task_id)
                raise OverlapConflictError(start, end, conflicts)

            await self.repository.update(task_id, task_data)

        get_logger().info("updated task %d (%s %s-%s)", task_id, name, start, end)
        return Task(id=task_id, **task_data.model_dump())

    async def update_task_with_shift(
        self,
        task_id: int,
        name: str,
        start: str,
        end: str,
        color: str,
        original_end: str,
    ) -> Task:
        """Update a task and move every later task by the change in its end.

        Tasks whose logical start is at or after ``original_end`` shift by the
        same signed number of minutes, keeping their gaps. The edited task is
        then written without an overlap check. Everything happens in one
        transaction. When the end did not move this is a plain
        :meth:`update_task`.

        Args:
            task_id: Task being edited
            name: New display label
            start: New start time
            end: New end time
            color: New color code
            original_end: The task's end time before the edit

        Returns:
            The edited task, built from the arguments

        Raises:
            TaskNotFoundError: If the task does not exist
            StorageError: If any write fails (nothing is applied)
        """
        delta = shift_delta(original_end, end)
        if delta == 0:
            return await self.update_task(task_id, name, start, end, color)

        task_data = TaskCreate(name=name, start=start, end=end, color=color)
        async with self._lock, self.repository.transaction():
            existing = await self.repository.list_all()
            if not any(task.id == task_id for task in existing):
                raise TaskNotFoundError(task_id)

            others = [task for task in existing if task.id != task_id]
            to_shift = tasks_after(others, original_end, self.day_start)
            for task in to_shift:
                await self.repository.update(
                    task.id,
                    TaskUpdate(
                        start=shift_time(task.start, delta),
                        end=shift_time(task.end, delta),
                    ),
                )

            await self.repository.update(task_id, task_data)

        get_logger().info(
            "updated task %d with shift %+d min; moved %d task(s)",
            task_id,
            delta,
            len(to_shift),
        )
        return Task(id=task_id, **task_data.model_dump())

    async def delete_task(self, task_id: int) -> bool:
        """Delete a task. Missing tasks are ignored.

        Returns:
            True if a task was removed
        """
        async with self._lock:
            deleted = await self.repository.delete(task_id)
        if deleted:
            get_logger().info("deleted task %d", task_id)
        return deleted

    async def delete_all_tasks(self) -> int:
        """Delete every task.

        Returns:
            Number of tasks removed
        """
        async with self._lock:
            count = await self.repository.delete_all()
        get_logger().info("deleted all tasks (%d)", count)
        return count

    async def find_conflicts(
        self, start: str, end: str, exclude_id: int | None = None
    ) -> list[Task]:
        """Tasks (other than ``exclude_id``) that overlap ``[start, end)``."""
        async with self._lock:
            existing = await self.repository.list_all()
        return find_conflicts(start, end, existing, exclude_id=exclude_id)

    async def check_overlap(
        self, start: str, end: str, exclude_id: int | None = None
    ) -> bool:
        """Whether ``[start, end)`` overlaps any task other than ``exclude_id``."""
        conflicts = await self.find_conflicts(start, end, exclude_id)
        get_logger().debug(
            "overlap check %s-%s: %d conflict(s)", start, end, len(conflicts)
        )
        return bool(conflicts)


def get_task_service() -> TaskService:
    """Build a TaskService over the configured SQLite database."""
    from timeblock_cli.adapters.sqlite import SqliteTaskRepository
    from timeblock_cli.services.config_service import get_config_service

    config = get_config_service().config
    repository = SqliteTaskRepository(db_path=config.storage.db_path)
    return TaskService(repository, day_start=to_minutes(config.schedule.day_start))
