"""SQLite implementation of TaskRepository."""

from __future__ import annotations

import sqlite3
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from timeblock_cli.adapters.sqlite.connection import get_connection
from timeblock_cli.adapters.sqlite.utils import row_to_task, set_clause
from timeblock_cli.models import (
    StorageError,
    Task,
    TaskCreate,
    TaskNotFoundError,
    TaskUpdate,
)
from timeblock_cli.repositories import TaskRepository
from timeblock_cli.utils.logger import get_logger

_SELECT_TASKS = """
    SELECT task_id, task_name, task_time_start, task_time_end, task_color
    FROM tasks
"""


class SqliteTaskRepository(TaskRepository):
    """SQLite implementation of task repository.

    Writes commit immediately unless they run inside ``transaction()``.
    """

    def __init__(
        self,
        db_path: str | Path | None = None,
        connection: sqlite3.Connection | None = None,
    ):
        """Initialize SQLite task repository.

        Args:
            db_path: Optional database file path. If None, uses default location.
            connection: Optional already-configured connection (takes precedence
                over ``db_path``).
        """
        self.db_path = db_path
        self._connection = connection
        self._transaction_depth = 0

    @property
    def connection(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._connection is None:
            try:
                self._connection = get_connection(self.db_path)
            except (sqlite3.Error, RuntimeError) as e:
                raise StorageError(f"Cannot open task database: {e}") from e
        return self._connection

    def _query(self, sql: str, params: tuple[Any, ...] = ()) -> list[sqlite3.Row]:
        try:
            return self.connection.execute(sql, params).fetchall()
        except sqlite3.Error as e:
            raise StorageError(str(e)) from e

    def _write(
        self, sql: str, params: tuple[Any, ...] | list[Any] = ()
    ) -> sqlite3.Cursor:
        try:
            cursor = self.connection.execute(sql, params)
            if not self._transaction_depth:
                self.connection.commit()
        except sqlite3.Error as e:
            if not self._transaction_depth:
                self.connection.rollback()
            raise StorageError(str(e)) from e
        return cursor

    async def list_all(self) -> list[Task]:
        """List all tasks ordered by start time."""
        rows = self._query(_SELECT_TASKS + " ORDER BY task_time_start, task_id")
        return [row_to_task(row) for row in rows]

    async def get(self, task_id: int) -> Task:
        """Get a specific task by ID."""
        rows = self._query(_SELECT_TASKS + " WHERE task_id = ?", (task_id,))
        if not rows:
            raise TaskNotFoundError(task_id)
        return row_to_task(rows[0])

    async def add(self, task_data: TaskCreate) -> Task:
        """Insert a task and read it back with its generated ID."""
        cursor = self._write(
            """INSERT INTO tasks (task_name, task_time_start, task_time_end, task_color)
               VALUES (?, ?, ?, ?)""",
            (task_data.name, task_data.start, task_data.end, task_data.color),
        )
        task_id = cursor.lastrowid
        get_logger().debug("inserted task %s", task_id)
        return await self.get(task_id)

    async def update(self, task_id: int, updates: TaskCreate | TaskUpdate) -> bool:
        """Overwrite the non-None fields of a task."""
        clause, params = set_clause(updates.model_dump())
        if not clause:
            rows = self._query("SELECT 1 FROM tasks WHERE task_id = ?", (task_id,))
            return bool(rows)

        params.append(task_id)
        cursor = self._write(
            f"UPDATE tasks SET {clause} WHERE task_id = ?",
            params,
        )
        return cursor.rowcount > 0

    async def delete(self, task_id: int) -> bool:
        """Delete a task (hard delete, no-op when missing)."""
        cursor = self._write("DELETE FROM tasks WHERE task_id = ?", (task_id,))
        return cursor.rowcount > 0

    async def delete_all(self) -> int:
        """Delete every task."""
        return self._write("DELETE FROM tasks").rowcount

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        """Run the enclosed writes in one ``BEGIN IMMEDIATE`` transaction."""
        if self._transaction_depth:
            # Nested block joins the outer transaction
            self._transaction_depth += 1
            try:
                yield
            finally:
                self._transaction_depth -= 1
            return

        try:
            self.connection.execute("BEGIN IMMEDIATE")
        except sqlite3.Error as e:
            raise StorageError(str(e)) from e

        self._transaction_depth = 1
        try:
            yield
        except BaseException:
            self.connection.rollback()
            get_logger().warning("task transaction rolled back")
            raise
        finally:
            self._transaction_depth = 0

        try:
            self.connection.commit()
        except sqlite3.Error as e:
            self.connection.rollback()
            raise StorageError(str(e)) from e
