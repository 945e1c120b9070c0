"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real filesystem state: logs
and config land in ``tmp_path`` and every repository runs on an in-memory
SQLite database with the real migrations applied.
"""

from __future__ import annotations

import logging
import sqlite3
from unittest.mock import patch

import pytest

from timeblock_cli.adapters.sqlite.connection import configure_connection
from timeblock_cli.adapters.sqlite.task_repository import SqliteTaskRepository
from timeblock_cli.services.task_service import TaskService


# ---------------------------------------------------------------------------
# Filesystem isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolate_logs(tmp_path):
    """Send the application log to a temporary directory."""
    import timeblock_cli.utils.logger as logger_mod

    logger_mod._logger = None
    with patch(
        "timeblock_cli.utils.logger.user_log_dir", return_value=str(tmp_path / "logs")
    ):
        yield
    app_logger = logging.getLogger("timeblock_cli")
    for handler in app_logger.handlers:
        handler.close()
    app_logger.handlers.clear()
    logger_mod._logger = None


@pytest.fixture(autouse=True)
def isolate_config(tmp_path):
    """Point ConfigService at a temporary config directory."""
    from timeblock_cli.services.config_service import get_config_service

    get_config_service.cache_clear()
    with patch(
        "timeblock_cli.services.config_service.user_config_dir",
        return_value=str(tmp_path / "config"),
    ):
        yield
    get_config_service.cache_clear()


# ---------------------------------------------------------------------------
# Storage
# ---------------------------------------------------------------------------


@pytest.fixture
def db_connection():
    """Fresh in-memory database with the full schema applied."""
    conn = sqlite3.connect(":memory:", check_same_thread=False)
    configure_connection(conn)
    yield conn
    conn.close()


@pytest.fixture
def repo(db_connection):
    """SqliteTaskRepository backed by the in-memory database."""
    return SqliteTaskRepository(connection=db_connection)


@pytest.fixture
def service(repo):
    """TaskService with the default 06:00 day start."""
    return TaskService(repo)


@pytest.fixture
def seed(db_connection):
    """Insert rows directly, bypassing the overlap rules. Returns the new ID."""

    def _seed(name: str, start: str, end: str, color: str = "#ffffff") -> int:
        cursor = db_connection.execute(
            "INSERT INTO tasks (task_name, task_time_start, task_time_end, task_color) "
            "VALUES (?, ?, ?, ?)",
            (name, start, end, color),
        )
        db_connection.commit()
        return cursor.lastrowid

    return _seed
