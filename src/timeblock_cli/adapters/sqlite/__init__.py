"""SQLite adapter module - Local database storage implementation."""

from timeblock_cli.adapters.sqlite.connection import DatabaseConnection, get_connection
from timeblock_cli.adapters.sqlite.task_repository import SqliteTaskRepository

__all__ = [
    "SqliteTaskRepository",
    "DatabaseConnection",
    "get_connection",
]
