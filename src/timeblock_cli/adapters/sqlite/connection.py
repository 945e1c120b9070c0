"""Opening and sharing the SQLite task database.

A process keeps at most one task database open. Connections run in WAL mode
with a busy timeout, and pending schema migrations are applied as soon as a
database is opened.
"""

from __future__ import annotations

import atexit
import sqlite3
from pathlib import Path

from platformdirs import user_data_dir

from timeblock_cli.adapters.sqlite.migrations import ALL_MIGRATIONS, run_migrations
from timeblock_cli.utils.logger import get_logger

DEFAULT_DB_NAME = "tasks.db"

# Seconds to wait on a locked database before failing
BUSY_TIMEOUT = 30.0


def default_db_path() -> Path:
    """Default database location inside the user data directory."""
    return Path(user_data_dir("timeblock-cli")) / DEFAULT_DB_NAME


def configure_connection(connection: sqlite3.Connection) -> sqlite3.Connection:
    """Apply row factory, pragmas and pending migrations to a connection."""
    connection.row_factory = sqlite3.Row
    connection.execute("PRAGMA journal_mode = WAL")
    run_migrations(connection, ALL_MIGRATIONS)
    return connection


def open_database(db_path: Path) -> sqlite3.Connection:
    """Open the database at ``db_path``, creating file and schema if needed.

    New files are made readable by their owner only.
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    created = not db_path.exists()

    connection = sqlite3.connect(db_path, check_same_thread=False, timeout=BUSY_TIMEOUT)
    try:
        configure_connection(connection)
    except (sqlite3.Error, RuntimeError):
        connection.close()
        raise

    if created:
        db_path.chmod(0o600)
        get_logger().info("created task database at %s", db_path)
    return connection


class DatabaseConnection:
    """Process-wide holder of the open task database.

    Asking for a different path closes the current connection first. The
    open connection is committed and closed at interpreter exit.
    """

    _connection: sqlite3.Connection | None = None
    _db_path: Path | None = None
    _close_at_exit = False

    @classmethod
    def get_connection(cls, db_path: str | Path | None = None) -> sqlite3.Connection:
        """Return the shared connection for ``db_path`` (default location if None)."""
        path = default_db_path() if db_path is None else Path(db_path)
        if cls._connection is not None:
            if cls._db_path == path:
                return cls._connection
            cls.close_connection()

        cls._connection = open_database(path)
        cls._db_path = path
        if not cls._close_at_exit:
            atexit.register(cls.close_connection)
            cls._close_at_exit = True
        return cls._connection

    @classmethod
    def close_connection(cls) -> None:
        """Commit pending work and close the connection, if one is open."""
        connection = cls._connection
        if connection is None:
            return
        cls._connection = None
        cls._db_path = None
        try:
            connection.commit()
            connection.close()
        except sqlite3.Error as e:
            get_logger().warning("error closing task database: %s", e)


def get_connection(db_path: str | Path | None = None) -> sqlite3.Connection:
    """Shortcut for :meth:`DatabaseConnection.get_connection`."""
    return DatabaseConnection.get_connection(db_path)
