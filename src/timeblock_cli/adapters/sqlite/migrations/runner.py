"""Forward-only, version-numbered schema migrations.

A migration is a numbered list of SQL statements. Applied versions are
recorded in ``schema_version``. Each migration runs inside its own
transaction, so a failing statement leaves the schema as it was.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, datetime

from timeblock_cli.utils.logger import get_logger

_CREATE_VERSION_TABLE = """
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER PRIMARY KEY,
    description TEXT NOT NULL,
    applied_at DATETIME NOT NULL
)
"""


@dataclass(frozen=True)
class Migration:
    """One schema step.

    Attributes:
        version: Sequential version number, starting at 1
        description: Summary recorded in ``schema_version``
        statements: SQL statements executed in order
    """

    version: int
    description: str
    statements: tuple[str, ...]


class MigrationRunner:
    """Applies migrations to one connection and tracks its schema version."""

    def __init__(self, connection: sqlite3.Connection):
        self.connection = connection
        self.connection.execute(_CREATE_VERSION_TABLE)
        self.connection.commit()

    def get_current_version(self) -> int:
        """Highest applied version, 0 on a fresh database."""
        (version,) = self.connection.execute(
            "SELECT MAX(version) FROM schema_version"
        ).fetchone()
        return version or 0

    def apply(self, migration: Migration) -> None:
        """Apply one migration and record it.

        Raises:
            ValueError: If the migration is not newer than the current version
            RuntimeError: If a statement fails (nothing is applied)
        """
        current = self.get_current_version()
        if migration.version <= current:
            raise ValueError(
                f"Migration version {migration.version} is not greater than "
                f"current version {current}"
            )

        if self.connection.in_transaction:
            self.connection.commit()
        try:
            self.connection.execute("BEGIN")
            for statement in migration.statements:
                self.connection.execute(statement)
            self.connection.execute(
                "INSERT INTO schema_version (version, description, applied_at) "
                "VALUES (?, ?, ?)",
                (migration.version, migration.description, datetime.now(UTC).isoformat()),
            )
            self.connection.commit()
        except sqlite3.Error as e:
            self.connection.rollback()
            raise RuntimeError(f"Migration {migration.version} failed: {e}") from e

        get_logger().info(
            "applied migration %d: %s", migration.version, migration.description
        )

    def apply_pending(self, migrations: Iterable[Migration]) -> int:
        """Apply, in version order, every migration newer than the database.

        Returns:
            Number of migrations applied
        """
        current = self.get_current_version()
        pending = sorted(
            (m for m in migrations if m.version > current), key=lambda m: m.version
        )
        for migration in pending:
            self.apply(migration)
        return len(pending)


def get_current_version(connection: sqlite3.Connection) -> int:
    """Schema version of the database behind ``connection``."""
    return MigrationRunner(connection).get_current_version()


def run_migrations(connection: sqlite3.Connection, migrations: Iterable[Migration]) -> int:
    """Bring the database behind ``connection`` up to date."""
    return MigrationRunner(connection).apply_pending(migrations)
