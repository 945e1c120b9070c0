"""Schema migrations for the SQLite task store."""

from .m001_initial_schema import initial_migration
from .runner import (
    Migration,
    MigrationRunner,
    get_current_version,
    run_migrations,
)

# Every migration, oldest first
ALL_MIGRATIONS: list[Migration] = [
    initial_migration,
]

__all__ = [
    "ALL_MIGRATIONS",
    "Migration",
    "MigrationRunner",
    "get_current_version",
    "run_migrations",
]
