"""Database migration system for the SQLite task store."""

from .m001_initial_schema import initial_migration
from .m002_cycle_log import cycle_log_migration
from .runner import Migration, MigrationRunner

# All migrations in version order
ALL_MIGRATIONS: list[Migration] = [
    initial_migration,
    cycle_log_migration,
]

__all__ = [
    "ALL_MIGRATIONS",
    "Migration",
    "MigrationRunner",
]
