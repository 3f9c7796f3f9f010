"""Database migrations for lazymigrate.

This module applies the versions of a schema string using SQLite's
PRAGMA user_version for tracking.

Example:
    from lazymigrate.store.migrations import MigrationRunner

    runner = MigrationRunner(connection, Schema(SCHEMA_SQL))
    applied = runner.run()
"""

from .context import MigrationContext
from .runner import MigrationRunner, migrate

__all__ = [
    "MigrationContext",
    "MigrationRunner",
    "migrate",
]
