"""Simple SQLite migrations using a magic comment to delimit schema versions.

Example:
    import sqlite3

    from lazymigrate import DEFAULT_DELIMITER, migrate

    SCHEMA = f'''
    CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT);
    {DEFAULT_DELIMITER}
    ALTER TABLE users ADD COLUMN email TEXT;
    '''

    migrate(sqlite3.connect("app.db"), SCHEMA)

Logging goes through loguru and is disabled by default; call
``logger.enable("lazymigrate")`` to see it.
"""

from loguru import logger

from .core import (
    DEFAULT_CONFIG,
    DEFAULT_DELIMITER,
    CommitError,
    ConfigError,
    CounterReadError,
    CounterWriteError,
    DatabaseError,
    LazyMigrateError,
    MigrationCancelledError,
    MigrationConfig,
    MigrationError,
    TransactionStartError,
    VersionApplyError,
)
from .store import (
    Database,
    MigrationContext,
    MigrationRunner,
    Schema,
    Transaction,
    migrate,
    split_statements,
    versions,
)

logger.disable("lazymigrate")

__version__ = "1.0.0"

__all__ = [
    "DEFAULT_CONFIG",
    "DEFAULT_DELIMITER",
    "MigrationConfig",
    "Schema",
    "versions",
    "split_statements",
    "migrate",
    "MigrationRunner",
    "MigrationContext",
    "Database",
    "Transaction",
    "LazyMigrateError",
    "ConfigError",
    "DatabaseError",
    "MigrationError",
    "TransactionStartError",
    "CounterReadError",
    "VersionApplyError",
    "CounterWriteError",
    "CommitError",
    "MigrationCancelledError",
]
