"""Configuration and error types for lazymigrate."""

from .config import (
    DEFAULT_CONFIG,
    DEFAULT_DELIMITER,
    DEFAULT_VERSION_PRAGMA,
    VERSION_PRAGMAS,
    MigrationConfig,
    validate_delimiter,
)
from .exceptions import (
    CommitError,
    ConfigError,
    CounterReadError,
    CounterWriteError,
    DatabaseError,
    LazyMigrateError,
    MigrationCancelledError,
    MigrationError,
    TransactionStartError,
    VersionApplyError,
)

__all__ = [
    "DEFAULT_CONFIG",
    "DEFAULT_DELIMITER",
    "DEFAULT_VERSION_PRAGMA",
    "VERSION_PRAGMAS",
    "MigrationConfig",
    "validate_delimiter",
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
