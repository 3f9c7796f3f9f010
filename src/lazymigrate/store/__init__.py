"""Data access layer for lazymigrate.

This package provides:
- Schema: Schema strings split into ordered versions
- Database: SQLite connection management and explicit transactions
- migrations: The runner applying pending versions
"""

from .database import Database, Transaction
from .migrations import MigrationContext, MigrationRunner, migrate
from .schema import Schema, split_statements, versions

__all__ = [
    "Database",
    "Transaction",
    "Schema",
    "versions",
    "split_statements",
    "MigrationContext",
    "MigrationRunner",
    "migrate",
]
