"""Schema migration runner for lazymigrate.

Uses a SQLite header pragma (user_version by default) for tracking the
number of applied versions. Pending versions are applied in order inside
a single transaction, so a migration either applies completely or not at
all.
"""

from __future__ import annotations

import sqlite3
from contextlib import nullcontext
from typing import ContextManager

from loguru import logger

from ...core.config import DEFAULT_CONFIG, MigrationConfig
from ...core.exceptions import (
    CounterReadError,
    CounterWriteError,
    MigrationCancelledError,
    MigrationError,
    VersionApplyError,
)
from ..database import Transaction
from ..schema import Schema, split_statements
from .context import MigrationContext


class MigrationRunner:
    """Applies the pending versions of a schema to a SQLite database.

    Note that the runner does not set any pragma values except for the
    version pragma. Other pragmas are the caller's business.

    Example:
        runner = MigrationRunner(connection, Schema(SCHEMA_SQL))
        applied = runner.run()
        print(f"Applied {applied} versions, now at {runner.get_version()}")
    """

    def __init__(
        self,
        connection: sqlite3.Connection,
        schema: Schema,
        *,
        config: MigrationConfig | None = None,
        context: MigrationContext | None = None,
    ):
        """Initialize with database connection and schema.

        Args:
            connection: SQLite connection to migrate. It must not have an
                open transaction, unless it was opened with autocommit=False.
            schema: Schema whose versions are applied.
            config: Migration settings, defaults to DEFAULT_CONFIG.
            context: Optional cancellation context for the run.
        """
        self.conn = connection
        self.schema = schema
        self.config = config or DEFAULT_CONFIG
        self.context = context

    def get_version(self) -> int:
        """Get the number of applied versions from the version pragma."""
        cursor = self.conn.execute(f"PRAGMA {self.config.version_pragma}")
        return cursor.fetchone()[0]

    def set_version(self, version: int) -> None:
        """Set the applied-version counter.

        Args:
            version: New counter value.
        """
        # PRAGMA doesn't support parameters; int() keeps the formatting safe
        self.conn.execute(f"PRAGMA {self.config.version_pragma} = {int(version)}")

    def get_versions(self) -> list[str]:
        return self.schema.versions()

    def get_latest_version(self) -> int:
        """Get the counter value of a fully migrated database."""
        return len(self.get_versions())

    def get_pending_versions(self) -> list[tuple[int, str]]:
        """Get versions that haven't been applied yet.

        Returns:
            (index, body) pairs at or above the current counter.
        """
        current = self.get_version()
        return [
            (index, body)
            for index, body in enumerate(self.get_versions())
            if index >= current
        ]

    def is_up_to_date(self) -> bool:
        """Check if database is at the latest version.

        A counter beyond the number of versions also counts as up to date.
        """
        return self.get_version() >= self.get_latest_version()

    def run(self) -> int:
        """Apply all pending versions in a single transaction.

        On success the counter equals the number of versions. On failure
        the transaction is rolled back, leaving schema and counter as they
        were, and the error is raised.

        Returns:
            Number of versions applied.

        Raises:
            TransactionStartError: If the transaction cannot begin.
            CounterReadError: If the counter cannot be read or is negative.
            VersionApplyError: If a version fails; later versions are skipped.
            MigrationCancelledError: If the context is cancelled or expires.
            CounterWriteError: If the new counter cannot be written.
            CommitError: If the transaction cannot commit.
        """
        versions = self.get_versions()
        pragma = self.config.version_pragma

        try:
            with Transaction(self.conn) as tx:
                with self._attach_context():
                    current = self._read_version()

                    if current >= len(versions):
                        logger.debug(
                            f"Database at version {current}, no migrations to apply"
                        )
                        return 0

                    for index in range(current, len(versions)):
                        self._apply(index, versions[index])

                    try:
                        self.set_version(len(versions))
                    except sqlite3.Error as e:
                        raise CounterWriteError(pragma, e) from e

                tx.commit()
        except MigrationError as e:
            logger.error(f"Migration failed at stage {e.stage}: {e}")
            raise

        applied = len(versions) - current
        logger.info(
            f"Applied {applied} migration(s), "
            f"database now at version {len(versions)}"
        )
        return applied

    def _read_version(self) -> int:
        """Read the counter at the start of a run.

        Raises:
            MigrationCancelledError: If the context is already done.
            CounterReadError: If the read fails or the counter is negative.
        """
        pragma = self.config.version_pragma
        if self.context is not None:
            self.context.check(None)

        try:
            current = self.get_version()
        except sqlite3.Error as e:
            if self.context is not None and self.context.done:
                raise MigrationCancelledError(None, e) from e
            raise CounterReadError(pragma, e) from e

        # The header field is a signed 32-bit integer
        if current < 0:
            raise CounterReadError(pragma, detail=f"negative value {current}")
        return current

    def _apply(self, index: int, body: str) -> None:
        """Execute every statement of one version."""
        if self.context is not None:
            self.context.check(index)

        statements = split_statements(body)
        logger.info(f"Applying migration {index} ({len(statements)} statements)")
        for statement in statements:
            try:
                self.conn.execute(statement)
            except sqlite3.Error as e:
                if self.context is not None and self.context.done:
                    raise MigrationCancelledError(index, e) from e
                raise VersionApplyError(index, e) from e
        logger.debug(f"Migration {index} applied successfully")

    def _attach_context(self) -> ContextManager[None]:
        if self.context is None:
            return nullcontext()
        return self.context.attached(self.conn, self.config.progress_interval)


def migrate(
    connection: sqlite3.Connection,
    source: Schema | str,
    *,
    context: MigrationContext | None = None,
    config: MigrationConfig | None = None,
) -> int:
    """Migrate the database to the latest version of a schema.

    Convenience function around Schema and MigrationRunner. A raw string
    is split using the configured delimiter.

    Args:
        connection: SQLite connection to migrate.
        source: Schema, or a raw schema string.
        context: Optional cancellation context.
        config: Migration settings, defaults to DEFAULT_CONFIG.

    Returns:
        Number of versions applied.
    """
    config = config or DEFAULT_CONFIG
    if isinstance(source, str):
        source = Schema(source, config.delimiter)
    return MigrationRunner(connection, source, config=config, context=context).run()
