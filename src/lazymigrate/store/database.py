"""SQLite database connection manager for lazymigrate."""

from __future__ import annotations

import sqlite3
from pathlib import Path
from types import TracebackType
from typing import TYPE_CHECKING

from loguru import logger

from ..core.config import DEFAULT_VERSION_PRAGMA, VERSION_PRAGMAS
from ..core.exceptions import CommitError, DatabaseError, TransactionStartError

if TYPE_CHECKING:
    from ..core.config import MigrationConfig
    from .migrations.context import MigrationContext
    from .schema import Schema


class Transaction:
    """Explicit transaction on a connection.

    Entering runs BEGIN. Leaving rolls back unless commit() succeeded, so
    every exit path releases the transaction exactly once.

    Connections opened with ``autocommit=False`` (Python 3.12+) always have
    a transaction open. For those the guard takes over that transaction and
    ends it with ``commit()``/``rollback()``, so any uncommitted work the
    caller left on the connection is committed or discarded with it.

    Example:
        with Transaction(conn) as tx:
            conn.execute("CREATE TABLE t (x INT)")
            tx.commit()
    """

    def __init__(self, connection: sqlite3.Connection):
        self.conn = connection
        self._closed = False
        # autocommit is LEGACY_TRANSACTION_CONTROL (-1) or missing outside that mode
        self._implicit = getattr(connection, "autocommit", None) is False

    def __enter__(self) -> "Transaction":
        if self._implicit:
            return self
        if self.conn.in_transaction:
            raise TransactionStartError(
                detail="connection already has an open transaction"
            )
        try:
            self.conn.execute("BEGIN")
        except sqlite3.Error as e:
            raise TransactionStartError(e) from e
        return self

    def commit(self) -> None:
        """Commit the transaction.

        Raises:
            CommitError: If the commit fails. The transaction is rolled
                back when the guard exits.
        """
        try:
            if self._implicit:
                self.conn.commit()
            else:
                self.conn.execute("COMMIT")
        except sqlite3.Error as e:
            raise CommitError(e) from e
        self._closed = True

    def rollback(self) -> None:
        """Roll back the transaction. Does nothing once released."""
        if self._closed:
            return
        self._closed = True
        if self._implicit:
            self.conn.rollback()
        # SQLite may already have rolled back, e.g. after an interrupt
        elif self.conn.in_transaction:
            self.conn.execute("ROLLBACK")

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        try:
            self.rollback()
        except sqlite3.Error as e:
            if exc is None:
                raise DatabaseError(f"Failed to roll back transaction: {e}") from e
            # Original failure propagates
            logger.error(f"Rollback after {exc_type.__name__} failed: {e}")


class Database:
    """SQLite database connection manager.

    The connection runs in autocommit mode, so transactions are only
    opened explicitly through Transaction.
    """

    def __init__(self, path: Path | str):
        """Initialize database with path.

        Args:
            path: Path to the SQLite database file.
        """
        self.path = Path(path)
        self._connection: sqlite3.Connection | None = None

    def connect(self) -> None:
        """Open the database connection, creating the file if needed."""
        if self._connection:
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._connection = sqlite3.connect(str(self.path), isolation_level=None)
            self._connection.row_factory = sqlite3.Row
        except (OSError, sqlite3.Error) as e:
            raise DatabaseError(f"Failed to connect to database: {e}") from e

    def close(self) -> None:
        """Close database connection."""
        if self._connection:
            try:
                self._connection.close()
            except sqlite3.Error as e:
                raise DatabaseError(f"Failed to close database: {e}") from e
            finally:
                self._connection = None

    def __enter__(self) -> "Database":
        self.connect()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def connection(self) -> sqlite3.Connection:
        """The open connection.

        Raises:
            DatabaseError: If the database is not connected.
        """
        if not self._connection:
            raise DatabaseError("Database not connected")
        return self._connection

    def execute(self, sql: str, params: tuple = ()) -> sqlite3.Cursor:
        """Execute a SQL query.

        Args:
            sql: SQL statement to execute.
            params: Parameters for the SQL statement.

        Returns:
            A cursor with the query results.

        Raises:
            DatabaseError: If connection is not available or query fails.
        """
        try:
            return self.connection.execute(sql, params)
        except sqlite3.Error as e:
            raise DatabaseError(f"Query execution failed: {e}") from e

    def get_version(self, pragma: str = DEFAULT_VERSION_PRAGMA) -> int:
        """Read an integer header pragma, user_version by default."""
        if pragma not in VERSION_PRAGMAS:
            raise DatabaseError(f"Unsupported version pragma {pragma!r}")
        return self.execute(f"PRAGMA {pragma}").fetchone()[0]

    def migrate(
        self,
        source: Schema | str,
        *,
        context: MigrationContext | None = None,
        config: MigrationConfig | None = None,
    ) -> int:
        """Migrate this database to the latest version of `source`.

        Returns:
            Number of versions applied.
        """
        from .migrations.runner import migrate

        return migrate(self.connection, source, context=context, config=config)
