"""Execution context for a migration call.

A context lets the caller cancel a running migration from another thread
or give it a deadline. While a migration runs, the context is attached to
the connection as a SQLite progress handler, so a long statement is
interrupted as soon as the context is done.

Example:
    context = MigrationContext.with_timeout(30.0)
    migrate(connection, SCHEMA_SQL, context=context)
"""

from __future__ import annotations

import sqlite3
import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator

from ...core.exceptions import MigrationCancelledError


@dataclass
class MigrationContext:
    """Cancellation signal and optional deadline for a migration.

    Attributes:
        deadline: Absolute time.monotonic() value after which the
            migration is abandoned, or None for no deadline.
    """

    deadline: float | None = None
    _cancel_event: threading.Event = field(
        default_factory=threading.Event, init=False, repr=False
    )

    @classmethod
    def with_timeout(cls, seconds: float) -> "MigrationContext":
        """Create a context whose deadline is `seconds` from now."""
        return cls(deadline=time.monotonic() + seconds)

    def cancel(self) -> None:
        """Signal cancellation. Safe to call from any thread."""
        self._cancel_event.set()

    @property
    def cancelled(self) -> bool:
        return self._cancel_event.is_set()

    @property
    def expired(self) -> bool:
        return self.deadline is not None and time.monotonic() >= self.deadline

    @property
    def done(self) -> bool:
        return self.cancelled or self.expired

    def check(self, index: int | None) -> None:
        """Raise if the migration should stop before running version `index`.

        `index` is None before the first version is known.

        Raises:
            MigrationCancelledError: If cancelled or past the deadline.
        """
        if self.done:
            raise MigrationCancelledError(index)

    @contextmanager
    def attached(
        self, connection: sqlite3.Connection, interval: int
    ) -> Iterator[None]:
        """Interrupt statements on `connection` once this context is done.

        Args:
            connection: Connection running the migration.
            interval: SQLite VM instructions between checks.
        """
        connection.set_progress_handler(lambda: int(self.done), interval)
        try:
            yield
        finally:
            connection.set_progress_handler(None, interval)
