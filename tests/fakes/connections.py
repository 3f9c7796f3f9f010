"""Connection fakes that inject database failures."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass, field
from typing import Any


@dataclass
class FailingConnection:
    """Wraps a real connection and fails one kind of statement.

    A statement fails when it equals `fail_on` after stripping, or starts
    with it when `prefix` is set. Everything else reaches the real
    connection, and every statement is recorded in `executed`.
    """

    conn: sqlite3.Connection
    fail_on: str
    prefix: bool = False
    error: str = "disk I/O error"
    executed: list[str] = field(default_factory=list)

    def _fails(self, sql: str) -> bool:
        sql = sql.strip()
        if self.prefix:
            return sql.startswith(self.fail_on)
        return sql == self.fail_on

    def execute(self, sql: str, params: Any = ()) -> sqlite3.Cursor:
        self.executed.append(sql)
        if self._fails(sql):
            raise sqlite3.OperationalError(self.error)
        return self.conn.execute(sql, params)

    @property
    def in_transaction(self) -> bool:
        return self.conn.in_transaction

    def set_progress_handler(self, handler: Any, n: int) -> None:
        self.conn.set_progress_handler(handler, n)
