"""Schema inspection helpers shared by tests."""

import sqlite3

from lazymigrate import DEFAULT_DELIMITER

SEPARATOR = "\n" + DEFAULT_DELIMITER + "\n"


def columns(conn: sqlite3.Connection, table: str) -> list[str]:
    """Column names of a table, in declaration order."""
    return [row[1] for row in conn.execute(f"PRAGMA table_info({table})")]


def tables(conn: sqlite3.Connection) -> set[str]:
    """Names of all tables in the main schema."""
    cursor = conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
    return {row[0] for row in cursor.fetchall()}


def user_version(conn: sqlite3.Connection) -> int:
    return conn.execute("PRAGMA user_version").fetchone()[0]


def set_user_version(conn: sqlite3.Connection, version: int) -> None:
    """Set and commit the counter, in any sqlite3 transaction mode."""
    conn.execute(f"PRAGMA user_version = {version}")
    conn.commit()


def released(conn: sqlite3.Connection) -> bool:
    """Whether the migration left no transaction of its own open.

    With autocommit=False sqlite3 reopens a deferred transaction right
    after every commit or rollback, so only the other modes are checked.
    """
    if getattr(conn, "autocommit", None) is False:
        return True
    return not conn.in_transaction
