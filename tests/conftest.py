"""Pytest configuration and fixtures."""

import sqlite3
import sys
from pathlib import Path

import pytest

from lazymigrate.store.database import Database


@pytest.fixture
def test_db_path(tmp_path: Path) -> Path:
    """Provide a temporary database path for tests."""
    return tmp_path / "test.db"


@pytest.fixture(params=["autocommit", "deferred", "pep249"])
def conn(request, test_db_path: Path) -> sqlite3.Connection:
    """Provide a connection in each transaction-handling mode of sqlite3."""
    if request.param == "pep249":
        if sys.version_info < (3, 12):
            pytest.skip("autocommit=False requires Python 3.12")
        connection = sqlite3.connect(str(test_db_path), autocommit=False)
    else:
        isolation_level = None if request.param == "autocommit" else "DEFERRED"
        connection = sqlite3.connect(str(test_db_path), isolation_level=isolation_level)
    yield connection
    connection.close()


@pytest.fixture
def db(test_db_path: Path) -> Database:
    """Provide a connected database instance."""
    database = Database(test_db_path)
    database.connect()
    yield database
    database.close()


@pytest.fixture
def statements(conn: sqlite3.Connection) -> list[str]:
    """Record every statement executed on `conn`."""
    executed: list[str] = []
    conn.set_trace_callback(executed.append)
    yield executed
    conn.set_trace_callback(None)
