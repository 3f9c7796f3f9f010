"""Test doubles for lazymigrate tests.

Example:
    from tests.fakes import FailingConnection

    conn = FailingConnection(sqlite3.connect(":memory:"), fail_on="COMMIT")
"""

from .connections import FailingConnection
from .contexts import CountdownContext

__all__ = ["CountdownContext", "FailingConnection"]
