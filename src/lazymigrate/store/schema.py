"""Schema strings split into ordered versions.

A schema string is a series of SQL statements that create and modify
tables. Versions are separated by a delimiter line, which must sit on its
own line between two versions and must not appear at the start or end of
the schema string.

Example:
    schema = Schema(SCHEMA_SQL)
    for index, body in enumerate(schema.versions()):
        print(index, body)
"""

from __future__ import annotations

import re
import sqlite3
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable

from ..core.config import DEFAULT_DELIMITER, validate_delimiter

if TYPE_CHECKING:
    from ..core.config import MigrationConfig
    from .migrations.context import MigrationContext


# Leading whitespace and comments; a statement made only of these is a no-op.
_NOISE = re.compile(r"(?:\s+|--[^\n]*|/\*.*?\*/)*", re.DOTALL)


def _separator(delimiter: str) -> str:
    return "\n" + delimiter + "\n"


@dataclass(frozen=True)
class Schema:
    """A schema string with its version delimiter."""

    body: str
    delimiter: str = DEFAULT_DELIMITER

    def __post_init__(self) -> None:
        validate_delimiter(self.delimiter)

    @classmethod
    def from_versions(
        cls, bodies: Iterable[str], delimiter: str = DEFAULT_DELIMITER
    ) -> "Schema":
        """Build a schema by joining version bodies with the delimiter line.

        Args:
            bodies: SQL text for each version, in order.
            delimiter: Delimiter line placed between versions.

        Returns:
            Schema whose versions() yields the given bodies.
        """
        return cls(_separator(delimiter).join(bodies), delimiter)

    def versions(self) -> list[str]:
        """Return the version bodies of the schema, oldest first."""
        return self.body.split(_separator(self.delimiter))

    def migrate(
        self,
        connection: sqlite3.Connection,
        *,
        context: MigrationContext | None = None,
        config: MigrationConfig | None = None,
    ) -> int:
        """Migrate the database to the latest version of this schema.

        Returns:
            Number of versions applied.
        """
        from .migrations.runner import MigrationRunner

        return MigrationRunner(
            connection, self, config=config, context=context
        ).run()

    def __len__(self) -> int:
        return len(self.versions())


def versions(source: Schema | str) -> list[str]:
    """Split a schema into its version bodies.

    Args:
        source: Schema, or a raw schema string using the default delimiter.

    Returns:
        Ordered version bodies. Version 0 is everything before the first
        delimiter line.
    """
    if isinstance(source, str):
        source = Schema(source)
    return source.versions()


def _is_blank(statement: str) -> bool:
    return statement[_NOISE.match(statement).end():] in ("", ";")


def split_statements(body: str) -> list[str]:
    """Split a version body into complete SQL statements.

    Semicolons inside string literals, comments and trigger bodies do not
    end a statement. A final statement without a semicolon is kept, while
    pieces holding only whitespace or comments are dropped.

    Args:
        body: SQL text of one version.

    Returns:
        Statements in order of appearance, stripped of surrounding whitespace.
    """
    statements = []
    buffer = ""
    *terminated, remainder = body.split(";")
    for piece in terminated:
        buffer += piece + ";"
        if sqlite3.complete_statement(buffer):
            if not _is_blank(buffer):
                statements.append(buffer.strip())
            buffer = ""

    buffer += remainder
    if not _is_blank(buffer):
        statements.append(buffer.strip())
    return statements
