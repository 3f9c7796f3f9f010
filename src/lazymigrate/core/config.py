"""Configuration management for lazymigrate."""

from dataclasses import dataclass

from .exceptions import ConfigError

# Intentionally long and ugly to avoid collisions with real SQL.
DEFAULT_DELIMITER = (
    "--------------------------------- NEW VERSION ---------------------------------"
)

DEFAULT_VERSION_PRAGMA = "user_version"

# Integer header fields SQLite lets applications read and write freely
VERSION_PRAGMAS = frozenset({"user_version", "application_id"})


def validate_delimiter(delimiter: str) -> None:
    """Reject delimiters that cannot form a line of their own.

    Raises:
        ConfigError: If the delimiter is empty or spans several lines.
    """
    if not delimiter:
        raise ConfigError("Delimiter must not be empty")
    if "\n" in delimiter:
        raise ConfigError("Delimiter must fit on a single line")


@dataclass(frozen=True)
class MigrationConfig:
    """Migration configuration.

    Attributes:
        delimiter: Line separating version bodies in a schema string.
        version_pragma: Database header field holding the applied-version counter.
        progress_interval: SQLite VM steps between cancellation checks.
    """

    delimiter: str = DEFAULT_DELIMITER
    version_pragma: str = DEFAULT_VERSION_PRAGMA
    progress_interval: int = 1000

    def __post_init__(self) -> None:
        validate_delimiter(self.delimiter)
        if self.version_pragma not in VERSION_PRAGMAS:
            raise ConfigError(
                f"Unsupported version pragma {self.version_pragma!r}, "
                f"expected one of {sorted(VERSION_PRAGMAS)}"
            )
        if self.progress_interval < 1:
            raise ConfigError("progress_interval must be at least 1")


DEFAULT_CONFIG = MigrationConfig()
