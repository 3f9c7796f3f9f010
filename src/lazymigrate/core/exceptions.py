"""Custom exceptions for lazymigrate."""


class LazyMigrateError(Exception):
    """Base exception for all lazymigrate errors."""

    pass


class ConfigError(LazyMigrateError):
    """Invalid migration configuration."""

    pass


class DatabaseError(LazyMigrateError):
    """Database operation failed."""

    pass


class MigrationError(LazyMigrateError):
    """A migration stage failed.

    Attributes:
        stage: Name of the failing stage.
        cause: Underlying database error, if any.
    """

    stage = "migrate"

    def __init__(self, message: str, cause: BaseException | None = None):
        self.cause = cause
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class TransactionStartError(MigrationError):
    """Could not begin the migration transaction."""

    stage = "begin"

    def __init__(
        self, cause: BaseException | None = None, detail: str | None = None
    ):
        message = "cannot begin transaction"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message, cause)


class CounterReadError(MigrationError):
    """Could not read the applied-version counter."""

    stage = "read_version"

    def __init__(
        self,
        pragma: str,
        cause: BaseException | None = None,
        detail: str | None = None,
    ):
        self.pragma = pragma
        message = f"cannot get PRAGMA {pragma}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message, cause)


class VersionApplyError(MigrationError):
    """A schema version failed to execute."""

    stage = "apply"

    def __init__(self, index: int, cause: BaseException | None = None):
        """Initialize exception with the failing version.

        Args:
            index: 0-based position of the version in the schema.
            cause: Underlying database error.
        """
        self.index = index
        super().__init__(f"cannot apply migration {index} (from 0th)", cause)


class CounterWriteError(MigrationError):
    """Could not persist the new applied-version counter."""

    stage = "write_version"

    def __init__(self, pragma: str, cause: BaseException | None = None):
        self.pragma = pragma
        super().__init__(f"cannot set PRAGMA {pragma}", cause)


class CommitError(MigrationError):
    """The migration transaction failed to commit."""

    stage = "commit"

    def __init__(self, cause: BaseException | None = None):
        super().__init__("cannot commit new migrations", cause)


class MigrationCancelledError(MigrationError):
    """The migration context was cancelled or its deadline passed."""

    stage = "cancelled"

    def __init__(self, index: int | None, cause: BaseException | None = None):
        """Initialize exception with the version being run.

        Args:
            index: Version about to run or interrupted, or None when the
                migration stopped before reaching any version.
            cause: Underlying database error, if a statement was interrupted.
        """
        self.index = index
        if index is None:
            message = "migration cancelled before applying any version"
        else:
            message = f"migration cancelled at version {index}"
        super().__init__(message, cause)
