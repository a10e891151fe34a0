"""Error taxonomy for db-ops.

Every failure is fatal to the invocation: nothing in the core retries or
recovers. Adapters raise these errors with the raw detail coming from the
driver/OS, and the orchestrator attaches the step that failed through
`with_context` before letting the error reach the CLI.
"""

from __future__ import annotations


class DbOpsError(Exception):
    """Base class for every expected db-ops failure."""

    def __init__(self, message: str, *, context: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def with_context(self, context: str) -> DbOpsError:
        """Attach a human readable description of the failing step."""

        self.context = context
        return self

    def __str__(self) -> str:
        if self.context:
            return f"{self.context}: {self.message}"
        return self.message


class ConfigurationError(DbOpsError):
    """Required configuration (e.g. the database URL) is missing or invalid."""


class DatabaseConnectionError(DbOpsError):
    """The database could not be reached or authenticated."""


class QueryExecutionError(DbOpsError):
    """A statement was submitted but the database rejected or failed it."""


class ScriptNotFoundError(DbOpsError):
    """The external recreation script is missing at the expected path."""


class ScriptExecutionError(DbOpsError):
    """The external script could not run or ended with a failing status."""

    def __init__(
        self,
        message: str,
        *,
        exit_code: int | None = None,
        context: str | None = None,
    ) -> None:
        super().__init__(message, context=context)
        self.exit_code = exit_code


class FileReadError(DbOpsError):
    """The seed file could not be opened, read or decoded."""
