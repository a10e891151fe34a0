"""Database lifecycle orchestration.

Runs exactly one of the four procedures (status, recreate, seed, reset)
against a `Connector` and a `ProcessRunner`. The first failure stops the
procedure and propagates as a `DbOpsError` annotated with the failing step.
Side-effects for the user (console output) go through `OrchestratorHooks`
so the core never prints.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from core.config import DEFAULT_RECREATE_SCRIPT
from core.domain.errors import (
    DatabaseConnectionError,
    FileReadError,
    QueryExecutionError,
    ScriptExecutionError,
    ScriptNotFoundError,
)
from core.domain.models import Command, CommandKind, ConnectionTarget
from core.interfaces import Connector, ProcessRunner

logger = logging.getLogger(__name__)

STATUS_QUERY = "SELECT 1"


@dataclass
class OrchestratorHooks:
    """Optional callbacks for UI layers (step progress)."""

    step_started: Callable[[str], None] | None = None
    step_completed: Callable[[str], None] | None = None


class Orchestrator:
    """Composes a connector and a process runner per selected command."""

    def __init__(
        self,
        target: ConnectionTarget,
        connector: Connector,
        runner: ProcessRunner,
        *,
        script_path: Path = DEFAULT_RECREATE_SCRIPT,
        hooks: OrchestratorHooks | None = None,
    ) -> None:
        self._target = target
        self._connector = connector
        self._runner = runner
        self._script_path = script_path
        self._hooks = hooks or OrchestratorHooks()

    def _started(self, message: str) -> None:
        logger.info(message)
        if self._hooks.step_started:
            self._hooks.step_started(message)

    def _completed(self, message: str) -> None:
        logger.info(message)
        if self._hooks.step_completed:
            self._hooks.step_completed(message)

    def run(self, command: Command) -> None:
        """Dispatch `command` to its procedure."""

        logger.debug("Running %s against %s", command.kind.value, self._target.redacted())
        if command.kind is CommandKind.STATUS:
            self.status()
        elif command.kind is CommandKind.RECREATE:
            self.recreate()
        elif command.kind is CommandKind.SEED:
            self.seed(command.file)
        elif command.kind is CommandKind.RESET:
            self.reset(command.file)
        else:  # pragma: no cover
            raise ValueError(f"Unsupported command: {command.kind!r}")

    def status(self) -> None:
        """Open a connection and run a no-op query."""

        self._started("Pinging database...")
        try:
            with self._connector.connect(self._target) as session:
                try:
                    session.execute(STATUS_QUERY)
                except QueryExecutionError as exc:
                    raise exc.with_context(f"Failed to execute test query ({STATUS_QUERY})")
        except DatabaseConnectionError as exc:
            raise exc.with_context("Failed to establish connection to the database (check your URL)")
        self._completed("Connection successful! Database is ready.")

    def recreate(self) -> None:
        """Run the recreation script with the connection string as its only argument."""

        self._started("Recreating database via script...")
        script = self._script_path
        if not script.exists():
            raise ScriptNotFoundError(f"{script} not found in current directory.")

        try:
            exit_code = self._runner.run(script, self._target.url)
        except ScriptExecutionError as exc:
            raise exc.with_context(f"Failed to execute {script.name}")

        if exit_code != 0:
            shown = "unknown" if exit_code is None else str(exit_code)
            raise ScriptExecutionError(
                f"{script.name} exited with error code: {shown}",
                exit_code=exit_code,
            )
        self._completed("Database recreated successfully.")

    def seed(self, file: Path) -> None:
        """Submit the whole content of `file` as a single batch."""

        self._started(f"Seeding database from {file}...")
        sql = read_sql_file(file)
        try:
            with self._connector.connect(self._target) as session:
                try:
                    session.execute(sql)
                except QueryExecutionError as exc:
                    raise exc.with_context("Failed to execute SQL seed query")
        except DatabaseConnectionError as exc:
            raise exc.with_context("Failed to connect to database for seeding")
        self._completed("Seeding completed.")

    def reset(self, file: Path) -> None:
        """Recreate, then seed. Seed never runs if recreate fails."""

        self.recreate()
        self.seed(file)


def read_sql_file(path: Path) -> str:
    """Read a SQL file exactly as stored (UTF-8, no newline translation)."""

    try:
        return path.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise FileReadError(str(exc), context=f"Failed to read SQL file: {path}") from exc
