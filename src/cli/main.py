"""db-ops command line interface (Typer).

The callback validates configuration once (database URL, settings, logging)
and builds the orchestrator; each command then runs exactly one procedure.
Any `DbOpsError` ends the process with status 1 and a readable message.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console

from adapters.postgres_connector import PsycopgConnector
from adapters.subprocess_runner import SubprocessRunner
from cli.logging_setup import configure_logging
from cli.ui_components import build_console_hooks, print_error
from core.config import AppSettings, load_local_env, load_settings
from core.domain.errors import ConfigurationError, DbOpsError
from core.domain.models import Command, ConnectionTarget
from core.services.orchestrator import Orchestrator

app = typer.Typer(
    name="db-ops",
    no_args_is_help=True,
    add_completion=False,
    help="A CLI tool for database orchestration.",
)

_console = Console()
_err_console = Console(stderr=True)

logger = logging.getLogger(__name__)


@dataclass
class CliState:
    settings: AppSettings
    orchestrator: Orchestrator


def build_orchestrator(target: ConnectionTarget, settings: AppSettings) -> Orchestrator:
    """Wire the production adapters (psycopg2 + subprocess)."""

    return Orchestrator(
        target,
        PsycopgConnector(),
        SubprocessRunner(),
        script_path=settings.recreate_script,
        hooks=build_console_hooks(_console),
    )


def _fail(error: DbOpsError) -> NoReturn:
    print_error(_err_console, error)
    raise typer.Exit(code=1)


def _execute(ctx: typer.Context, command: Command) -> None:
    state: CliState = ctx.obj
    try:
        state.orchestrator.run(command)
    except DbOpsError as exc:
        logger.debug("%s failed", command.kind.value, exc_info=exc)
        _fail(exc)


@app.callback()
def main(
    ctx: typer.Context,
    url: Optional[str] = typer.Option(
        None,
        "--url",
        "-u",
        envvar="DATABASE_URL",
        help="The database connection URL.",
        show_default=False,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """A CLI tool for database orchestration."""

    try:
        settings = load_settings()
        configure_logging("DEBUG" if verbose else settings.log_level)
        if url is None or not url.strip():
            raise ConfigurationError(
                "database URL (pass --url/-u or set DATABASE_URL)",
                context="Missing required configuration",
            )
        target = ConnectionTarget(url=url)
    except DbOpsError as exc:
        _fail(exc)

    ctx.obj = CliState(settings=settings, orchestrator=build_orchestrator(target, settings))


@app.command()
def status(ctx: typer.Context) -> None:
    """Pings the database to ensure connection is valid."""

    _execute(ctx, Command.status())


@app.command()
def recreate(ctx: typer.Context) -> None:
    """Recreates the database using the shell script."""

    _execute(ctx, Command.recreate())


@app.command()
def seed(
    ctx: typer.Context,
    file: Optional[Path] = typer.Option(
        None,
        "--file",
        "-f",
        help="Path to the SQL file [default: insert_data.sql].",
        show_default=False,
    ),
) -> None:
    """Seeds the database using the SQL file."""

    state: CliState = ctx.obj
    _execute(ctx, Command.seed(file or state.settings.seed_file))


@app.command()
def reset(
    ctx: typer.Context,
    file: Optional[Path] = typer.Option(
        None,
        "--file",
        "-f",
        help="Path to the SQL file [default: insert_data.sql].",
        show_default=False,
    ),
) -> None:
    """Runs recreate and then seed."""

    state: CliState = ctx.obj
    _execute(ctx, Command.reset(file or state.settings.seed_file))


def run() -> None:
    """Console-script entry point."""

    # Load .env once, before parsing, without overriding real env vars.
    load_local_env()
    app(prog_name="db-ops")
