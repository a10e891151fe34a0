"""PostgreSQL connector (psycopg2).

Implements `core.interfaces.connector.Connector`:
- One fresh connection per `connect()`; always closed on scope exit.
- `autocommit` on: SQL text goes to the server as-is, so a multi-statement
  seed behaves like any simple query (no transaction added by this tool).
- Driver errors are translated into domain errors carrying the driver detail.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

import psycopg2

from core.domain.errors import DatabaseConnectionError, QueryExecutionError
from core.domain.models import ConnectionTarget

logger = logging.getLogger(__name__)


def _driver_detail(exc: psycopg2.Error) -> str:
    detail = str(exc).strip()
    return detail or type(exc).__name__


class PsycopgSession:
    """Open psycopg2 connection exposed as a `DatabaseSession`."""

    def __init__(self, conn) -> None:
        self._conn = conn

    def execute(self, sql: str) -> None:
        logger.debug("Executing %d characters of SQL", len(sql))
        try:
            with self._conn.cursor() as cur:
                # No parameters: the text is sent without placeholder handling.
                cur.execute(sql)
        except psycopg2.Error as exc:
            raise QueryExecutionError(_driver_detail(exc)) from exc


class PsycopgConnector:
    """Opens psycopg2 connections from a `ConnectionTarget`."""

    @contextmanager
    def connect(self, target: ConnectionTarget) -> Iterator[PsycopgSession]:
        logger.debug("Connecting to %s", target.redacted())
        try:
            conn = psycopg2.connect(target.url)
        except psycopg2.Error as exc:
            raise DatabaseConnectionError(_driver_detail(exc)) from exc

        try:
            conn.autocommit = True
            yield PsycopgSession(conn)
        finally:
            conn.close()
            logger.debug("Connection to %s closed", target.redacted())
