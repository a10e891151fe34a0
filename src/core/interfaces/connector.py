"""Database connector contract.

Why Protocol:
- Structural contract (duck typing) without inheritance, so the psycopg2
  adapter and the in-memory test doubles are interchangeable.
- The orchestrator only ever needs "connect" and "execute raw text".
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Protocol, runtime_checkable

from core.domain.models import ConnectionTarget


@runtime_checkable
class DatabaseSession(Protocol):
    """An open connection able to run raw SQL text."""

    def execute(self, sql: str) -> None:
        """Submit `sql` as-is (one statement or a multi-statement batch).

        Raises `QueryExecutionError` when the database rejects it.
        """

        ...


@runtime_checkable
class Connector(Protocol):
    """Opens scoped connections to a database."""

    def connect(self, target: ConnectionTarget) -> AbstractContextManager[DatabaseSession]:
        """Open a connection that is closed when the `with` block exits.

        Raises `DatabaseConnectionError` when the database cannot be reached
        or authenticated.
        """

        ...
