"""Core capability contracts.

Defines the `Protocol`s that concrete adapters implement so the
orchestrator depends on abstractions, not on a driver or on `subprocess`.
"""

from core.interfaces.connector import Connector, DatabaseSession
from core.interfaces.process_runner import ProcessRunner

__all__ = [
    "Connector",
    "DatabaseSession",
    "ProcessRunner",
]
