"""External process contract."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class ProcessRunner(Protocol):
    """Runs an executable with a single positional argument and waits for it."""

    def run(self, executable: Path, argument: str) -> int | None:
        """Return the exit status, or `None` if the process ended without one.

        Raises `ScriptExecutionError` if the executable cannot be launched.
        """

        ...
