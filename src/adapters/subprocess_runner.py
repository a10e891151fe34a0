"""Subprocess-backed `ProcessRunner`.

The script inherits stdout/stderr so its own output reaches the terminal.
Only the exit status is consumed.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from core.domain.errors import ScriptExecutionError

logger = logging.getLogger(__name__)


class SubprocessRunner:
    """Runs an executable and waits for it to terminate."""

    def run(self, executable: Path, argument: str) -> int | None:
        logger.debug("Spawning %s", executable)
        try:
            # Path("./x.sh") renders as "x.sh", which would be looked up on PATH.
            completed = subprocess.run([str(executable.absolute()), argument], check=False)
        except OSError as exc:
            raise ScriptExecutionError(str(exc)) from exc

        returncode = completed.returncode
        logger.debug("%s exited with %s", executable, returncode)
        # POSIX: negative return code means "killed by signal N", not an exit status.
        if returncode < 0:
            return None
        return returncode
