"""
L4 Execution — Passthrough process runner.

Runs the installed binary with the caller's arguments, in the caller's
working directory, with stdin/stdout/stderr inherited.  The child's exit
status is reported back; this module never exits the interpreter.
"""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from relbin.core.errors import NotInstalled
from relbin.core.services.binary_install.data.constants import LAUNCH_FAILURE_STATUS

logger = logging.getLogger(__name__)

# Shell convention for "terminated by Ctrl-C".
INTERRUPTED_STATUS = 130


def exit_status(returncode: int) -> int:
    """Map a ``subprocess`` return code to a shell exit status.

    A child killed by signal N reports ``-N``; shells report ``128 + N``.
    """
    if returncode < 0:
        return 128 + (-returncode)
    return returncode


@dataclass
class ProcessOutcome:
    """How the child ended."""

    exit_status: int
    launched: bool = True
    error: str = ""

    def to_dict(self) -> dict:
        return {
            "exit_status": self.exit_status,
            "launched": self.launched,
            "error": self.error,
        }


class ProcessRunner:
    """Runs one installed binary."""

    def __init__(self, binary_path: Path, name: str | None = None) -> None:
        self.binary_path = Path(binary_path)
        self.name = name or self.binary_path.name

    def run(self, args: Sequence[str] = (), *, cwd: Path | None = None) -> int:
        """Run the binary and return its exit status."""
        return self.launch(args, cwd=cwd).exit_status

    def launch(
        self,
        args: Sequence[str] = (),
        *,
        cwd: Path | None = None,
    ) -> ProcessOutcome:
        """Run the binary and wait for it.

        Raises:
            NotInstalled: If the binary is missing.  Nothing is spawned.
        """
        if not self.binary_path.is_file():
            raise NotInstalled(self.name, self.binary_path)

        cmd = [str(self.binary_path), *args]
        logger.debug("Executing: %s", cmd)
        try:
            proc = subprocess.run(cmd, cwd=str(cwd or os.getcwd()))
        except KeyboardInterrupt:
            logger.debug("%s interrupted", self.name)
            return ProcessOutcome(INTERRUPTED_STATUS, error="interrupted")
        except OSError as exc:
            logger.error("Failed to launch %s: %s", self.binary_path, exc)
            return ProcessOutcome(LAUNCH_FAILURE_STATUS, launched=False, error=str(exc))

        status = exit_status(proc.returncode)
        logger.debug("%s exited with status %d", self.name, status)
        return ProcessOutcome(status)
