"""
External command execution for uubu.

All system mutation goes through a CommandRunner so tests can swap in a
fake without touching step or orchestration logic.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .exceptions import CommandError

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Outcome of one external command."""
    command: List[str]
    output: str = ""
    returncode: Optional[int] = None
    error: Optional[CommandError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class CommandRunner:
    """Interface for running external programs."""

    def run(self, name: str, args: Sequence[str] = ()) -> CommandResult:
        raise NotImplementedError


class SubprocessRunner(CommandRunner):
    """
    Runs programs with subprocess, waiting for completion.

    stdout and stderr are captured interleaved as one text blob. No
    retries and no timeout: package operations run to completion.
    """

    def run(self, name: str, args: Sequence[str] = ()) -> CommandResult:
        cmd = [name, *args]
        logger.debug(f"Running command: {' '.join(cmd)}")

        try:
            completed = subprocess.run(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                errors="replace",
                check=False,
            )
        except OSError as e:
            logger.debug(f"Cannot execute {name}: {e}")
            return CommandResult(command=cmd, error=CommandError(cmd, cause=e))

        output = completed.stdout or ""
        if completed.returncode != 0:
            logger.debug(f"{' '.join(cmd)} exited {completed.returncode}:\n{output}")
            return CommandResult(
                command=cmd,
                output=output,
                returncode=completed.returncode,
                error=CommandError(cmd, completed.returncode, output),
            )

        return CommandResult(command=cmd, output=output, returncode=0)


def command_exists(name: str) -> bool:
    """Check whether an executable is resolvable on PATH."""
    if not name:
        return False
    try:
        return shutil.which(name) is not None
    except (OSError, ValueError):
        return False
