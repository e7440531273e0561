"""
External command runner.

Thin wrapper over subprocess so every pipeline step that shells out to
git or docker fails the same way (CommandError with stderr) and can be
replaced by a fake in tests.

Dependencies: subprocess (stdlib)
System role: Process boundary for git and docker
"""

import logging
import shlex
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from deploy.exceptions import CommandError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a successful command."""
    args: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str


class CommandRunner:
    """Runs commands synchronously, raising on non-zero exit."""

    def __init__(self, cwd: str | Path | None = None) -> None:
        """
        Initialize runner.

        Args:
            cwd: Default working directory for commands
        """
        self._cwd = str(cwd) if cwd is not None else None

    def run(
        self,
        args: Sequence[str],
        input: str | None = None,
        cwd: str | Path | None = None,
    ) -> CommandResult:
        """
        Run one command to completion.

        Args:
            args: Program and arguments
            input: Text written to the command's stdin (never logged)
            cwd: Working directory, overriding the runner default

        Returns:
            CommandResult: Captured output

        Raises:
            CommandError: If the program is missing or exits non-zero
        """
        args = [str(arg) for arg in args]
        workdir = str(cwd) if cwd is not None else self._cwd
        logger.info(f"$ {shlex.join(args)}")

        try:
            completed = subprocess.run(
                args,
                input=input,
                cwd=workdir,
                check=True,
                capture_output=True,
                text=True,
            )
        except subprocess.CalledProcessError as e:
            logger.error(f"Command failed ({e.returncode}): {e.stderr}")
            raise CommandError(args, e.returncode, e.stderr or "") from e
        except FileNotFoundError as e:
            raise CommandError(args, 127, f"{args[0]}: command not found") from e

        if completed.stdout:
            logger.debug(completed.stdout.rstrip())

        return CommandResult(
            args=tuple(args),
            returncode=completed.returncode,
            stdout=completed.stdout,
            stderr=completed.stderr,
        )
