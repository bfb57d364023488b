"""Process runner: execute a submitted command and capture its output."""

from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass
from typing import Protocol, Sequence

from lineshell.errors import CommandNotExecutable, OutputDecodeError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandOutput:
    stdout: bytes = b""
    stderr: bytes = b""
    returncode: int = 0


class Runner(Protocol):
    """Interface for synchronous, fully buffered command execution."""

    def run(self, command: str, args: Sequence[str]) -> CommandOutput: ...


class ProcessRunner:
    """Runs commands as child processes, blocking until they exit.

    The command is executed directly (no shell); the child inherits the
    environment, gets an empty stdin, and has both output streams captured.
    """

    def __init__(self, cwd: str | os.PathLike[str] | None = None) -> None:
        self._cwd = cwd

    def run(self, command: str, args: Sequence[str]) -> CommandOutput:
        argv = [command, *args]
        logger.info("Running %s", argv)
        try:
            completed = subprocess.run(
                argv,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                cwd=self._cwd,
                check=False,
            )
        except OSError as e:
            logger.info("Cannot execute %r: %s", command, e)
            raise CommandNotExecutable(command, e.strerror or str(e)) from e

        logger.info("%s exited with status %d", command, completed.returncode)
        return CommandOutput(
            stdout=completed.stdout,
            stderr=completed.stderr,
            returncode=completed.returncode,
        )


def decode_output(data: bytes, *, strict: bool = False) -> str:
    """Decode captured output as UTF-8.

    Invalid bytes become U+FFFD unless *strict* is set, in which case
    :class:`OutputDecodeError` is raised.
    """
    if not strict:
        return data.decode("utf-8", errors="replace")
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise OutputDecodeError(f"command output is not valid UTF-8: {e}") from e
