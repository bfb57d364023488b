"""Exception types raised by lineshell."""

from __future__ import annotations


class LineshellError(Exception):
    """Base class for all lineshell errors."""


class TerminalIOError(LineshellError):
    """Raw-mode setup, a terminal read, or a terminal write failed."""


class CommandNotExecutable(LineshellError):
    """The process runner could not locate or start the command."""

    def __init__(self, command: str, reason: str = "") -> None:
        self.command = command
        self.reason = reason
        message = f"cannot execute {command!r}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class OutputDecodeError(LineshellError):
    """Captured command output is not valid UTF-8 under strict decoding."""


class DirectoryListingError(LineshellError):
    """The working directory could not be listed at startup."""
