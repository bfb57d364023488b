"""Terminal abstraction for raw-mode stdin/stdout interaction.

Provides a ``Terminal`` protocol and a concrete ``ProcessTerminal``
implementation that manages raw mode, reads keystrokes as
:class:`~lineshell.keys.KeyEvent` values, and buffers output until
:meth:`ProcessTerminal.flush`.
"""

from __future__ import annotations

import codecs
import contextlib
import logging
import os
import select
import sys
import termios
import tty
from typing import IO, ContextManager, Iterator, Protocol

from lineshell.errors import TerminalIOError
from lineshell.keys import KeyEvent, parse_key
from lineshell.stdin_buffer import StdinBuffer

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

SAVE_CURSOR = "\x1b7"
RESTORE_CURSOR = "\x1b8"
CLEAR_AFTER_CURSOR = "\x1b[J"
CURSOR_LEFT_FMT = "\x1b[{}D"
CRLF = "\r\n"

# How long an incomplete escape sequence may wait for its remaining bytes.
ESCAPE_TIMEOUT = 0.01


def cursor_left(columns: int) -> str:
    """Return the control code moving the cursor *columns* to the left."""
    if columns <= 0:
        return ""
    return CURSOR_LEFT_FMT.format(columns)


# ---------------------------------------------------------------------------
# Terminal protocol
# ---------------------------------------------------------------------------


class Terminal(Protocol):
    """Interface for terminal I/O operations."""

    def raw_mode(self) -> ContextManager[None]: ...

    def events(self) -> Iterator[KeyEvent]: ...

    def write(self, data: str) -> None: ...

    def flush(self) -> None: ...

    def save_cursor(self) -> None: ...

    def restore_cursor(self) -> None: ...

    def clear_after_cursor(self) -> None: ...


def _restore_mode(fd: int, mode: list) -> None:
    try:
        termios.tcsetattr(fd, termios.TCSADRAIN, mode)
    except termios.error as e:
        raise TerminalIOError(f"cannot restore terminal mode: {e}") from e
    logger.debug("Restored terminal mode on fd %d", fd)


# ---------------------------------------------------------------------------
# ProcessTerminal implementation
# ---------------------------------------------------------------------------


class ProcessTerminal:
    """Concrete terminal implementation backed by ``sys.stdin``/``sys.stdout``.

    Raw mode is managed with :mod:`tty` and :mod:`termios`. Every OS-level
    failure is re-raised as :class:`TerminalIOError`.
    """

    def __init__(
        self,
        stdin: IO[str] | None = None,
        stdout: IO[str] | None = None,
    ) -> None:
        self._stdin = stdin if stdin is not None else sys.stdin
        self._stdout = stdout if stdout is not None else sys.stdout
        self._pending: list[str] = []
        self._stdin_buffer = StdinBuffer()
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

    # -- raw mode -----------------------------------------------------------

    @contextlib.contextmanager
    def raw_mode(self) -> Iterator[None]:
        """Hold the terminal in raw mode, restoring the previous mode on exit."""
        try:
            fd = self._stdin.fileno()
            original = termios.tcgetattr(fd)
            tty.setraw(fd)
        except (OSError, ValueError, termios.error) as e:
            raise TerminalIOError(f"cannot enter raw mode: {e}") from e
        logger.debug("Entered raw mode on fd %d", fd)
        try:
            yield
        except BaseException:
            # the error already propagating wins over a failed restore
            try:
                _restore_mode(fd, original)
            except TerminalIOError:
                logger.exception("Cannot restore terminal mode on fd %d", fd)
            raise
        _restore_mode(fd, original)

    # -- input --------------------------------------------------------------

    def events(self) -> Iterator[KeyEvent]:
        """Yield one event per keystroke until stdin reaches end of file."""
        for sequence in self._sequences():
            yield parse_key(sequence)

    def _sequences(self) -> Iterator[str]:
        try:
            fd = self._stdin.fileno()
        except (OSError, ValueError) as e:
            raise TerminalIOError(f"cannot read from terminal: {e}") from e

        while True:
            if self._stdin_buffer.pending:
                ready, _, _ = select.select([fd], [], [], ESCAPE_TIMEOUT)
                if not ready:
                    yield from self._stdin_buffer.flush()
                    continue
            try:
                raw = os.read(fd, 4096)
            except OSError as e:
                raise TerminalIOError(f"cannot read from terminal: {e}") from e
            if not raw:
                yield from self._stdin_buffer.flush()
                return
            data = self._decoder.decode(raw)
            yield from self._stdin_buffer.process(data)

    # -- output -------------------------------------------------------------

    def write(self, data: str) -> None:
        """Queue *data* for output; nothing reaches the terminal before flush."""
        self._pending.append(data)

    def flush(self) -> None:
        """Write everything queued so far and flush the stream."""
        data = "".join(self._pending)
        self._pending.clear()
        try:
            self._stdout.write(data)
            self._stdout.flush()
        except (OSError, ValueError) as e:
            raise TerminalIOError(f"cannot write to terminal: {e}") from e

    # -- cursor / screen manipulation --------------------------------------

    def save_cursor(self) -> None:
        self.write(SAVE_CURSOR)

    def restore_cursor(self) -> None:
        self.write(RESTORE_CURSOR)

    def clear_after_cursor(self) -> None:
        self.write(CLEAR_AFTER_CURSOR)
