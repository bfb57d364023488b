"""Run loop: terminal events in, editor updates, rendered output out."""

from __future__ import annotations

import logging
from typing import Callable

from lineshell.errors import CommandNotExecutable
from lineshell.readline import Editor
from lineshell.runner import Runner, decode_output
from lineshell.terminal import CRLF, Terminal

logger = logging.getLogger(__name__)


def _to_terminal(text: str) -> str:
    """Normalize line endings for a terminal in raw mode."""
    return text.replace("\n", CRLF)


class RunLoop:
    """Drives an :class:`Editor` from terminal key events.

    Each event is applied to the editor. A submitted line is run through
    the runner and its output printed below the prompt; any other event
    redraws the line in place. The loop ends on the interrupt key or when
    the terminal input is closed.
    """

    def __init__(
        self,
        editor: Editor,
        terminal: Terminal,
        runner: Runner,
        *,
        error_style: Callable[[str], str] = lambda text: text,
        strict_output: bool = False,
    ) -> None:
        self.editor = editor
        self.terminal = terminal
        self.runner = runner
        self.error_style = error_style
        self.strict_output = strict_output

    def run(self) -> None:
        term = self.terminal
        with term.raw_mode():
            logger.info("Run loop started")
            term.save_cursor()
            term.write(self.editor.render())
            term.flush()

            for event in term.events():
                if event.kind == "interrupt":
                    break

                line = self.editor.apply(event)
                if line is not None:
                    self._dispatch(line)
                else:
                    term.restore_cursor()
                    term.clear_after_cursor()
                    term.save_cursor()

                term.write(self.editor.render())
                term.flush()

            term.write(CRLF)
            term.flush()
            logger.info("Run loop terminated")

    def _dispatch(self, line: str) -> None:
        term = self.terminal
        tokens = line.split()
        if tokens:
            command, args = tokens[0], tokens[1:]
            try:
                output = self.runner.run(command, args)
            except CommandNotExecutable as e:
                logger.info("Echoing %r: %s", line, e)
            else:
                if output.stdout:
                    text = decode_output(output.stdout, strict=self.strict_output)
                    term.write(CRLF + _to_terminal(text))
                if output.stderr:
                    text = decode_output(output.stderr, strict=self.strict_output)
                    term.write(CRLF + self.error_style(_to_terminal(text)))
                term.write(CRLF)
                term.save_cursor()
                return

        term.write(CRLF + line + CRLF)
        term.save_cursor()
