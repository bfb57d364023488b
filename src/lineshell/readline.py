"""Readline editor: buffer model, update step, and render step.

The editor follows a Model-View-Update split. :class:`Readline` holds all
state, :func:`update` applies one key event to it in place, and
:func:`render` projects it to terminal output. Neither step does any I/O.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Protocol

from lineshell.keys import KeyEvent
from lineshell.suggestions import SuggestionIndex
from lineshell.terminal import cursor_left
from lineshell.utils import visible_width

_LIGHT_GREEN = "\x1b[92m"
_CYAN = "\x1b[36m"
_LIGHT_RED = "\x1b[91m"
_FG_RESET = "\x1b[39m"


def _fg(color: str) -> Callable[[str], str]:
    return lambda text: f"{color}{text}{_FG_RESET}"


@dataclass
class ReadlineTheme:
    prompt: Callable[[str], str] = field(default_factory=lambda: _fg(_LIGHT_GREEN))
    suggestion: Callable[[str], str] = field(default_factory=lambda: _fg(_CYAN))
    error: Callable[[str], str] = field(default_factory=lambda: _fg(_LIGHT_RED))


def plain_theme() -> ReadlineTheme:
    """Theme that adds no styling at all."""
    identity: Callable[[str], str] = lambda text: text
    return ReadlineTheme(prompt=identity, suggestion=identity, error=identity)


class Editor(Protocol):
    """Interface the run loop drives.

    ``apply`` consumes one key event and returns the finished line when the
    event submits it. ``render`` returns the text that draws the current
    state at the render anchor.
    """

    def apply(self, event: KeyEvent) -> str | None: ...

    def render(self) -> str: ...


@dataclass
class CursorPosition:
    x: int = 0


class Readline:
    """Single-line input buffer with an inline prefix suggestion."""

    def __init__(
        self,
        index: SuggestionIndex,
        *,
        prompt: str = ">",
        theme: ReadlineTheme | None = None,
    ) -> None:
        self.cursor = CursorPosition()
        self.buffer: str = ""
        self.suggestion: str | None = None
        self.index = index
        self.prompt = prompt
        self._theme = theme or ReadlineTheme()

    def apply(self, event: KeyEvent) -> str | None:
        return update(self, event)

    def render(self) -> str:
        return render(self, self._theme)

    def update_suggestion(self, *, extended: bool = False) -> None:
        """Bring the suggestion back in line with the buffer.

        *extended* means the buffer only grew at the end since the last
        call. The current suggestion is then kept if it still matches: the
        smallest match for a prefix that also matches a longer buffer is the
        smallest match for that buffer too. After a deletion a shorter
        buffer can have smaller matches, so the index is queried again.
        """
        if not self.buffer:
            self.suggestion = None
            return
        if (
            extended
            and self.suggestion is not None
            and self.suggestion.startswith(self.buffer)
        ):
            return
        self.suggestion = self.index.best_match(self.buffer)


def update(model: Readline, event: KeyEvent) -> str | None:
    """Apply *event* to *model*; return the submitted line on Enter."""
    kind = event.kind

    if kind == "submit":
        line = model.buffer
        model.cursor = CursorPosition()
        model.buffer = ""
        model.suggestion = None
        return line

    if kind == "char" and event.char:
        # Typed text always lands at the end of the line.
        model.buffer += event.char
        model.cursor.x += 1
        model.update_suggestion(extended=True)
    elif kind == "left":
        if model.cursor.x > 0:
            model.cursor.x -= 1
    elif kind == "right":
        if model.cursor.x < len(model.buffer):
            model.cursor.x += 1
    elif kind == "backspace":
        if model.cursor.x == len(model.buffer):
            if model.buffer:
                model.buffer = model.buffer[:-1]
                model.cursor.x -= 1
                model.update_suggestion()
        elif model.cursor.x > 0 and model.buffer:
            model.cursor.x -= 1
            x = model.cursor.x
            model.buffer = model.buffer[:x] + model.buffer[x + 1 :]
            model.update_suggestion()

    return None


def render(model: Readline, theme: ReadlineTheme) -> str:
    """Draw prompt, buffer, and suggestion suffix, then place the cursor."""
    parts = [theme.prompt(model.prompt), " ", model.buffer]
    displayed = model.buffer

    if model.suggestion is not None:
        suffix = model.suggestion[len(model.buffer) :]
        if suffix:
            parts.append(theme.suggestion(suffix))
            displayed = model.suggestion

    back = visible_width(displayed) - visible_width(model.buffer[: model.cursor.x])
    parts.append(cursor_left(back))
    return "".join(parts)
