"""Keyboard input parsing for the line editor.

Turns one complete raw terminal input sequence (as produced by
:mod:`lineshell.stdin_buffer`) into a :class:`KeyEvent`. Only the keys the
editor reacts to get their own kind; everything else parses to
``"unknown"`` so the update step can ignore it.
"""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass
from typing import Literal, Optional

KeyKind = Literal["char", "submit", "left", "right", "backspace", "interrupt", "unknown"]


# ---------------------------------------------------------------------------
# KeyEvent
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class KeyEvent:
    """A single decoded keystroke.

    ``char`` is only set for the ``"char"`` kind.
    """

    kind: KeyKind
    char: Optional[str] = None

    @staticmethod
    def of_char(c: str) -> KeyEvent:
        return KeyEvent("char", c)

    @staticmethod
    def submit() -> KeyEvent:
        return KeyEvent("submit")

    @staticmethod
    def left() -> KeyEvent:
        return KeyEvent("left")

    @staticmethod
    def right() -> KeyEvent:
        return KeyEvent("right")

    @staticmethod
    def backspace() -> KeyEvent:
        return KeyEvent("backspace")

    @staticmethod
    def interrupt() -> KeyEvent:
        return KeyEvent("interrupt")

    @staticmethod
    def unknown() -> KeyEvent:
        return KeyEvent("unknown")


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

CTRL_C = "\x03"

# Legacy escape sequences -> key kinds
LEGACY_KEY_SEQUENCES: dict[str, KeyKind] = {
    "\x1b[C": "right",
    "\x1b[D": "left",
    "\x1bOC": "right",
    "\x1bOD": "left",
}

CODEPOINTS: dict[int, KeyKind] = {
    13: "submit",
    57414: "submit",  # keypad enter
    127: "backspace",
}

# CSI u format: \x1b[<codepoint>(:<shifted>(:<base>))?(;<modifier>(:<event>))?u
_KITTY_CSI_U_RE = re.compile(
    r"\x1b\[(\d+)(?::\d+(?::\d+)?)?(?:;(\d+)(?::(\d+))?)?u$"
)

# Unmodified arrow in kitty form: \x1b[1;1(:<event>)?[CD]
_KITTY_ARROW_RE = re.compile(r"\x1b\[1;1(?::(\d+))?([CD])$")

_CTRL_MODIFIER = 4
_LOCK_MASK = 64 + 128


def _parse_kitty(data: str) -> KeyEvent | None:
    m = _KITTY_CSI_U_RE.match(data)
    if m:
        codepoint = int(m.group(1))
        modifier = (int(m.group(2)) if m.group(2) else 1) - 1
        event_type = int(m.group(3)) if m.group(3) else 1
        if event_type == 3:
            # key release
            return KeyEvent.unknown()
        modifier &= ~_LOCK_MASK
        if modifier == _CTRL_MODIFIER and codepoint == ord("c"):
            return KeyEvent.interrupt()
        if modifier:
            return KeyEvent.unknown()
        kind = CODEPOINTS.get(codepoint)
        if kind is not None:
            return KeyEvent(kind)
        if codepoint > sys.maxunicode:
            return KeyEvent.unknown()
        ch = chr(codepoint)
        if ch.isprintable():
            return KeyEvent.of_char(ch)
        return KeyEvent.unknown()

    m = _KITTY_ARROW_RE.match(data)
    if m:
        if m.group(1) == "3":
            return KeyEvent.unknown()
        return KeyEvent.right() if m.group(2) == "C" else KeyEvent.left()

    return None


# ---------------------------------------------------------------------------
# parse_key
# ---------------------------------------------------------------------------


def parse_key(data: str) -> KeyEvent:
    """Parse one complete raw input sequence into a :class:`KeyEvent`."""
    if not data:
        return KeyEvent.unknown()

    kind = LEGACY_KEY_SEQUENCES.get(data)
    if kind is not None:
        return KeyEvent(kind)

    if data.startswith("\x1b["):
        parsed = _parse_kitty(data)
        if parsed is not None:
            return parsed

    # --- Simple single-byte keys ---
    if data == CTRL_C:
        return KeyEvent.interrupt()
    if data == "\r" or data == "\n":
        return KeyEvent.submit()
    if data == "\x7f" or data == "\x08":
        return KeyEvent.backspace()

    # --- Plain printable character ---
    if len(data) == 1 and data.isprintable():
        return KeyEvent.of_char(data)

    return KeyEvent.unknown()
