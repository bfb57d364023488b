"""StdinBuffer splits raw input chunks into complete key sequences.

A single ``read`` from the terminal can return several keystrokes at once,
or only part of an escape sequence. Without buffering, a partial arrow-key
sequence would be misread as an Escape press followed by plain characters.
"""

from __future__ import annotations

ESC = "\x1b"


def _is_complete_sequence(data: str) -> str:
    """Check if a string is a complete escape sequence or needs more data.

    Returns 'complete', 'incomplete', or 'not-escape'.
    """
    if not data.startswith(ESC):
        return "not-escape"

    if len(data) == 1:
        return "incomplete"

    after_esc = data[1:]

    # CSI sequences: ESC [
    if after_esc.startswith("["):
        return _is_complete_csi_sequence(data)

    # OSC sequences: ESC ]
    if after_esc.startswith("]"):
        if data.endswith(f"{ESC}\\") or data.endswith("\x07"):
            return "complete"
        return "incomplete"

    # SS3 sequences: ESC O
    if after_esc.startswith("O"):
        return "complete" if len(after_esc) >= 2 else "incomplete"

    # Meta key sequences: ESC followed by a single character
    return "complete"


def _is_complete_csi_sequence(data: str) -> str:
    if len(data) < 3:
        return "incomplete"

    payload = data[2:]
    last_char_code = ord(payload[-1])

    if 0x40 <= last_char_code <= 0x7E:
        return "complete"

    return "incomplete"


def _extract_complete_sequences(buffer: str) -> tuple[list[str], str]:
    """Split accumulated buffer into complete sequences.

    Returns (sequences, remainder).
    """
    sequences: list[str] = []
    pos = 0

    while pos < len(buffer):
        remaining = buffer[pos:]

        if not remaining.startswith(ESC):
            sequences.append(remaining[0])
            pos += 1
            continue

        seq_end = 1
        while seq_end <= len(remaining):
            candidate = remaining[:seq_end]
            if _is_complete_sequence(candidate) == "complete":
                sequences.append(candidate)
                pos += seq_end
                break
            seq_end += 1
        else:
            return sequences, remaining

    return sequences, ""


class StdinBuffer:
    """Accumulates decoded input and hands back complete sequences.

    Handles partial escape sequences that arrive across multiple reads. The
    caller decides when a pending remainder has waited long enough and calls
    :meth:`flush` to release it as-is (a lone Escape press, for example).
    """

    def __init__(self) -> None:
        self._buffer: str = ""

    def process(self, data: str) -> list[str]:
        """Feed input data and return the sequences it completes."""
        self._buffer += data
        sequences, self._buffer = _extract_complete_sequences(self._buffer)
        return sequences

    def flush(self) -> list[str]:
        if not self._buffer:
            return []
        sequences = [self._buffer]
        self._buffer = ""
        return sequences

    @property
    def pending(self) -> bool:
        return bool(self._buffer)
