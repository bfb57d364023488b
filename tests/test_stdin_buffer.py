"""Tests for lineshell.stdin_buffer.StdinBuffer."""

from __future__ import annotations

from lineshell.stdin_buffer import (
    ESC,
    StdinBuffer,
    _extract_complete_sequences,
    _is_complete_sequence,
)


# ---------------------------------------------------------------------------
# _is_complete_sequence
# ---------------------------------------------------------------------------


class TestIsCompleteSequence:
    def test_plain_text_is_not_escape(self) -> None:
        assert _is_complete_sequence("a") == "not-escape"

    def test_lone_escape_is_incomplete(self) -> None:
        assert _is_complete_sequence(ESC) == "incomplete"

    def test_csi_introducer_is_incomplete(self) -> None:
        assert _is_complete_sequence(f"{ESC}[") == "incomplete"

    def test_csi_with_parameters_is_incomplete(self) -> None:
        assert _is_complete_sequence(f"{ESC}[1;5") == "incomplete"

    def test_arrow_is_complete(self) -> None:
        assert _is_complete_sequence(f"{ESC}[D") == "complete"

    def test_kitty_sequence_is_complete(self) -> None:
        assert _is_complete_sequence(f"{ESC}[99;5u") == "complete"

    def test_any_csi_final_byte_completes(self) -> None:
        assert _is_complete_sequence(f"{ESC}[M") == "complete"

    def test_ss3_needs_final_byte(self) -> None:
        assert _is_complete_sequence(f"{ESC}O") == "incomplete"
        assert _is_complete_sequence(f"{ESC}OD") == "complete"

    def test_meta_key_is_complete(self) -> None:
        assert _is_complete_sequence(f"{ESC}b") == "complete"

    def test_osc_needs_terminator(self) -> None:
        assert _is_complete_sequence(f"{ESC}]0;title") == "incomplete"
        assert _is_complete_sequence(f"{ESC}]0;title\x07") == "complete"


# ---------------------------------------------------------------------------
# _extract_complete_sequences
# ---------------------------------------------------------------------------


class TestExtractCompleteSequences:
    def test_plain_characters_split_individually(self) -> None:
        assert _extract_complete_sequences("abc") == (["a", "b", "c"], "")

    def test_mixed_text_and_escape(self) -> None:
        seqs, rest = _extract_complete_sequences(f"a{ESC}[Db")
        assert seqs == ["a", f"{ESC}[D", "b"]
        assert rest == ""

    def test_trailing_partial_escape_is_kept(self) -> None:
        seqs, rest = _extract_complete_sequences(f"ab{ESC}[")
        assert seqs == ["a", "b"]
        assert rest == f"{ESC}["

    def test_back_to_back_escapes(self) -> None:
        seqs, rest = _extract_complete_sequences(f"{ESC}[C{ESC}[D")
        assert seqs == [f"{ESC}[C", f"{ESC}[D"]
        assert rest == ""


# ---------------------------------------------------------------------------
# StdinBuffer
# ---------------------------------------------------------------------------


class TestStdinBuffer:
    def test_initial_state(self) -> None:
        buf = StdinBuffer()
        assert not buf.pending

    def test_complete_input_is_returned(self) -> None:
        buf = StdinBuffer()
        assert buf.process("hi\r") == ["h", "i", "\r"]
        assert not buf.pending

    def test_sequence_split_across_chunks(self) -> None:
        buf = StdinBuffer()
        assert buf.process(f"x{ESC}") == ["x"]
        assert buf.pending
        assert buf.process("[") == []
        assert buf.process("D") == [f"{ESC}[D"]
        assert not buf.pending

    def test_flush_releases_partial_sequence(self) -> None:
        buf = StdinBuffer()
        buf.process(ESC)
        assert buf.flush() == [ESC]
        assert not buf.pending

    def test_flush_when_empty(self) -> None:
        assert StdinBuffer().flush() == []
