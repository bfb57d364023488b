"""Tests for lineshell.suggestions."""

from __future__ import annotations

import os
import random

import pytest

from lineshell.errors import DirectoryListingError
from lineshell.keys import KeyEvent
from lineshell.readline import Readline
from lineshell.suggestions import SuggestionIndex, list_entries


class TestSuggestionIndex:
    def test_entries_are_sorted_and_unique(self) -> None:
        index = SuggestionIndex(["mod.rs", "main.rs", "makefile", "main.rs"])
        assert list(index) == ["main.rs", "makefile", "mod.rs"]
        assert len(index) == 3

    def test_first_at_or_after_is_inclusive(self) -> None:
        index = SuggestionIndex(["b", "d"])
        assert index.first_at_or_after("b") == "b"
        assert index.first_at_or_after("c") == "d"
        assert index.first_at_or_after("a") == "b"
        assert index.first_at_or_after("e") is None

    def test_empty_index(self) -> None:
        index = SuggestionIndex()
        assert index.first_at_or_after("x") is None
        assert index.best_match("x") is None


class TestBestMatch:
    def test_smallest_matching_candidate(self) -> None:
        index = SuggestionIndex(["main.rs", "makefile", "mod.rs"])
        assert index.best_match("ma") == "main.rs"
        assert index.best_match("mak") == "makefile"
        assert index.best_match("mo") == "mod.rs"

    def test_exact_match_is_returned(self) -> None:
        index = SuggestionIndex(["main.rs", "main.rs.bak"])
        assert index.best_match("main.rs") == "main.rs"

    def test_no_match(self) -> None:
        index = SuggestionIndex(["main.rs", "makefile"])
        assert index.best_match("mx") is None
        assert index.best_match("z") is None

    def test_case_sensitive_ordering(self) -> None:
        index = SuggestionIndex(["Makefile", "main.rs"])
        assert index.best_match("M") == "Makefile"
        assert index.best_match("m") == "main.rs"

    def test_matches_linear_scan(self) -> None:
        rng = random.Random(7)
        alphabet = "ab.c"
        entries = {
            "".join(rng.choice(alphabet) for _ in range(rng.randint(1, 5)))
            for _ in range(60)
        }
        index = SuggestionIndex(entries)
        for _ in range(300):
            prefix = "".join(rng.choice(alphabet) for _ in range(rng.randint(1, 4)))
            matching = [e for e in entries if e.startswith(prefix)]
            expected = min(matching) if matching else None
            assert index.best_match(prefix) == expected


class TestListEntries:
    def test_lists_files_and_directories(self, tmp_path) -> None:
        (tmp_path / "main.rs").write_text("")
        (tmp_path / "Makefile").write_text("")
        (tmp_path / "src").mkdir()
        assert list_entries(tmp_path) == {"main.rs", "Makefile", "src"}

    def test_hidden_entries_are_included(self, tmp_path) -> None:
        (tmp_path / ".gitignore").write_text("")
        assert list_entries(str(tmp_path)) == {".gitignore"}

    def test_non_utf8_names_are_skipped(self, tmp_path) -> None:
        (tmp_path / "main.rs").write_text("")
        try:
            open(os.path.join(os.fsencode(tmp_path), b"ma\xff"), "w").close()
        except OSError:
            pytest.skip("filesystem rejects non-UTF-8 names")
        entries = list_entries(tmp_path)
        assert entries == {"main.rs"}
        editor = Readline(SuggestionIndex(entries))
        editor.apply(KeyEvent.of_char("m"))
        assert editor.suggestion == "main.rs"
        editor.render().encode("utf-8")

    def test_empty_directory(self, tmp_path) -> None:
        assert list_entries(tmp_path) == set()

    def test_missing_directory_raises(self, tmp_path) -> None:
        with pytest.raises(DirectoryListingError):
            list_entries(tmp_path / "missing")

    def test_file_instead_of_directory_raises(self, tmp_path) -> None:
        path = tmp_path / "file.txt"
        path.write_text("")
        with pytest.raises(DirectoryListingError):
            list_entries(path)
