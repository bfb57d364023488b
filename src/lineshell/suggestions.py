"""Prefix suggestions drawn from the entries of a directory."""

from __future__ import annotations

import logging
import os
from bisect import bisect_left
from typing import Iterable

from lineshell.errors import DirectoryListingError

logger = logging.getLogger(__name__)


class SuggestionIndex:
    """Immutable, lexicographically ordered set of completion candidates.

    Backed by a sorted tuple; :meth:`first_at_or_after` is a binary search,
    so a prefix lookup costs O(log n) instead of a scan over every entry.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Iterable[str] = ()) -> None:
        self._entries: tuple[str, ...] = tuple(sorted(set(entries)))

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def first_at_or_after(self, value: str) -> str | None:
        """Return the smallest entry ``>= value``, or None past the end."""
        i = bisect_left(self._entries, value)
        if i == len(self._entries):
            return None
        return self._entries[i]

    def best_match(self, prefix: str) -> str | None:
        """Return the smallest entry starting with *prefix*, or None.

        Every entry starting with *prefix* sorts at or after *prefix*, and
        the first entry at or after it is the smallest of them, so only one
        candidate has to be checked.
        """
        candidate = self.first_at_or_after(prefix)
        if candidate is not None and candidate.startswith(prefix):
            return candidate
        return None


def list_entries(path: str | os.PathLike[str]) -> set[str]:
    """Return the names of the entries in *path*.

    Names that are not valid UTF-8 are left out, since they cannot be drawn
    on the terminal. Raises :class:`DirectoryListingError` if the directory
    cannot be read.
    """
    names: set[str] = set()
    try:
        with os.scandir(path) as it:
            for entry in it:
                try:
                    entry.name.encode("utf-8")
                except UnicodeEncodeError:
                    logger.debug("Skipping non-UTF-8 entry %r", entry.name)
                    continue
                names.add(entry.name)
    except OSError as e:
        raise DirectoryListingError(f"cannot list {os.fspath(path)!r}: {e}") from e
    logger.info("Indexed %d entries from %s", len(names), os.fspath(path))
    return names
