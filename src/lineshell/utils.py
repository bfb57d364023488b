"""Terminal text utilities: ANSI stripping and display width measurement."""

from __future__ import annotations

import re
import unicodedata

import grapheme
import wcwidth as _wcwidth

# CSI sequences: ESC[ <params> <final byte>
_STRIP_RE = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 512


def _cache_width(key: str, value: int) -> int:
    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    _width_cache[key] = value
    return value


def _grapheme_width(g: str) -> int:
    """Return the terminal display width of a single grapheme cluster.

    Control characters and lone combining marks take no columns, emoji
    sequences take two, everything else is delegated to wcwidth.
    """
    if len(g) == 1:
        cp = ord(g)
        if cp < 0x20 or (0x7F <= cp <= 0x9F):
            return 0
        return max(_wcwidth.wcwidth(g), 0)

    for ch in g:
        cp = ord(ch)
        if cp in (0xFE0F, 0x200D):  # VS16, ZWJ
            return 2
        if 0x1F1E6 <= cp <= 0x1F1FF or 0x1F3FB <= cp <= 0x1F3FF:
            return 2

    if ord(g[0]) >= 0x1F000:
        return 2

    cat = unicodedata.category(g[0])
    if cat.startswith("M") or cat == "Cf":
        return 0

    return max(_wcwidth.wcwidth(g[0]), 0)


def strip_ansi(text: str) -> str:
    return _STRIP_RE.sub("", text)


def visible_width(text: str) -> int:
    """Calculate the visible terminal width of *text*, ignoring ANSI codes."""
    if not text:
        return 0

    stripped = strip_ansi(text)
    if stripped.isascii() and stripped.isprintable():
        return len(stripped)

    cached = _width_cache.get(stripped)
    if cached is not None:
        return cached

    total = sum(_grapheme_width(g) for g in grapheme.graphemes(stripped))
    return _cache_width(stripped, total)
