"""Text utilities: display-width measurement, safe encoding, truncation.

Provides functions for measuring the display width of cell text in terminal
columns, producing printable-safe copies of arbitrary text, cutting text at
column boundaries without splitting glyphs, and the raw/export quoting forms.
"""

from __future__ import annotations

import re
import unicodedata

import grapheme
import wcwidth as _wcwidth


# ---------------------------------------------------------------------------
# Regex patterns
# ---------------------------------------------------------------------------

# CSI sequences: ESC[ <params> <final byte>
_ANSI_RE = re.compile(r"\x1b\[[0-9;]*[mGKHJ]")
# Lone surrogates, including the U+DC80..U+DCFF range used by surrogateescape
_SURROGATE_RE = re.compile("[\ud800-\udfff]")

# Characters that are never written verbatim
_UNPRINTABLE_CATEGORIES = frozenset({"Cc", "Cs", "Co", "Cn", "Zl", "Zp"})

# Characters backslash-escaped inside export values
_EXPORT_SPECIAL = frozenset('"`$\\')

# ---------------------------------------------------------------------------
# Width cache (capped at 512 entries)
# ---------------------------------------------------------------------------

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 512


def _cache_width(key: str, value: int) -> int:
    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    _width_cache[key] = value
    return value


# ---------------------------------------------------------------------------
# Grapheme width
# ---------------------------------------------------------------------------

def _grapheme_width(g: str) -> int:
    """Return the terminal display width of a single grapheme cluster.

    Rules:
    1. Zero-width characters (control, combining marks, etc.) -> 0
    2. Emoji (multi-codepoint, contains VS16 U+FE0F, ZWJ sequences, etc.) -> 2
    3. Otherwise delegate to wcwidth for the first meaningful codepoint.
    """
    if not g:
        return 0

    # Single codepoint fast path
    if len(g) == 1:
        cp = ord(g)
        if cp < 0x20 or (0x7F <= cp <= 0x9F):
            return 0
        w = _wcwidth.wcwidth(g)
        return max(w, 0)

    codepoints = list(g)

    # VS16, ZWJ, skin tone modifiers and regional indicators mark emoji
    for ch in codepoints:
        cp = ord(ch)
        if cp == 0xFE0F or cp == 0x200D:
            return 2
        if 0x1F3FB <= cp <= 0x1F3FF:
            return 2
        if 0x1F1E6 <= cp <= 0x1F1FF:
            return 2

    first_cp = ord(codepoints[0])
    if first_cp >= 0x1F000:
        return 2
    if 0x2600 <= first_cp <= 0x27BF:
        return 2

    cat = unicodedata.category(codepoints[0])
    if cat.startswith("M") or cat == "Cf":
        return 0

    w = _wcwidth.wcwidth(codepoints[0])
    return max(w, 0)


def _is_unprintable(ch: str) -> bool:
    return unicodedata.category(ch) in _UNPRINTABLE_CATEGORIES


def _hex_escape(ch: str) -> str:
    """Expand *ch* to one ``\\xHH`` escape per UTF-8 byte."""
    cp = ord(ch)
    if 0xDC80 <= cp <= 0xDCFF:
        # surrogateescape stand-in for an undecodable byte
        return f"\\x{cp - 0xDC00:02x}"
    raw = ch.encode("utf-8", errors="surrogatepass")
    return "".join(f"\\x{b:02x}" for b in raw)


def as_text(data: str | bytes) -> str:
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="surrogateescape")
    return data


def is_malformed(data: str | bytes) -> bool:
    """Return ``True`` if *data* is not a well-formed UTF-8 / Unicode string."""
    if isinstance(data, bytes):
        try:
            data.decode("utf-8")
        except UnicodeDecodeError:
            return True
        return False
    return _SURROGATE_RE.search(data) is not None


# ---------------------------------------------------------------------------
# visible_width
# ---------------------------------------------------------------------------

def visible_width(text: str) -> int:
    """Calculate the visible terminal width of *text*.

    * Strips colour escape sequences.
    * Uses a fast ASCII path when possible.
    * Caches results for non-ASCII strings.
    """
    if not text:
        return 0

    stripped = _ANSI_RE.sub("", text)
    if not stripped:
        return 0

    if stripped.isascii() and stripped.isprintable():
        return len(stripped)

    cached = _width_cache.get(stripped)
    if cached is not None:
        return cached

    total = 0
    for g in grapheme.graphemes(stripped):
        total += _grapheme_width(g)

    return _cache_width(stripped, total)


# ---------------------------------------------------------------------------
# safe_encode / safe_width
# ---------------------------------------------------------------------------

def safe_encode(data: str | bytes | None) -> tuple[str, int]:
    """Return a printable-safe copy of *data* and its display width.

    Control and non-printable characters, lone surrogates and bytes that are
    not valid UTF-8 are expanded to ``\\xHH`` escapes, so the result always
    fits on one line and can be measured.
    """
    if not data:
        return ("", 0)

    text = as_text(data)
    if text.isascii() and text.isprintable():
        return (text, len(text))

    parts: list[str] = []
    for g in grapheme.graphemes(text):
        if len(g) == 1:
            if _is_unprintable(g):
                parts.append(_hex_escape(g))
            else:
                parts.append(g)
            continue
        if any(_is_unprintable(ch) for ch in g):
            parts.append("".join(
                _hex_escape(ch) if _is_unprintable(ch) else ch for ch in g
            ))
        else:
            parts.append(g)

    encoded = "".join(parts)
    return (encoded, visible_width(encoded))


def safe_width(data: str | bytes | None) -> int | None:
    """Return the display width of the escaped form of *data*.

    Returns ``None`` when *data* is malformed (invalid UTF-8 bytes or lone
    surrogates in a string).
    """
    if not data:
        return 0
    if is_malformed(data):
        return None
    return safe_encode(data)[1]


# ---------------------------------------------------------------------------
# truncate_to_width
# ---------------------------------------------------------------------------

def truncate_to_width(text: str, max_width: int) -> tuple[str, int]:
    """Cut *text* to fit within *max_width* columns.

    The text is cut at grapheme boundaries, so a double-width glyph that
    would straddle the limit is dropped entirely. Returns the prefix and its
    display width.
    """
    if max_width <= 0 or not text:
        return ("", 0)

    result: list[str] = []
    cols = 0
    for g in grapheme.graphemes(text):
        w = _grapheme_width(g)
        if cols + w > max_width:
            break
        result.append(g)
        cols += w

    return ("".join(result), cols)


# ---------------------------------------------------------------------------
# Raw and export forms
# ---------------------------------------------------------------------------

def escape_nonblank(data: str | bytes | None) -> str:
    """Return *data* with blanks and non-printable characters hex-escaped.

    Used by raw output, where a single space separates columns.
    """
    if not data:
        return ""
    text = as_text(data)
    return "".join(
        _hex_escape(ch) if ch in " \t" or _is_unprintable(ch) else ch
        for ch in text
    )


def quote_value(data: str | bytes | None) -> str:
    """Return *data* as a double-quoted shell word for ``NAME=value`` output."""
    text = as_text(data) if data else ""
    parts = ['"']
    for ch in text:
        if ch in _EXPORT_SPECIAL:
            parts.append("\\" + ch)
        elif _is_unprintable(ch):
            parts.append(_hex_escape(ch))
        else:
            parts.append(ch)
    parts.append('"')
    return "".join(parts)
