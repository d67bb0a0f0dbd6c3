"""Glyphs used to draw tree ancestry prefixes."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Symbols:
    """Tree-drawing glyphs.

    ``branch`` precedes a child that has later siblings, ``right`` precedes
    the last child, and ``vert`` continues an ancestor level that still has
    siblings below it. Each glyph should be two columns wide so that nested
    levels line up.
    """

    branch: str
    vert: str
    right: str


UTF8_SYMBOLS = Symbols(branch="├─", vert="│ ", right="└─")
ASCII_SYMBOLS = Symbols(branch="|-", vert="| ", right="`-")

DEFAULT_SYMBOLS = UTF8_SYMBOLS
