"""Tests for colour token resolution and tree symbols."""

from __future__ import annotations

import dataclasses

import pytest

from colfit.colors import COLOR_RESET, color_names, color_sequence
from colfit.symbols import ASCII_SYMBOLS, DEFAULT_SYMBOLS, UTF8_SYMBOLS, Symbols


class TestColorSequence:
    """Colour names, SGR parameters and raw sequences."""

    def test_named_color(self) -> None:
        assert color_sequence("red") == "\x1b[31m"

    def test_name_is_case_insensitive(self) -> None:
        assert color_sequence("LightBlue") == "\x1b[1;34m"

    def test_sgr_parameters(self) -> None:
        assert color_sequence("1;31") == "\x1b[1;31m"

    def test_sequence_passes_through(self) -> None:
        assert color_sequence("\x1b[38;5;208m") == "\x1b[38;5;208m"

    def test_none_and_empty(self) -> None:
        assert color_sequence(None) is None
        assert color_sequence("") is None

    def test_unknown_name_rejected(self) -> None:
        with pytest.raises(ValueError):
            color_sequence("no-such-color")

    def test_reset(self) -> None:
        assert COLOR_RESET == "\x1b[0m"

    def test_color_names_sorted(self) -> None:
        names = color_names()
        assert names == sorted(names)
        assert "bold" in names


class TestSymbols:
    """Tree glyph presets."""

    def test_default_is_utf8(self) -> None:
        assert DEFAULT_SYMBOLS is UTF8_SYMBOLS
        assert UTF8_SYMBOLS == Symbols(branch="├─", vert="│ ", right="└─")

    def test_ascii_preset(self) -> None:
        assert ASCII_SYMBOLS.branch == "|-"
        assert ASCII_SYMBOLS.vert == "| "
        assert ASCII_SYMBOLS.right == "`-"

    def test_symbols_are_immutable(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            UTF8_SYMBOLS.vert = "|"  # type: ignore[misc]
