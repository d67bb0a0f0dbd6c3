"""Tests for colfit.utils -- width measurement and text encoding."""

from __future__ import annotations

from colfit.utils import (
    escape_nonblank,
    is_malformed,
    quote_value,
    safe_encode,
    safe_width,
    truncate_to_width,
    visible_width,
)


# ---------------------------------------------------------------------------
# visible_width
# ---------------------------------------------------------------------------


class TestVisibleWidth:
    """Measure the visible terminal width of text."""

    def test_plain_ascii(self) -> None:
        assert visible_width("hello") == 5

    def test_empty_string(self) -> None:
        assert visible_width("") == 0

    def test_color_codes_do_not_count(self) -> None:
        assert visible_width("\x1b[31mab\x1b[0m") == 2

    def test_wide_cjk_characters_count_as_two(self) -> None:
        assert visible_width("世") == 2

    def test_mixed_ascii_and_wide(self) -> None:
        assert visible_width("A世B") == 4

    def test_combining_mark_is_one_cluster(self) -> None:
        # e + combining acute accent
        assert visible_width("e\u0301") == 1

    def test_box_drawing_glyphs_are_narrow(self) -> None:
        assert visible_width("├─") == 2


# ---------------------------------------------------------------------------
# safe_encode / safe_width
# ---------------------------------------------------------------------------


class TestSafeEncode:
    """Escape control and undecodable content into a printable form."""

    def test_printable_text_unchanged(self) -> None:
        assert safe_encode("sda1") == ("sda1", 4)

    def test_none_is_empty(self) -> None:
        assert safe_encode(None) == ("", 0)

    def test_tab_is_hex_escaped(self) -> None:
        assert safe_encode("a\tb") == ("a\\x09b", 6)

    def test_newline_is_hex_escaped(self) -> None:
        text, width = safe_encode("a\nb")
        assert "\n" not in text
        assert text == "a\\x0ab"
        assert width == 6

    def test_invalid_utf8_bytes_are_escaped(self) -> None:
        assert safe_encode(b"ab\xff") == ("ab\\xff", 6)

    def test_valid_utf8_bytes_are_decoded(self) -> None:
        assert safe_encode("世".encode()) == ("世", 2)

    def test_wide_text_width_in_columns(self) -> None:
        text, width = safe_encode("世界")
        assert text == "世界"
        assert width == 4


class TestSafeWidth:
    """Display width of the escaped form, with a malformed sentinel."""

    def test_plain(self) -> None:
        assert safe_width("hello") == 5

    def test_none_and_empty(self) -> None:
        assert safe_width(None) == 0
        assert safe_width("") == 0

    def test_control_characters_counted_escaped(self) -> None:
        assert safe_width("a\x01") == 5

    def test_invalid_bytes_are_malformed(self) -> None:
        assert safe_width(b"ab\xff") is None

    def test_lone_surrogate_is_malformed(self) -> None:
        assert safe_width("a\udc80") is None

    def test_is_malformed(self) -> None:
        assert is_malformed(b"\xc3\x28") is True
        assert is_malformed(b"ok") is False
        assert is_malformed("ok") is False


# ---------------------------------------------------------------------------
# truncate_to_width
# ---------------------------------------------------------------------------


class TestTruncateToWidth:
    """Cut text at column boundaries without splitting glyphs."""

    def test_short_text_unchanged(self) -> None:
        assert truncate_to_width("hi", 10) == ("hi", 2)

    def test_cuts_ascii(self) -> None:
        assert truncate_to_width("hello", 3) == ("hel", 3)

    def test_zero_width_returns_empty(self) -> None:
        assert truncate_to_width("hello", 0) == ("", 0)

    def test_wide_glyph_not_split(self) -> None:
        assert truncate_to_width("a世b", 2) == ("a", 1)

    def test_result_never_exceeds_width(self) -> None:
        for w in range(0, 8):
            text, width = truncate_to_width("世界ab世", w)
            assert width <= w
            assert visible_width(text) == width

    def test_combining_cluster_kept_whole(self) -> None:
        assert truncate_to_width("e\u0301x", 1) == ("e\u0301", 1)


# ---------------------------------------------------------------------------
# raw / export forms
# ---------------------------------------------------------------------------


class TestEscapeNonblank:
    """Raw-mode values are single tokens."""

    def test_plain_unchanged(self) -> None:
        assert escape_nonblank("sda") == "sda"

    def test_space_escaped(self) -> None:
        assert escape_nonblank("a b") == "a\\x20b"

    def test_control_escaped(self) -> None:
        assert escape_nonblank("a\nb") == "a\\x0ab"

    def test_none_is_empty(self) -> None:
        assert escape_nonblank(None) == ""


class TestQuoteValue:
    """Export-mode values are double-quoted shell words."""

    def test_plain(self) -> None:
        assert quote_value("sda") == '"sda"'

    def test_empty(self) -> None:
        assert quote_value(None) == '""'

    def test_double_quote_escaped(self) -> None:
        assert quote_value('say "hi"') == '"say \\"hi\\""'

    def test_shell_specials_escaped(self) -> None:
        assert quote_value("$HOME`x`\\") == '"\\$HOME\\`x\\`\\\\"'

    def test_spaces_kept(self) -> None:
        assert quote_value("a b") == '"a b"'
