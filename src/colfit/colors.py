"""Colour tokens wrapped around rendered cell text."""

from __future__ import annotations

import re

COLOR_RESET = "\x1b[0m"

# Named SGR sequences, the set accepted by the util-linux colour helpers
_COLOR_NAMES: dict[str, str] = {
    "black": "\x1b[30m",
    "red": "\x1b[31m",
    "green": "\x1b[32m",
    "brown": "\x1b[33m",
    "yellow": "\x1b[33m",
    "blue": "\x1b[34m",
    "magenta": "\x1b[35m",
    "cyan": "\x1b[36m",
    "gray": "\x1b[37m",
    "darkgray": "\x1b[1;30m",
    "lightred": "\x1b[1;31m",
    "lightgreen": "\x1b[1;32m",
    "lightblue": "\x1b[1;34m",
    "lightmagenta": "\x1b[1;35m",
    "lightcyan": "\x1b[1;36m",
    "lightgray": "\x1b[1;37m",
    "white": "\x1b[1;37m",
    "bold": "\x1b[1m",
    "halfbright": "\x1b[2m",
    "blink": "\x1b[5m",
    "reverse": "\x1b[7m",
}

_SGR_PARAMS_RE = re.compile(r"^[0-9]+(;[0-9]+)*$")


def color_sequence(color: str | None) -> str | None:
    """Resolve *color* to an SGR start sequence.

    Accepts a colour name (``"red"``, ``"bold"``), a complete escape
    sequence (returned unchanged), or a bare SGR parameter list such as
    ``"1;31"``. ``None`` and the empty string resolve to ``None``.

    Raises :class:`ValueError` for anything else.
    """
    if not color:
        return None
    if color.startswith("\x1b["):
        return color

    seq = _COLOR_NAMES.get(color.lower())
    if seq is not None:
        return seq

    if _SGR_PARAMS_RE.match(color):
        return f"\x1b[{color}m"

    raise ValueError(f"unknown color: {color!r}")


def color_names() -> list[str]:
    """Return the supported colour names, sorted."""
    return sorted(_COLOR_NAMES)
