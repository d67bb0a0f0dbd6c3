"""Output destination queries: interactive detection and column count.

Provides a ``Terminal`` protocol and a concrete ``OutputTerminal``
implementation backed by the table's output stream, plus
:func:`resolve_output_width`, which turns the table's settings into the
width target used by the negotiation.
"""

from __future__ import annotations

import logging
import os
from typing import IO, Protocol

from colfit.table import Table, TermForce

logger = logging.getLogger(__name__)

DEFAULT_COLUMNS = 80


# ---------------------------------------------------------------------------
# Terminal protocol
# ---------------------------------------------------------------------------


class Terminal(Protocol):
    """Interface for querying an output destination."""

    @property
    def is_tty(self) -> bool: ...

    @property
    def columns(self) -> int: ...


# ---------------------------------------------------------------------------
# OutputTerminal implementation
# ---------------------------------------------------------------------------


class OutputTerminal:
    """Terminal queries for a writable text stream.

    ``columns`` asks the kernel for the window size of the stream's file
    descriptor, then falls back to the ``COLUMNS`` environment variable, then
    to 80.
    """

    def __init__(self, stream: IO[str]) -> None:
        self._stream = stream

    def _fileno(self) -> int | None:
        try:
            return self._stream.fileno()
        except (AttributeError, OSError, ValueError):
            return None

    @property
    def is_tty(self) -> bool:
        try:
            return bool(self._stream.isatty())
        except (AttributeError, ValueError):
            return False

    @property
    def columns(self) -> int:
        fd = self._fileno()
        if fd is not None:
            try:
                cols = os.get_terminal_size(fd).columns
            except (ValueError, OSError):
                cols = 0
            if cols > 0:
                return cols
        return _columns_from_env()


def _columns_from_env() -> int:
    value = os.environ.get("COLUMNS", "")
    try:
        cols = int(value)
    except ValueError:
        return DEFAULT_COLUMNS
    return cols if cols > 0 else DEFAULT_COLUMNS


# ---------------------------------------------------------------------------
# Output width
# ---------------------------------------------------------------------------


def resolve_output_width(
    table: Table, terminal: Terminal | None = None
) -> tuple[bool, int]:
    """Return ``(is_term, width)`` for printing *table*.

    ``table.termforce`` overrides the interactive check and
    ``table.termwidth`` overrides the queried size. Non-interactive
    destinations default to 80 columns. ``table.termreduce`` is subtracted
    and the result is never below 1.
    """
    if terminal is None:
        terminal = OutputTerminal(table.get_stream())

    if table.termforce is TermForce.ALWAYS:
        is_term = True
    elif table.termforce is TermForce.NEVER:
        is_term = False
    else:
        is_term = terminal.is_tty

    if table.termwidth is not None and table.termwidth > 0:
        width = table.termwidth
    elif is_term:
        width = terminal.columns
    else:
        width = DEFAULT_COLUMNS

    width = max(1, width - table.termreduce)
    logger.debug("output width %d (terminal=%s)", width, is_term)
    return (is_term, width)
