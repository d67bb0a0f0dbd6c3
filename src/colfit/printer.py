"""Table printing entry points.

:func:`print_table` writes a table to its stream; :func:`print_table_to_string`
renders it into memory instead. Both report failures through a
:class:`~colfit.errors.PrintStatus` rather than raising.
"""

from __future__ import annotations

import io
import logging
from typing import Callable

from colfit.errors import ColfitError, PrintStatus, StreamNotSupportedError
from colfit.render import LineBuffer, print_header, print_line
from colfit.table import Line, Table
from colfit.terminal import Terminal, resolve_output_width
from colfit.widths import recount_widths

logger = logging.getLogger(__name__)


def _print_flat(table: Table, buf: LineBuffer) -> None:
    print_header(table, buf)
    for line in table.lines:
        print_line(table, line, buf)


def _print_tree(table: Table, buf: LineBuffer) -> None:
    print_header(table, buf)
    stack: list[Line] = list(table.roots())
    stack.reverse()
    while stack:
        line = stack.pop()
        print_line(table, line, buf)
        if line.has_children:
            # last child first, so the first child is printed next
            stack.extend(reversed(table.children_of(line)))


def render_table(table: Table, terminal: Terminal | None = None) -> None:
    """Print *table*, raising :class:`ColfitError` on failure.

    Resolves the output width, negotiates column widths for formatted
    output, then prints the header and the lines (flat or as a tree).
    """
    table.is_term, table.output_width = resolve_output_width(table, terminal)

    buf = LineBuffer()

    if not (table.raw or table.export):
        recount_widths(table, buf)

    if table.is_tree:
        _print_tree(table, buf)
    else:
        _print_flat(table, buf)


def print_table(table: Table, terminal: Terminal | None = None) -> PrintStatus:
    """Print *table* to its stream.

    Returns :attr:`PrintStatus.OK`, or :attr:`PrintStatus.NO_MEMORY` if the
    line buffer cannot be allocated. Output already written stays written.
    """
    try:
        render_table(table, terminal)
    except ColfitError as exc:
        logger.warning("cannot print table: %s", exc)
        return exc.status
    return PrintStatus.OK


def print_table_to_string(
    table: Table,
    stream_factory: Callable[[], io.StringIO] | None = io.StringIO,
    terminal: Terminal | None = None,
) -> tuple[PrintStatus, str | None]:
    """Print *table* into an in-memory stream and return its text.

    *stream_factory* creates the in-memory stream; when it is ``None`` or
    yields a stream that cannot be written, the result is
    ``(PrintStatus.NOT_SUPPORTED, None)``. The table's own stream is
    restored afterwards.
    """
    try:
        stream = _open_memory_stream(stream_factory)
    except StreamNotSupportedError as exc:
        logger.warning("cannot print table to string: %s", exc)
        return (exc.status, None)

    saved = table.stream
    table.stream = stream
    try:
        status = print_table(table, terminal)
    finally:
        table.stream = saved

    if status is not PrintStatus.OK:
        return (status, None)
    return (status, stream.getvalue())


def _open_memory_stream(
    stream_factory: Callable[[], io.StringIO] | None,
) -> io.StringIO:
    if stream_factory is None:
        raise StreamNotSupportedError("no in-memory stream available")
    stream = stream_factory()
    if not stream.writable() or not hasattr(stream, "getvalue"):
        raise StreamNotSupportedError(
            f"{type(stream).__name__} is not a writable in-memory stream"
        )
    return stream
