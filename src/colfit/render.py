"""Cell rendering: tree prefixes, truncation, padding, separators."""

from __future__ import annotations

import io
from typing import IO

from colfit.colors import COLOR_RESET
from colfit.errors import BufferAllocationError
from colfit.symbols import Symbols
from colfit.table import Cell, Column, Line, Table
from colfit.utils import (
    as_text,
    escape_nonblank,
    quote_value,
    safe_encode,
    truncate_to_width,
)


class LineBuffer:
    """Scratch text buffer shared by every cell of one print call.

    The contents are cleared before each use.
    """

    def __init__(self) -> None:
        try:
            self._buf = io.StringIO()
        except MemoryError as exc:
            raise BufferAllocationError("cannot allocate line buffer") from exc

    def reset(self) -> None:
        self._buf.seek(0)
        self._buf.truncate(0)

    def write(self, text: str) -> None:
        self._buf.write(text)

    def getvalue(self) -> str:
        return self._buf.getvalue()


# ---------------------------------------------------------------------------
# Tree text
# ---------------------------------------------------------------------------


def ascii_art(table: Table, line: Line, symbols: Symbols) -> str:
    """Return the ancestry prefix drawn for the children of *line*.

    One segment per non-root line from the root down to *line*: blanks if
    that line is the last child of its parent, the vertical glyph otherwise.
    """
    chain = table.ancestors(line)
    chain.append(line)
    return "".join(
        "  " if table.is_last_child(ln) else symbols.vert
        for ln in chain
        if ln.parent_index is not None
    )


def line_get_data(
    table: Table, line: Line, column: Column, buf: LineBuffer
) -> str | None:
    """Return the text shown for *line* in *column*, or ``None`` if unset.

    Tree columns get the ancestry prefix and the line's own connector.
    """
    buf.reset()

    cell = line.get_cell(column.index)
    data = cell.data if cell is not None else None
    if data is None:
        return None

    text = as_text(data)
    if not column.is_tree:
        buf.write(text)
        return buf.getvalue()

    parent = table.parent_of(line)
    if parent is not None:
        symbols = table.get_symbols()
        buf.write(ascii_art(table, parent, symbols))
        if table.is_last_child(line):
            buf.write(symbols.right)
        else:
            buf.write(symbols.branch)
    buf.write(text)
    return buf.getvalue()


# ---------------------------------------------------------------------------
# Cell output
# ---------------------------------------------------------------------------


def _resolve_color(
    table: Table, column: Column, line: Line | None, cell: Cell | None
) -> str | None:
    if not table.colors_wanted:
        return None
    if cell is not None and cell.color:
        return cell.color
    if line is not None and line.color:
        return line.color
    return column.color


def _write_colored(out: IO[str], text: str, color: str | None) -> None:
    if color:
        out.write(color)
    out.write(text)
    if color:
        out.write(COLOR_RESET)


def print_data(
    table: Table,
    column: Column,
    line: Line | None,
    cell: Cell | None,
    data: str | None,
) -> None:
    """Write one cell of one row to the table's stream.

    *line* is ``None`` for the header row.
    """
    out = table.get_stream()
    last = table.is_last_column(column)
    if data is None:
        data = ""

    # raw mode
    if table.raw:
        out.write(escape_nonblank(data))
        if not last:
            out.write(" ")
        return

    # NAME=value mode
    if table.export:
        out.write(f"{column.name or ''}=")
        out.write(quote_value(data))
        if not last:
            out.write(" ")
        return

    color = _resolve_color(table, column, line, cell)

    # lengths are display columns, not characters
    text, length = safe_encode(data)
    width = column.width

    if last and length < width and not table.maxout:
        width = length

    if length > width and column.is_trunc:
        text, length = truncate_to_width(text, width)

    if text:
        if column.is_right:
            xw = column.width
            _write_colored(out, " " * max(0, xw - length) + text, color)
            if length < xw:
                length = xw
        else:
            _write_colored(out, text, color)

    if length < width:
        out.write(" " * (width - length))

    if last:
        return

    if length > width and not column.is_trunc:
        out.write("\n")
        for x in table.columns[: column.index + 1]:
            out.write(" " * max(x.width, 1) + " ")
    else:
        out.write(" ")


def print_line(table: Table, line: Line, buf: LineBuffer) -> None:
    """Write every cell of *line* followed by a newline."""
    for column in table.columns:
        print_data(
            table,
            column,
            line,
            line.get_cell(column.index),
            line_get_data(table, line, column, buf),
        )
    table.get_stream().write("\n")


def print_header(table: Table, buf: LineBuffer) -> None:
    """Write the header row unless headings are suppressed or there are no lines."""
    if table.no_headings or table.export or table.nlines == 0:
        return

    for column in table.columns:
        buf.reset()
        header = column.header.data
        if header is not None:
            buf.write(as_text(header))
        print_data(table, column, None, column.header, buf.getvalue())
    table.get_stream().write("\n")
