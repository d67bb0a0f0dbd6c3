"""Table data model: columns, lines, cells.

Lines live in an arena owned by the :class:`Table`. Parent/child links are
stored as arena indexes, so walking a line's ancestry is a series of index
lookups rather than a chain of object back-references.
"""

from __future__ import annotations

import sys
from enum import Enum, IntFlag
from typing import IO, Iterator

from colfit.colors import color_sequence
from colfit.symbols import ASCII_SYMBOLS, DEFAULT_SYMBOLS, Symbols


class ColumnFlag(IntFlag):
    """Per-column style flags."""

    NONE = 0
    TRUNC = 1 << 0
    TREE = 1 << 1
    RIGHT = 1 << 2
    STRICTWIDTH = 1 << 3
    NOEXTREMES = 1 << 4


class TermForce(Enum):
    """Override for interactive-terminal detection."""

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


# ---------------------------------------------------------------------------
# Cell
# ---------------------------------------------------------------------------


class Cell:
    """One value of a line, with an optional colour override."""

    __slots__ = ("data", "_color")

    def __init__(
        self, data: str | bytes | None = None, color: str | None = None
    ) -> None:
        self.data = data
        self._color = color_sequence(color)

    @property
    def color(self) -> str | None:
        return self._color

    @color.setter
    def color(self, value: str | None) -> None:
        self._color = color_sequence(value)

    def __repr__(self) -> str:
        return f"Cell({self.data!r})"


# ---------------------------------------------------------------------------
# Column
# ---------------------------------------------------------------------------


class Column:
    """A table column: header, size hint, style flags and width state.

    ``width_hint`` below 1 is a fraction of the output width; 1 or more is an
    absolute minimum number of columns. The ``width*`` attributes and
    ``is_extreme`` are scratch state written by the width negotiation.
    ``width_avg`` and ``is_extreme`` survive between print calls until
    :meth:`reset_widths` is called.
    """

    def __init__(
        self,
        name: str | None = None,
        width_hint: float = 0,
        flags: ColumnFlag | int = ColumnFlag.NONE,
        color: str | None = None,
    ) -> None:
        if width_hint < 0:
            raise ValueError("width_hint must not be negative")
        self.header = Cell(name)
        self.width_hint = width_hint
        self.flags = ColumnFlag(flags)
        self._color = color_sequence(color)
        self.index = -1

        self.width = 0
        self.width_min = 0
        self.width_max = 0
        self.width_avg: int | None = None
        self.is_extreme = False

    @property
    def name(self) -> str | None:
        data = self.header.data
        if isinstance(data, bytes):
            return data.decode("utf-8", errors="replace")
        return data

    @property
    def color(self) -> str | None:
        return self._color

    @color.setter
    def color(self, value: str | None) -> None:
        self._color = color_sequence(value)

    @property
    def is_trunc(self) -> bool:
        return bool(self.flags & ColumnFlag.TRUNC)

    @property
    def is_tree(self) -> bool:
        return bool(self.flags & ColumnFlag.TREE)

    @property
    def is_right(self) -> bool:
        return bool(self.flags & ColumnFlag.RIGHT)

    @property
    def is_strict_width(self) -> bool:
        return bool(self.flags & ColumnFlag.STRICTWIDTH)

    @property
    def is_noextremes(self) -> bool:
        return bool(self.flags & ColumnFlag.NOEXTREMES)

    def reset_widths(self) -> None:
        """Forget all width state, including the cached average."""
        self.width = 0
        self.width_min = 0
        self.width_max = 0
        self.width_avg = None
        self.is_extreme = False

    def __repr__(self) -> str:
        return (
            f"Column({self.name!r}, index={self.index}, width={self.width}, "
            f"hint={self.width_hint}, flags={self.flags!r})"
        )


# ---------------------------------------------------------------------------
# Line
# ---------------------------------------------------------------------------


class Line:
    """A row of cells, index-aligned with the table's columns."""

    def __init__(self, ncells: int = 0, color: str | None = None) -> None:
        self.cells: list[Cell] = [Cell() for _ in range(ncells)]
        self._color = color_sequence(color)
        self.index = -1
        self.parent_index: int | None = None
        self.child_indexes: list[int] = []

    @property
    def color(self) -> str | None:
        return self._color

    @color.setter
    def color(self, value: str | None) -> None:
        self._color = color_sequence(value)

    @property
    def has_children(self) -> bool:
        return bool(self.child_indexes)

    def get_cell(self, n: int) -> Cell | None:
        if 0 <= n < len(self.cells):
            return self.cells[n]
        return None

    def set_data(self, column: Column | int, data: str | bytes | None) -> None:
        """Set the value of the cell at *column* (a column or its index)."""
        n = column.index if isinstance(column, Column) else column
        if n < 0:
            raise IndexError("column is not attached to a table")
        while len(self.cells) <= n:
            self.cells.append(Cell())
        self.cells[n].data = data

    def set_color(self, column: Column | int, color: str | None) -> None:
        """Set the colour override of the cell at *column*."""
        n = column.index if isinstance(column, Column) else column
        while len(self.cells) <= n:
            self.cells.append(Cell())
        self.cells[n].color = color


# ---------------------------------------------------------------------------
# Table
# ---------------------------------------------------------------------------


class Table:
    """Ordered columns plus a forest of lines, and the output settings.

    ``raw`` and ``export`` are mutually exclusive output modes; with neither
    set the table is printed column-formatted.
    """

    def __init__(self, stream: IO[str] | None = None) -> None:
        self._columns: list[Column] = []
        self._lines: list[Line] = []
        self._raw = False
        self._export = False

        self.no_headings = False
        self.colors_wanted = False
        self.maxout = False
        self.ascii = False

        self.stream = stream
        self.symbols: Symbols | None = None
        self.termreduce = 0
        self.termwidth: int | None = None
        self.termforce = TermForce.AUTO

        # Resolved at the start of every print call
        self.is_term = False
        self.output_width = 0

    # -- output modes -------------------------------------------------------

    @property
    def raw(self) -> bool:
        return self._raw

    @raw.setter
    def raw(self, value: bool) -> None:
        self._raw = value
        if value:
            self._export = False

    @property
    def export(self) -> bool:
        return self._export

    @export.setter
    def export(self, value: bool) -> None:
        self._export = value
        if value:
            self._raw = False

    @property
    def is_tree(self) -> bool:
        return any(cl.is_tree for cl in self._columns)

    def get_stream(self) -> IO[str]:
        return self.stream if self.stream is not None else sys.stdout

    def get_symbols(self) -> Symbols:
        if self.symbols is not None:
            return self.symbols
        return ASCII_SYMBOLS if self.ascii else DEFAULT_SYMBOLS

    # -- columns ------------------------------------------------------------

    @property
    def columns(self) -> tuple[Column, ...]:
        return tuple(self._columns)

    @property
    def ncols(self) -> int:
        return len(self._columns)

    def add_column(self, column: Column) -> Column:
        if column.index != -1:
            raise ValueError(f"column {column.name!r} already belongs to a table")
        if self._lines:
            raise ValueError("columns cannot be added once lines exist")
        column.index = len(self._columns)
        self._columns.append(column)
        return column

    def new_column(
        self,
        name: str | None = None,
        width_hint: float = 0,
        flags: ColumnFlag | int = ColumnFlag.NONE,
        color: str | None = None,
    ) -> Column:
        return self.add_column(Column(name, width_hint, flags, color))

    def get_column(self, n: int) -> Column:
        return self._columns[n]

    def is_last_column(self, column: Column) -> bool:
        return column.index == len(self._columns) - 1

    # -- lines --------------------------------------------------------------

    @property
    def lines(self) -> tuple[Line, ...]:
        return tuple(self._lines)

    @property
    def nlines(self) -> int:
        return len(self._lines)

    def add_line(self, line: Line, parent: Line | None = None) -> Line:
        if line.index != -1:
            raise ValueError("line already belongs to a table")
        while len(line.cells) < len(self._columns):
            line.cells.append(Cell())
        line.index = len(self._lines)
        self._lines.append(line)
        if parent is not None:
            self.add_child(parent, line)
        return line

    def new_line(self, parent: Line | None = None, color: str | None = None) -> Line:
        return self.add_line(Line(len(self._columns), color), parent)

    def get_line(self, n: int) -> Line:
        return self._lines[n]

    def add_child(self, parent: Line, child: Line) -> None:
        """Make *child* the last child of *parent*, detaching it first."""
        if not (self._owns(parent) and self._owns(child)):
            raise ValueError("both lines must belong to this table")
        if parent is child or child in self.ancestors(parent):
            raise ValueError("a line cannot be its own ancestor")
        old = self.parent_of(child)
        if old is not None:
            old.child_indexes.remove(child.index)
        child.parent_index = parent.index
        parent.child_indexes.append(child.index)

    def _owns(self, line: Line) -> bool:
        return 0 <= line.index < len(self._lines) and self._lines[line.index] is line

    def parent_of(self, line: Line) -> Line | None:
        if line.parent_index is None:
            return None
        return self._lines[line.parent_index]

    def children_of(self, line: Line) -> list[Line]:
        return [self._lines[i] for i in line.child_indexes]

    def roots(self) -> Iterator[Line]:
        return (ln for ln in self._lines if ln.parent_index is None)

    def is_last_child(self, line: Line) -> bool:
        parent = self.parent_of(line)
        if parent is None:
            return False
        return parent.child_indexes[-1] == line.index

    def ancestors(self, line: Line) -> list[Line]:
        """Return *line*'s ancestors ordered from the root down."""
        chain: list[Line] = []
        parent = self.parent_of(line)
        while parent is not None:
            chain.append(parent)
            parent = self.parent_of(parent)
        chain.reverse()
        return chain
