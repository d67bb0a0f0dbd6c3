"""colfit: width-negotiating table and tree printer for terminals."""

# Colour tokens
from colfit.colors import COLOR_RESET, color_names, color_sequence

# Errors and print status
from colfit.errors import (
    BufferAllocationError,
    ColfitError,
    PrintStatus,
    StreamNotSupportedError,
)

# Printing entry points
from colfit.printer import print_table, print_table_to_string, render_table

# Tree glyphs
from colfit.symbols import ASCII_SYMBOLS, DEFAULT_SYMBOLS, UTF8_SYMBOLS, Symbols

# Data model
from colfit.table import Cell, Column, ColumnFlag, Line, Table, TermForce

# Output destination
from colfit.terminal import OutputTerminal, Terminal, resolve_output_width

# Text utilities
from colfit.utils import (
    safe_encode,
    safe_width,
    truncate_to_width,
    visible_width,
)

__all__ = [
    "ASCII_SYMBOLS",
    "BufferAllocationError",
    "COLOR_RESET",
    "Cell",
    "ColfitError",
    "Column",
    "ColumnFlag",
    "DEFAULT_SYMBOLS",
    "Line",
    "OutputTerminal",
    "PrintStatus",
    "StreamNotSupportedError",
    "Symbols",
    "Table",
    "TermForce",
    "Terminal",
    "UTF8_SYMBOLS",
    "color_names",
    "color_sequence",
    "print_table",
    "print_table_to_string",
    "render_table",
    "resolve_output_width",
    "safe_encode",
    "safe_width",
    "truncate_to_width",
    "visible_width",
]
