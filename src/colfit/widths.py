"""Column width calculation and negotiation.

:func:`count_column_width` measures one column over every line.
:func:`recount_widths` measures all columns and then grows or shrinks them
until the row fits the output width.
"""

from __future__ import annotations

import logging

from colfit.render import LineBuffer, line_get_data
from colfit.table import Column, Table
from colfit.utils import safe_width

logger = logging.getLogger(__name__)


def count_column_width(table: Table, column: Column, buf: LineBuffer) -> None:
    """Compute ``width``, ``width_max``, ``width_min`` and the average of *column*.

    For ``NOEXTREMES`` columns this may run twice. The first run caches the
    average width and flags the column as extreme when its widest cell is
    more than twice that average. Later runs skip those outlier cells when
    computing ``width``; they still count towards ``width_max``.
    """
    column.width = 0
    column.width_max = 0

    widths: list[int] = []
    for line in table.lines:
        data = line_get_data(table, line, column, buf)
        length = safe_width(data) if data is not None else 0
        if length is None:
            # broken encodings take no space
            length = 0

        if length > column.width_max:
            column.width_max = length

        if (
            column.is_extreme
            and column.width_avg is not None
            and length > column.width_avg * 2
        ):
            continue
        if column.is_noextremes:
            widths.append(length)
        if length > column.width:
            column.width = length

    if widths and column.width_avg is None:
        mean = sum(widths) // len(widths)
        if column.width_max > mean * 2:
            column.is_extreme = True
            typical = [w for w in widths if w <= mean * 2]
            column.width_avg = sum(typical) // len(typical)
        else:
            column.width_avg = mean

    header = column.header.data
    if header is not None:
        column.width_min = safe_width(header) or 0
    else:
        column.width_min = 0

    if column.width < column.width_min and not column.is_strict_width:
        column.width = column.width_min
    elif (
        column.width_hint >= 1
        and column.width < column.width_hint
        and column.width_min < column.width_hint
    ):
        column.width = int(column.width_hint)


def _total_width(table: Table) -> int:
    return sum(cl.width for cl in table.columns) + max(0, table.ncols - 1)


def _grow(table: Table, extremes: list[Column], width: int, target: int) -> int:
    """Hand out the free space between *width* and *target*; return the new total."""
    columns = table.columns

    for cl in extremes:
        add = target - width
        if cl.width + add > cl.width_max:
            add = max(0, cl.width_max - cl.width)
        cl.width += add
        width += add
        if width == target:
            return width

    if table.maxout:
        while width < target:
            for cl in columns:
                cl.width += 1
                width += 1
                if width == target:
                    break
    else:
        last = columns[-1]
        if not last.is_right:
            last.width += target - width
            width = target

    return width


def _shrink(table: Table, width: int, target: int) -> int:
    """Take columns down one step at a time until the row fits.

    The first phase only touches truncatable columns with a relative hint.
    Once that stops making progress the second phase also takes
    non-truncatable relative columns and truncatable absolute ones. Tree
    columns and columns at their minimum width are left alone. Returns the
    new total, which may still exceed *target*.
    """
    trunc_only = True

    while width > target:
        before = width

        for cl in table.columns:
            if width <= target:
                break
            if cl.is_tree:
                continue
            if cl.width <= cl.width_min or cl.width <= 0:
                continue
            if cl.width_hint >= 1:
                # absolute sizes only shrink when truncatable, in phase two
                if trunc_only or not cl.is_trunc:
                    continue
                cl.width -= 1
                width -= 1
            else:
                if trunc_only and not cl.is_trunc:
                    continue
                if cl.width > cl.width_hint * target:
                    cl.width -= 1
                    width -= 1

        if width == before:
            if trunc_only:
                trunc_only = False
            else:
                break

    return width


def recount_widths(table: Table, buf: LineBuffer) -> None:
    """Measure all columns and fit them into ``table.output_width``.

    Columns are measured for every formatted print. The fitting steps only
    run when ``table.is_term`` is set; other destinations get the natural
    widths.
    """
    columns = table.columns
    if not columns:
        return

    for cl in columns:
        count_column_width(table, cl, buf)
    width = _total_width(table)

    if not table.is_term:
        _log_widths(table, width)
        return

    target = table.output_width
    extremes = [cl for cl in columns if cl.is_extreme]

    # second pass over extreme columns, outliers excluded
    if width > target and extremes:
        still_extreme: list[Column] = []
        for cl in extremes:
            org_width = cl.width
            count_column_width(table, cl, buf)
            if org_width > cl.width:
                width -= org_width - cl.width
                still_extreme.append(cl)
            else:
                width += cl.width - org_width
        extremes = still_extreme

    if width < target:
        width = _grow(table, extremes, width, target)

    if width > target:
        width = _shrink(table, width, target)

    _log_widths(table, width)


def _log_widths(table: Table, width: int) -> None:
    if not logger.isEnabledFor(logging.DEBUG):
        return
    logger.debug("terminal: %d, output: %d", table.output_width, width)
    for cl in table.columns:
        hint = (
            int(cl.width_hint)
            if cl.width_hint >= 1
            else int(cl.width_hint * table.output_width)
        )
        logger.debug(
            "width: %s=%d [hint=%d, avg=%s, max=%d, extreme=%s]",
            cl.name,
            cl.width,
            hint,
            cl.width_avg,
            cl.width_max,
            "yes" if cl.is_extreme else "not",
        )
