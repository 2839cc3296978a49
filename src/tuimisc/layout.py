"""Automatic row/column assignment for form grids.

Lay children out left to right, top to bottom, in the order given, so a
form can be edited without renumbering every cell after it::

    label  field
    label  field

Column spans are respected. A child with ``force_row_break`` always starts
a new row. Children whose row or column was set by hand are left alone and
do not move the cursor.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from tuimisc.errors import ConfigurationError


@dataclass
class GridChild:
    """Placement data for one grid child. ``None`` means unset."""

    name: str = ""
    column_span: int = 1
    force_row_break: bool = False
    row: int | None = None
    column: int | None = None


def auto_set_cells(children: Iterable[Any], columns: int) -> int:
    """Assign ``row`` and ``column`` to every child that has neither.

    Children only need ``row``, ``column``, ``column_span`` and
    ``force_row_break`` attributes. Returns the number of rows used.
    """
    if columns < 1:
        raise ConfigurationError(f"grid needs at least one column, got {columns}")

    row = 0
    column = 0
    rows_used = 0
    for child in children:
        if child.row is not None or child.column is not None:
            continue

        span = max(1, getattr(child, "column_span", 1) or 1)
        if column != 0 and (column + span > columns or getattr(child, "force_row_break", False)):
            column = 0
            row += 1

        child.row = row
        child.column = column
        rows_used = row + 1

        column += span
        if column >= columns:
            column = 0
            row += 1

    return rows_used


def parse_child(spec: str) -> GridChild:
    """Parse a CLI child spec: a span, optionally suffixed with ``!`` to break.

    ``"2"`` spans two columns, ``"1!"`` starts a new row, ``"@1,0"`` is
    pinned by hand to row 1, column 0.
    """
    if spec.startswith("@"):
        try:
            row_text, col_text = spec[1:].split(",")
            return GridChild(name=spec, row=int(row_text), column=int(col_text))
        except ValueError:
            raise ConfigurationError(f"bad pinned cell {spec!r}, expected @ROW,COL") from None
    force = spec.endswith("!")
    span_text = spec[:-1] if force else spec
    try:
        span = int(span_text or "1")
    except ValueError:
        raise ConfigurationError(f"bad column span {spec!r}") from None
    if span < 1:
        raise ConfigurationError(f"column span must be positive, got {span}")
    return GridChild(name=spec, column_span=span, force_row_break=force)
