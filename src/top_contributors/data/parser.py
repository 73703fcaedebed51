"""Parsers for comma-separated pivot table exports."""

from __future__ import annotations

import csv
import io
from collections.abc import Iterable

from .models import PivotTable


def _read_csv(text: str) -> Iterable[list[str]]:
    """Read a comma-separated payload into lists of cells.

    Empty lines are skipped. Rows made only of blank cells are kept unless they
    trail the last real row, so the checker still sees them mid-file.
    """
    buffer = io.StringIO(text)
    reader = csv.reader(buffer)
    pending: list[list[str]] = []
    for row in reader:
        if not row:
            continue
        if all(cell.strip() == "" for cell in row):
            pending.append(row)
            continue
        yield from pending
        pending.clear()
        yield row


def parse_rows(text: str) -> list[list[str]]:
    """Parse a pivot table export into a raw string grid (header first)."""
    return list(_read_csv(text))


def parse_pivot_table(text: str) -> PivotTable:
    """Parse a pivot table export into a :class:`PivotTable`."""
    return PivotTable.from_rows(parse_rows(text))


__all__ = ["parse_pivot_table", "parse_rows"]
