"""Loading pivot tables from disk and identity lookups."""

from __future__ import annotations

from pathlib import Path

import structlog

from .models import PivotTable
from .parser import parse_rows

logger = structlog.get_logger(__name__)


def read_rows(path: str | Path, *, encoding: str = "utf-8-sig") -> list[list[str]]:
    """Read the raw string grid from ``path``.

    Raises :class:`FileNotFoundError` when the path is missing and
    :class:`IsADirectoryError` when it names a directory.
    """
    source = Path(path)
    if source.is_dir():
        raise IsADirectoryError(f"{source} is a directory, not a pivot table file")
    text = source.read_text(encoding=encoding)
    rows = parse_rows(text)
    logger.debug("loader.rows_read", input=str(source), rows=len(rows))
    return rows


def load_pivot_table(path: str | Path, *, encoding: str = "utf-8-sig") -> PivotTable:
    """Load the pivot table stored at ``path``."""
    table = PivotTable.from_rows(read_rows(path, encoding=encoding))
    logger.debug(
        "loader.table_loaded",
        input=str(path),
        identities=len(table.counts),
        months=len(table.months),
    )
    return table


def find_row(table: PivotTable, identity: str) -> int | None:
    """Return the row index of ``identity`` in ``table`` (header is row 0), or ``None``."""
    return table.find_row(identity)


__all__ = ["find_row", "load_pivot_table", "read_rows"]
