"""Structural validation of pivot tables before they are ranked."""

from __future__ import annotations

import re
from collections.abc import Sequence
from pathlib import Path

import structlog

from ..errors import TableFormatError
from .loader import read_rows

HEADER_MONTH_PATTERN = re.compile(r"[0-9]{4}-(0[1-9]|1[0-2])")
# GitHub handles, bot accounts ("dependabot[bot]") and placeholders such as "[deleted]".
IDENTITY_PATTERN = re.compile(r"[A-Za-z0-9._\-\[\]]+")
COUNT_PATTERN = re.compile(r"[0-9]+")

logger = structlog.get_logger(__name__)


def _check_header(header: Sequence[str]) -> None:
    if len(header) < 2:
        raise TableFormatError("header must hold at least one month column", line=1)
    previous = ""
    for column, label in enumerate(header[1:], start=1):
        if HEADER_MONTH_PATTERN.fullmatch(label) is None:
            raise TableFormatError(
                f"column {column} header {label!r} is not a YYYY-MM month", line=1
            )
        if label <= previous:
            raise TableFormatError(
                f"column {column} header {label!r} does not follow {previous!r}", line=1
            )
        previous = label


def _check_count(cell: str, *, line: int, column: int) -> None:
    if COUNT_PATTERN.fullmatch(cell) is not None:
        return
    if cell.startswith("-") and COUNT_PATTERN.fullmatch(cell[1:]) is not None:
        raise TableFormatError(f"column {column} value {cell} is negative", line=line)
    # int() would also take "+3", "1_000", padded or non-ASCII digits.
    raise TableFormatError(f"column {column} value {cell!r} is not an integer", line=line)


def check_table(rows: Sequence[Sequence[str]]) -> None:
    """Validate a raw pivot table grid, raising :class:`TableFormatError` on the first problem.

    The checks are: a header plus at least one identity row; header cells after
    the first are ascending ``YYYY-MM`` labels; every row is as wide as the
    header; identities are non-empty, well-formed and unique; counts are
    non-negative integers.
    """
    if len(rows) < 2:
        raise TableFormatError("pivot table needs a header and at least one data row")
    header = rows[0]
    _check_header(header)
    width = len(header)
    seen: set[str] = set()
    for line, row in enumerate(rows[1:], start=2):
        if len(row) != width:
            raise TableFormatError(
                f"found {len(row)} columns while expecting {width}", line=line
            )
        identity = row[0]
        if not identity:
            raise TableFormatError("identity column is empty", line=line)
        if IDENTITY_PATTERN.fullmatch(identity) is None:
            raise TableFormatError(f"invalid identity {identity!r}", line=line)
        if identity in seen:
            raise TableFormatError(f"duplicate identity {identity!r}", line=line)
        seen.add(identity)
        for column, cell in enumerate(row[1:], start=1):
            _check_count(cell, line=line, column=column)


def check_file(path: str | Path) -> int:
    """Validate the pivot table stored at ``path`` and return its identity count."""
    rows = read_rows(path)
    check_table(rows)
    logger.debug("check.passed", input=str(path), identities=len(rows) - 1, months=len(rows[0]) - 1)
    return len(rows) - 1


__all__ = ["check_file", "check_table"]
