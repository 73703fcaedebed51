"""Aggregation of pivot table windows into top-N rankings."""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from ..data.models import InputType, PivotTable, RankedEntry, RankedResult, Window
from ..errors import ExtractionError

logger = structlog.get_logger(__name__)


def totalize(table: PivotTable, window: Window) -> list[RankedEntry]:
    """Sum every identity's counts inside ``window``, in table order."""
    if window.is_empty:
        raise ExtractionError("no valid window to aggregate")
    # Window columns are 1-based; counts exclude the identity column.
    lower = window.start_column - 1
    upper = window.end_column
    return [
        RankedEntry(identity=identity, total=sum(values[lower:upper]))
        for identity, values in table.counts.items()
    ]


def select_top(entries: Sequence[RankedEntry], top_size: int) -> list[RankedEntry]:
    """Return the ``top_size`` largest totals plus any entries tied with the last one.

    Sorting is stable, so equal totals keep their input order.
    """
    if top_size < 1:
        raise ValueError("top_size must be a positive integer.")
    ranked = sorted(entries, key=lambda entry: entry.total, reverse=True)
    selected = ranked[:top_size]
    if len(selected) < top_size:
        return selected
    cutoff = selected[-1].total
    for entry in ranked[top_size:]:
        if entry.total != cutoff:
            break
        selected.append(entry)
    return selected


def extract(
    table: PivotTable,
    window: Window,
    top_size: int,
    *,
    input_type: InputType = InputType.SUBMITTERS,
) -> RankedResult:
    """Rank the identities of ``table`` by their activity within ``window``."""
    entries = select_top(totalize(table, window), top_size)
    logger.info(
        "ranking.extracted",
        start_month=window.start_month,
        end_month=window.end_month,
        start_column=window.start_column,
        end_column=window.end_column,
        requested=top_size,
        selected=len(entries),
        ex_aequo=max(len(entries) - top_size, 0),
    )
    return RankedResult(input_type=input_type, entries=entries, window=window)


__all__ = ["extract", "select_top", "totalize"]
