"""Resolution of the column window aggregated by an extraction."""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from ..data.models import PivotTable, Window
from ..data.months import is_latest

logger = structlog.get_logger(__name__)


def search_month(header: Sequence[str], month: str) -> int | None:
    """Return the index of the first header cell equal to ``month``."""
    for column, label in enumerate(header):
        if label == month:
            return column
    return None


def resolve_boundaries(
    table: PivotTable,
    end_month: str,
    period_months: int,
    offset_months: int = 0,
) -> Window:
    """Compute the inclusive column window for an extraction.

    ``end_month`` is ``latest`` or a header label; an unknown label falls back to
    the latest month (flagged on the returned window). ``period_months`` of 0, or
    one at least as wide as the table, selects every available month.
    ``offset_months`` moves the end of the window that many columns earlier; when
    that leaves no data column, :meth:`Window.empty` is returned.
    """
    column_count = table.column_count
    last_column = column_count - 1
    fallback = False
    log = logger.bind(end_month=end_month, period=period_months, offset=offset_months)

    if is_latest(end_month):
        end_column = last_column
    else:
        found = search_month(table.header, end_month)
        if found is None or found == 0:
            log.warning("boundaries.fallback", reason="month not in dataset", latest=table.header[-1])
            end_column = last_column
            fallback = True
        else:
            end_column = found

    end_column -= offset_months
    if end_column <= 0:
        log.error("boundaries.offset_out_of_range", end_column=end_column)
        return Window.empty()

    if period_months >= column_count:
        period_months = 0

    if period_months == 0:
        start_column = 1
    else:
        start_column = max(end_column - period_months + 1, 1)

    window = Window(
        start_column=start_column,
        end_column=end_column,
        start_month=table.header[start_column],
        end_month=table.header[end_column],
        fallback=fallback,
    )
    log.debug(
        "boundaries.resolved",
        start_column=window.start_column,
        end_column=window.end_column,
        start_month=window.start_month,
        end_month=window.end_month,
    )
    return window


__all__ = ["resolve_boundaries", "search_month"]
