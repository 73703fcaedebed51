"""Full monthly history of ranked identities, with one chart per person."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import structlog

from ..data.models import InputType, PivotTable
from ..errors import IdentityNotFoundError
from .plots import plot_bar_chart
from .utils import ensure_directory, plot_name
from .writers import write_csv

STATUS_COLUMN_TITLE = "status"

logger = structlog.get_logger(__name__)


def _is_comparison(ranked_rows: Sequence[Sequence[str]]) -> bool:
    header = ranked_rows[0]
    if len(header) != 3:
        return False
    if header[2].lower() != STATUS_COLUMN_TITLE:
        raise ValueError(
            "Comparison output check failure: found three columns but the third one is "
            f"{header[2]!r} instead of {STATUS_COLUMN_TITLE!r}"
        )
    return True


def build_history(
    ranked_rows: Sequence[Sequence[str]],
    table: PivotTable,
) -> list[list[str]]:
    """Return the pivot header followed by the full monthly row of every ranked identity.

    Comparison rows with a status get their identity annotated as ``name (status)``.
    Raises :class:`IdentityNotFoundError` when a ranked identity is not in ``table``.
    """
    if len(ranked_rows) < 2:
        raise ValueError("The generated top user data seems empty.")
    if not table.counts or not table.months:
        raise ValueError("The pivot table seems empty.")
    is_compare = _is_comparison(ranked_rows)

    history = [table.header]
    for row in ranked_rows[1:]:
        identity = row[0]
        if table.find_row(identity) is None:
            raise IdentityNotFoundError(identity)
        label = identity
        if is_compare and row[2]:
            label = f"{identity} ({row[2]})"
        history.append([label, *(str(value) for value in table.values_for(identity))])
    return history


def write_history(
    history_path: str | Path,
    ranked_rows: Sequence[Sequence[str]],
    table: PivotTable,
    *,
    input_type: InputType = InputType.SUBMITTERS,
) -> Path:
    """Write the history CSV and a bar chart per identity next to it."""
    history = build_history(ranked_rows, table)
    history_path = Path(history_path)
    plot_dir = ensure_directory(history_path.parent / input_type.plot_dir)
    months = history[0][1:]
    for row in history[1:]:
        name = plot_name(row[0])
        plot_bar_chart(
            plot_dir,
            name,
            months,
            row[1:],
            title=f"{input_type.chart_title_prefix} {name}",
        )
    write_csv(history, history_path)
    logger.info(
        "history.written",
        output=str(history_path),
        plots=str(plot_dir),
        identities=len(history) - 1,
    )
    return history_path


__all__ = ["build_history", "write_history"]
