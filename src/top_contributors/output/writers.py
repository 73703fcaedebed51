"""CSV and Markdown writers for ranked row sets."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import pandas as pd
import structlog

from .utils import column_widths, is_integer_text, plot_name

logger = structlog.get_logger(__name__)


def write_csv(rows: Sequence[Sequence[str]], path: str | Path) -> Path:
    """Write a header-first row set to ``path`` as CSV."""
    output = Path(path)
    header, *data = rows
    frame = pd.DataFrame([list(row) for row in data], columns=list(header), dtype=str)
    frame.to_csv(output, index=False, lineterminator="\n")
    logger.debug("report.csv_written", output=str(output), rows=len(data))
    return output


def _format_cell(value: str, width: int, *, right_align: bool) -> str:
    return f" {value:>{width}}" if right_align else f" {value:<{width}}"


def _separator_cell(value: str, width: int) -> str:
    if is_integer_text(value):
        return " " + "-" * (width - 1) + ":"
    return " " + "-" * width


def render_markdown_table(
    rows: Sequence[Sequence[str]],
    *,
    link_dir: str | None = None,
) -> str:
    """Render a header-first row set as an aligned Markdown table.

    Integer cells are right-aligned and everything else left-aligned. The
    separator row is derived from the first data row, or from the header when
    there is none. When ``link_dir`` is set, identity cells link to
    ``<link_dir>/<handle>.png``.
    """
    if not rows:
        return ""
    widths = column_widths(rows)
    alignment_row = rows[1] if len(rows) > 1 else rows[0]
    separator = [_separator_cell(value, widths[column]) for column, value in enumerate(alignment_row)]
    lines: list[str] = []
    for line_number, row in enumerate(rows):
        cells: list[str] = []
        for column, value in enumerate(row):
            if link_dir is not None and column == 0 and line_number != 0:
                cells.append(f" [{value}]({link_dir}/{plot_name(value)}.png)")
            else:
                cells.append(_format_cell(value, widths[column], right_align=is_integer_text(value)))
        lines.append("|" + "".join(f"{cell} |" for cell in cells))
        if line_number == 0:
            lines.append("|" + "".join(f"{cell} |" for cell in separator))
    return "\n".join(lines) + "\n"


def write_markdown(
    rows: Sequence[Sequence[str]],
    path: str | Path,
    *,
    introduction: str = "",
    link_dir: str | None = None,
) -> Path:
    """Write an optional introduction followed by the Markdown table to ``path``."""
    output = Path(path)
    body = render_markdown_table(rows, link_dir=link_dir)
    text = f"{introduction}\n{body}" if introduction else body
    output.write_text(text, encoding="utf-8")
    logger.debug("report.markdown_written", output=str(output), rows=len(rows) - 1)
    return output


__all__ = ["render_markdown_table", "write_csv", "write_markdown"]
