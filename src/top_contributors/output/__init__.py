"""Report writers and history charts."""

from .history import build_history, write_history
from .plots import BarChartConfig, convert_values, plot_bar_chart, simplify_axis_labels
from .writers import render_markdown_table, write_csv, write_markdown

__all__ = [
    "BarChartConfig",
    "build_history",
    "convert_values",
    "plot_bar_chart",
    "render_markdown_table",
    "simplify_axis_labels",
    "write_csv",
    "write_history",
    "write_markdown",
]
