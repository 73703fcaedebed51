"""Per-person activity bar charts."""

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np

from .utils import to_numpy


@dataclass(frozen=True)
class BarChartConfig:
    """Styling options for activity history bar charts."""

    ylabel: str = "Count"
    color: str = "#126782"
    bar_width: float = 0.8
    figsize: tuple[float, float] = (5.0, 3.0)
    dpi: int = 150


def simplify_axis_labels(labels: Sequence[str]) -> list[str]:
    """Keep the year on the first month of each year and blank every other label."""
    simplified: list[str] = []
    current_year = ""
    for label in labels:
        year = label.split("-")[0]
        if year != current_year:
            simplified.append(year)
            current_year = year
        else:
            simplified.append("")
    return simplified


def convert_values(values: Sequence[str]) -> list[float]:
    """Convert numeric strings to floats, rejecting blank or malformed cells."""
    converted: list[float] = []
    for value in values:
        text = value.strip()
        try:
            converted.append(float(text))
        except ValueError as exc:
            raise ValueError(f"Unexpected error converting {value!r} to a number") from exc
    return converted


def plot_bar_chart(
    output_dir: str | Path,
    name: str,
    months: Sequence[str],
    values: Sequence[str],
    *,
    title: str | None = None,
    config: BarChartConfig | None = None,
) -> Path:
    """Render ``values`` by month as ``<output_dir>/<name>.png``."""
    config = config or BarChartConfig()
    vals = to_numpy(convert_values(values))
    positions = np.arange(len(vals))

    fig, ax = plt.subplots(figsize=config.figsize)
    ax.bar(positions, vals, width=config.bar_width, color=config.color, linewidth=0)
    ax.set_title(title or name)
    ax.set_ylabel(config.ylabel)
    ax.set_xticks(positions)
    ax.set_xticklabels(simplify_axis_labels(months))
    ax.grid(True, axis="y", linestyle="--", linewidth=0.5, alpha=0.6)
    fig.tight_layout()

    output_path = Path(output_dir) / f"{name}.png"
    fig.savefig(output_path, dpi=config.dpi)
    plt.close(fig)
    return output_path
