"""Shared helpers for report rendering."""

from collections.abc import Iterable, Sequence
from pathlib import Path

import numpy as np


def to_numpy(values: Iterable[float]) -> np.ndarray:
    """Return the input values as a 1D NumPy float array."""
    if isinstance(values, np.ndarray):
        return values
    return np.asarray(list(values), dtype=float)


def ensure_directory(path: str | Path) -> Path:
    """Create the directory at ``path`` if needed and return its Path."""
    directory = Path(path)
    if not directory.exists():
        directory.mkdir(parents=True, exist_ok=True)
    return directory


def is_integer_text(value: str) -> bool:
    """Return True when ``value`` parses as a base-10 integer."""
    try:
        int(value)
    except ValueError:
        return False
    return True


def column_widths(rows: Sequence[Sequence[str]]) -> list[int]:
    """Return the widest cell length of every column.

    Raises :class:`ValueError` when a row does not have as many cells as the first one.
    """
    if not rows:
        return []
    expected = len(rows[0])
    widths = [0] * expected
    for line, row in enumerate(rows, start=1):
        if len(row) != expected:
            raise ValueError(f"line #{line} has {len(row)} column while expecting {expected}")
        for column, cell in enumerate(row):
            widths[column] = max(widths[column], len(cell))
    return widths


def plot_name(identity: str) -> str:
    """Return the bare handle used to name an identity's chart file."""
    return identity.split(" ")[0]
