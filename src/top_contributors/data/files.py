"""Constants and helpers describing report file naming."""

from __future__ import annotations

from pathlib import Path

from attrs import define

from .models import InputType

MONTH_PLACEHOLDER = "YYYY-MM"
MARKDOWN_SUFFIX = ".md"
HISTORY_SUFFIX = "_fullHistory.csv"
EVOLUTION_MARKER = "_evolution"


def default_output_template(input_type: InputType) -> str:
    """Return the placeholder output name used when ``--out`` is not given."""
    return f"top-{input_type.value}_{MONTH_PLACEHOLDER}.csv"


def resolve_output_name(output: str, input_type: InputType, end_month: str) -> str:
    """Substitute the requested end month into the default output name.

    Explicit names are returned untouched.
    """
    if output != default_output_template(input_type):
        return output
    return output.replace(MONTH_PLACEHOLDER, end_month.upper())


def is_markdown_filename(filename: str | Path) -> bool:
    """Return True when ``filename`` carries a (case-insensitive) ``.md`` extension."""
    return Path(filename).suffix.lower() == MARKDOWN_SUFFIX


def history_filename(output: str | Path, input_type: InputType, *, is_compare: bool) -> Path:
    """Return the history CSV path stored next to ``output``."""
    marker = EVOLUTION_MARKER if is_compare else ""
    return Path(output).parent / f"top_{input_type.value}{marker}{HISTORY_SUFFIX}"


def ensure_parent_directory(output: str | Path) -> Path:
    """Raise when the directory that should hold ``output`` does not exist."""
    parent = Path(output).parent
    if not parent.is_dir():
        raise FileNotFoundError(
            f"The directory of specified output file ({parent}) does not exist."
        )
    return parent


@define(frozen=True)
class ReportPaths:
    """Bundle of the files written by a single report run."""

    output: Path
    history: Path | None = None

    @property
    def is_markdown(self) -> bool:
        return is_markdown_filename(self.output)


__all__ = [
    "ReportPaths",
    "default_output_template",
    "ensure_parent_directory",
    "history_filename",
    "is_markdown_filename",
    "resolve_output_name",
]
