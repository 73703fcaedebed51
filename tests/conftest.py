"""Global test configuration and fixtures."""

import logging
from pathlib import Path

import pytest
import structlog

from top_contributors.data.models import InputType, PivotTable, RankedEntry, RankedResult
from top_contributors.logging import HANDLER_NAME

MONTHS_2022_2023 = [f"2022-{month:02d}" for month in range(1, 13)] + [
    f"2023-{month:02d}" for month in range(1, 5)
]

# Two identities with identical monthly counts 1..16.
RECORDS_1 = [
    ["", *MONTHS_2022_2023],
    ["0x41head", *(str(value) for value in range(1, 17))],
    ["AScripnic", *(str(value) for value in range(1, 17))],
]

RECORDS_2 = [
    ["", "2022-01"],
    ["0x41head", "1"],
    ["AScripnic", "1"],
]

SAMPLE_PIVOT_CSV = """\
,2023-01,2023-02,2023-03,2023-04,2023-05,2023-06
alice,1,1,1,1,1,1
bob,0,0,0,5,5,5
carol,4,4,4,0,0,0
dave,0,0,0,1,1,1
erin,2,2,0,0,0,0
"""


@pytest.fixture
def make_ranked():
    """Build a ranked result from ``(identity, total)`` pairs."""

    def _make(*pairs: tuple[str, int], input_type: InputType = InputType.SUBMITTERS) -> RankedResult:
        return RankedResult(
            input_type=input_type,
            entries=[RankedEntry(identity=identity, total=total) for identity, total in pairs],
        )

    return _make


@pytest.fixture
def records_1():
    return [list(row) for row in RECORDS_1]


@pytest.fixture
def table_1():
    return PivotTable.from_rows(RECORDS_1)


@pytest.fixture
def table_2():
    return PivotTable.from_rows(RECORDS_2)


@pytest.fixture
def sample_table():
    rows = [line.split(",") for line in SAMPLE_PIVOT_CSV.splitlines()]
    return PivotTable.from_rows(rows)


@pytest.fixture
def pivot_csv(tmp_path) -> Path:
    """Write the sample pivot table to a temporary CSV file."""
    path = tmp_path / "pivot.csv"
    path.write_text(SAMPLE_PIVOT_CSV, encoding="utf-8")
    return path


@pytest.fixture
def write_pivot(tmp_path):
    """Write arbitrary CSV text to a temporary file and return its path."""

    def _write(text: str, name: str = "input.csv") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def fast_plots(monkeypatch):
    """Avoid matplotlib when history charts are written through the history module."""
    calls = []

    def _fake_plot(output_dir, name, months, values, *, title=None, config=None):
        path = Path(output_dir) / f"{name}.png"
        path.write_bytes(b"")
        calls.append({"name": name, "months": list(months), "values": list(values), "title": title})
        return path

    import top_contributors.output.history as history

    monkeypatch.setattr(history, "plot_bar_chart", _fake_plot)
    return calls


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop the handler installed by CLI invocations once a test finishes."""
    yield
    root = logging.getLogger()
    for handler in [h for h in root.handlers if h.get_name() == HANDLER_NAME]:
        root.removeHandler(handler)
    structlog.reset_defaults()
