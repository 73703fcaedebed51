"""High level orchestration of extractions and comparisons."""

from __future__ import annotations

from pathlib import Path

import structlog
from attrs import define

from .data.loader import load_pivot_table
from .data.models import ComparisonResult, ExtractionParams, InputType, PivotTable, RankedResult
from .errors import ExtractionError
from .ranking import compare, extract, resolve_boundaries

logger = structlog.get_logger(__name__)


@define(slots=True, frozen=True)
class Extraction:
    """Ranking produced from a pivot table, kept with the table for history lookups."""

    table: PivotTable
    ranked: RankedResult

    @property
    def end_month(self) -> str:
        return self.ranked.window.end_month if self.ranked.window else ""


@define(slots=True, frozen=True)
class Comparison:
    """Recent and offset rankings with their merged comparison."""

    table: PivotTable
    recent: RankedResult
    old: RankedResult
    result: ComparisonResult


def extract_from_table(
    table: PivotTable,
    params: ExtractionParams,
    *,
    input_type: InputType = InputType.SUBMITTERS,
) -> RankedResult:
    """Resolve the window described by ``params`` and rank ``table`` over it."""
    window = resolve_boundaries(
        table,
        params.end_month,
        params.period_months,
        params.offset_months,
    )
    if window.is_empty:
        raise ExtractionError(
            f"Requested end period is not available: {params.offset_months} month(s) before "
            f"{params.end_month!r} predates the data."
        )
    return extract(table, window, params.top_size, input_type=input_type)


def run_extraction(
    path: str | Path,
    params: ExtractionParams,
    *,
    input_type: InputType = InputType.SUBMITTERS,
) -> Extraction:
    """Load the pivot table at ``path`` and extract its top identities."""
    run_log = logger.bind(operation="extract", input=str(path), input_type=input_type.value)
    run_log.info("pipeline.extract_start")
    table = load_pivot_table(path)
    ranked = extract_from_table(table, params, input_type=input_type)
    run_log.info("pipeline.extract_complete", selected=len(ranked))
    return Extraction(table=table, ranked=ranked)


def run_comparison(
    path: str | Path,
    params: ExtractionParams,
    compare_with: int,
    *,
    input_type: InputType = InputType.SUBMITTERS,
) -> Comparison:
    """Compare the current ranking with the one ``compare_with`` months earlier."""
    run_log = logger.bind(
        operation="compare",
        input=str(path),
        input_type=input_type.value,
        compare_with=compare_with,
    )
    run_log.info("pipeline.compare_start")
    table = load_pivot_table(path)
    recent = extract_from_table(table, params, input_type=input_type)
    old = extract_from_table(table, params.with_offset(compare_with), input_type=input_type)
    result = compare(recent, old)
    run_log.info("pipeline.compare_complete", rows=len(result.entries))
    return Comparison(table=table, recent=recent, old=old, result=result)


__all__ = [
    "Comparison",
    "Extraction",
    "extract_from_table",
    "run_comparison",
    "run_extraction",
]
