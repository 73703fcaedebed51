"""Pivot table models, parsing, validation, and loading."""

from .check import check_file, check_table
from .loader import find_row, load_pivot_table, read_rows
from .models import (
    ComparisonEntry,
    ComparisonResult,
    ExtractionParams,
    ExtractionParamsSchema,
    InputType,
    PivotTable,
    RankedEntry,
    RankedResult,
    Window,
)
from .months import is_valid_month

__all__ = [
    "ComparisonEntry",
    "ComparisonResult",
    "ExtractionParams",
    "ExtractionParamsSchema",
    "InputType",
    "PivotTable",
    "RankedEntry",
    "RankedResult",
    "Window",
    "check_file",
    "check_table",
    "find_row",
    "is_valid_month",
    "load_pivot_table",
    "read_rows",
]
