"""Window resolution, ranking, and comparison of contributor activity."""

from .boundaries import resolve_boundaries, search_month
from .compare import compare
from .engine import extract, select_top, totalize

__all__ = [
    "compare",
    "extract",
    "resolve_boundaries",
    "search_month",
    "select_top",
    "totalize",
]
