"""Exception types raised by the pivot table, ranking, and history layers."""

from __future__ import annotations


class TableFormatError(ValueError):
    """Raised when a pivot table does not have the expected rectangular shape."""

    def __init__(self, message: str, *, line: int | None = None) -> None:
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class ExtractionError(RuntimeError):
    """Raised when no valid aggregation window exists for the requested parameters."""


class IdentityNotFoundError(LookupError):
    """Raised when a ranked identity has no row in the source pivot table."""

    def __init__(self, identity: str) -> None:
        self.identity = identity
        super().__init__(f"Supplied name ({identity}) was not found in the input pivot table")


__all__ = ["ExtractionError", "IdentityNotFoundError", "TableFormatError"]
