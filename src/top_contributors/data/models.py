"""Domain models for monthly contributor pivot tables and ranking results."""

from __future__ import annotations

import enum
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

import marshmallow as ma
from attrs import define, evolve, field, validators

from ..errors import TableFormatError
from .months import LATEST, is_valid_month


class InputType(enum.Enum):
    """Kind of activity counted in the pivot table."""

    SUBMITTERS = "submitters"
    COMMENTERS = "commenters"

    @property
    def role_label(self) -> str:
        """Header label of the identity column."""
        return "Commenter" if self is InputType.COMMENTERS else "Submitter"

    @property
    def metric(self) -> str:
        """Name of the counted activity, used in the total column header."""
        return "Comments" if self is InputType.COMMENTERS else "PRs"

    @property
    def plot_dir(self) -> str:
        """Directory name (relative to the history file) holding per-person charts."""
        return "commentersPlot" if self is InputType.COMMENTERS else "plot"

    @property
    def chart_title_prefix(self) -> str:
        return "Comments by" if self is InputType.COMMENTERS else "Submissions by"


def _to_count(value: str) -> int:
    """Parse a count cell; malformed cells contribute nothing."""
    try:
        return int(value.strip())
    except ValueError:
        return 0


def _count_tuple(values: Iterable[int]) -> tuple[int, ...]:
    return tuple(int(value) for value in values)


def _freeze_counts(counts: Mapping[str, Iterable[int]]) -> dict[str, tuple[int, ...]]:
    return {identity: _count_tuple(values) for identity, values in counts.items()}


@define(slots=True, frozen=True)
class PivotTable:
    """Identities by months grid of activity counts.

    Columns keep the numbering of the raw grid: column 0 holds identities and
    column ``c`` (``c >= 1``) holds the counts for ``months[c - 1]``.
    """

    months: tuple[str, ...] = field(converter=tuple)
    counts: dict[str, tuple[int, ...]] = field(converter=_freeze_counts)
    corner: str = ""
    _row_index: dict[str, int] = field(init=False, repr=False, eq=False)

    def __attrs_post_init__(self) -> None:
        index: dict[str, int] = {}
        for row_number, (identity, values) in enumerate(self.counts.items(), start=1):
            if len(values) != len(self.months):
                raise TableFormatError(
                    f"{identity!r} has {len(values)} month values, expected {len(self.months)}",
                    line=row_number + 1,
                )
            index[identity] = row_number
        object.__setattr__(self, "_row_index", index)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[str]]) -> PivotTable:
        """Build a table from a raw string grid (header first)."""
        if not rows:
            raise TableFormatError("pivot table is empty")
        header = list(rows[0])
        width = len(header)
        counts: dict[str, tuple[int, ...]] = {}
        for line_number, row in enumerate(rows[1:], start=2):
            if len(row) != width:
                raise TableFormatError(
                    f"found {len(row)} columns while expecting {width}", line=line_number
                )
            identity = row[0]
            if identity in counts:
                raise TableFormatError(f"duplicate identity {identity!r}", line=line_number)
            counts[identity] = tuple(_to_count(cell) for cell in row[1:])
        return cls(months=header[1:], counts=counts, corner=header[0] if header else "")

    @property
    def column_count(self) -> int:
        """Width of the raw grid, identity column included."""
        return len(self.months) + 1

    @property
    def last_column(self) -> int:
        return len(self.months)

    @property
    def header(self) -> list[str]:
        return [self.corner, *self.months]

    @property
    def identities(self) -> list[str]:
        return list(self.counts)

    def month_at(self, column: int) -> str:
        """Return the month label of a data column (1-based)."""
        if column < 1 or column > self.last_column:
            raise IndexError(f"column {column} is outside 1..{self.last_column}")
        return self.months[column - 1]

    def find_row(self, identity: str) -> int | None:
        """Return the 1-based row index of ``identity`` or ``None`` when absent."""
        return self._row_index.get(identity)

    def values_for(self, identity: str) -> tuple[int, ...]:
        return self.counts[identity]

    def to_rows(self) -> list[list[str]]:
        """Re-emit the table as a string grid."""
        rows = [self.header]
        for identity, values in self.counts.items():
            rows.append([identity, *(str(value) for value in values)])
        return rows


def _is_valid_month_param(instance: Any, attribute: Any, value: str) -> None:
    if not is_valid_month(value):
        raise ValueError(f"Invalid month {value!r}. Expected 'latest' or YYYY-MM.")


@define(slots=True, frozen=True)
class ExtractionParams:
    """Temporal and ranking parameters for a single extraction."""

    end_month: str = field(default=LATEST, validator=_is_valid_month_param)
    period_months: int = field(default=12, validator=validators.ge(0))
    offset_months: int = field(default=0, validator=validators.ge(0))
    top_size: int = field(default=35, validator=validators.ge(1))

    @property
    def is_latest(self) -> bool:
        return self.end_month.upper() == LATEST.upper()

    def with_offset(self, offset_months: int) -> ExtractionParams:
        """Return a copy looking ``offset_months`` earlier."""
        return evolve(self, offset_months=offset_months)


class ExtractionParamsSchema(ma.Schema):
    """Marshmallow schema for :class:`ExtractionParams`."""

    end_month = ma.fields.Str(load_default=LATEST, dump_default=LATEST)
    period_months = ma.fields.Int(load_default=12, validate=ma.validate.Range(min=0))
    offset_months = ma.fields.Int(load_default=0, validate=ma.validate.Range(min=0))
    top_size = ma.fields.Int(load_default=35, validate=ma.validate.Range(min=1))

    @ma.validates("end_month")
    def validate_end_month(self, value: str, **kwargs: object) -> None:
        """Reject month tokens that are neither ``latest`` nor ``YYYY-MM``."""
        if not is_valid_month(value):
            raise ma.ValidationError("Expected 'latest' or a YYYY-MM month between 2000 and 2029.")

    @ma.post_load
    def make_params(self, data: dict[str, Any], **kwargs: object) -> ExtractionParams:
        """Instantiate :class:`ExtractionParams` from validated options."""
        return ExtractionParams(**data)


@define(slots=True, frozen=True)
class Window:
    """Inclusive column range selected for aggregation."""

    start_column: int
    end_column: int
    start_month: str
    end_month: str
    fallback: bool = False

    @classmethod
    def empty(cls) -> Window:
        """Sentinel returned when no valid window exists."""
        return cls(start_column=0, end_column=0, start_month="", end_month="")

    @property
    def is_empty(self) -> bool:
        return self.end_column <= 0

    def __bool__(self) -> bool:
        return not self.is_empty

    @property
    def width(self) -> int:
        return 0 if self.is_empty else self.end_column - self.start_column + 1


@define(slots=True, frozen=True)
class RankedEntry:
    """Identity and its total activity within a window."""

    identity: str
    total: int


@define(slots=True, frozen=True)
class RankedResult:
    """Top identities ordered by total, ties at the cut-off included."""

    input_type: InputType
    entries: tuple[RankedEntry, ...] = field(converter=tuple)
    window: Window | None = None

    @property
    def header(self) -> list[str]:
        return [self.input_type.role_label, f"Total_{self.input_type.metric}"]

    @property
    def identities(self) -> list[str]:
        return [entry.identity for entry in self.entries]

    def __len__(self) -> int:
        return len(self.entries)

    def to_rows(self) -> list[list[str]]:
        """Return the header followed by ``[identity, total]`` rows."""
        rows = [self.header]
        rows.extend([entry.identity, str(entry.total)] for entry in self.entries)
        return rows


STATUS_UNCHANGED = ""
STATUS_NEW = "new"
STATUS_CHURNED = "churned"


@define(slots=True, frozen=True)
class ComparisonEntry:
    """Identity with its current total (``None`` when churned) and status."""

    identity: str
    total: int | None
    status: str = field(
        validator=validators.in_({STATUS_UNCHANGED, STATUS_NEW, STATUS_CHURNED}),
    )


@define(slots=True, frozen=True)
class ComparisonResult:
    """Recent ranking enriched with new and churned identities."""

    input_type: InputType
    entries: tuple[ComparisonEntry, ...] = field(converter=tuple)

    @property
    def header(self) -> list[str]:
        return [self.input_type.role_label, f"Total_{self.input_type.metric}", "Status"]

    def with_status(self, status: str) -> list[ComparisonEntry]:
        return [entry for entry in self.entries if entry.status == status]

    def to_rows(self) -> list[list[str]]:
        rows = [self.header]
        for entry in self.entries:
            total = "" if entry.total is None else str(entry.total)
            rows.append([entry.identity, total, entry.status])
        return rows


__all__ = [
    "LATEST",
    "STATUS_CHURNED",
    "STATUS_NEW",
    "STATUS_UNCHANGED",
    "ComparisonEntry",
    "ComparisonResult",
    "ExtractionParams",
    "ExtractionParamsSchema",
    "InputType",
    "PivotTable",
    "RankedEntry",
    "RankedResult",
    "Window",
]
