"""Comparison of a recent ranking with an older one."""

from __future__ import annotations

import structlog

from ..data.models import (
    STATUS_CHURNED,
    STATUS_NEW,
    STATUS_UNCHANGED,
    ComparisonEntry,
    ComparisonResult,
    RankedResult,
)

logger = structlog.get_logger(__name__)


def compare(recent: RankedResult, old: RankedResult) -> ComparisonResult:
    """Flag identities that entered (``new``) or left (``churned``) the ranking.

    Every recent entry is kept in order with its total; identities only present
    in ``old`` follow, in their old order, without a total.
    """
    old_identities = set(old.identities)
    recent_identities = set(recent.identities)

    entries: list[ComparisonEntry] = []
    for entry in recent.entries:
        status = STATUS_UNCHANGED if entry.identity in old_identities else STATUS_NEW
        entries.append(ComparisonEntry(identity=entry.identity, total=entry.total, status=status))

    for entry in old.entries:
        if entry.identity not in recent_identities:
            entries.append(ComparisonEntry(identity=entry.identity, total=None, status=STATUS_CHURNED))

    result = ComparisonResult(input_type=recent.input_type, entries=entries)
    logger.info(
        "ranking.compared",
        recent=len(recent),
        old=len(old),
        new=len(result.with_status(STATUS_NEW)),
        churned=len(result.with_status(STATUS_CHURNED)),
    )
    return result


__all__ = ["compare"]
