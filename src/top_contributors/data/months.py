"""Validation of month tokens passed on the command line."""

from __future__ import annotations

import re

import structlog

LATEST = "latest"

MONTH_PATTERN = re.compile(r"20[0-2][0-9]-(0[1-9]|1[0-2])")

logger = structlog.get_logger(__name__)


def is_latest(token: str) -> bool:
    """Return True for the case-insensitive ``latest`` sentinel."""
    return token.upper() == LATEST.upper()


def is_valid_month(token: str) -> bool:
    """Return True when ``token`` is ``latest`` or a ``YYYY-MM`` month in 2000-2029."""
    if not token:
        logger.debug("month.invalid", token=token, reason="empty")
        return False
    if is_latest(token):
        return True
    if MONTH_PATTERN.fullmatch(token) is None:
        logger.debug("month.invalid", token=token, reason="expected YYYY-MM between 2000 and 2029")
        return False
    return True


__all__ = ["LATEST", "MONTH_PATTERN", "is_latest", "is_valid_month"]
