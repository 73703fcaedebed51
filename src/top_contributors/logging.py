"""structlog setup shared by the library and the command line."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog
from structlog.types import Processor

LOG_LEVELS: dict[str, int] = {
    "critical": logging.CRITICAL,
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}

HANDLER_NAME = "top_contributors"
NOISY_LOGGERS = ("matplotlib", "PIL")


def resolve_level(level: str) -> int:
    """Map a case-insensitive level name to its :mod:`logging` value."""
    try:
        return LOG_LEVELS[level.lower()]
    except KeyError:
        valid = ", ".join(sorted(LOG_LEVELS))
        raise ValueError(f"Unsupported log level {level!r}. Choose one of: {valid}.") from None


def _build_handler(renderer: Processor, pre_chain: list[Processor], stream: TextIO) -> logging.Handler:
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=pre_chain,
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
    )
    handler = logging.StreamHandler(stream)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(formatter)
    return handler


def configure_logging(
    level: str = "info",
    *,
    json_output: bool = False,
    stream: TextIO | None = None,
) -> logging.Handler:
    """Route structlog events and stdlib records through one stderr handler.

    Calling it again replaces the handler installed by the previous call, so the
    level and format can change between command invocations.
    """
    level_value = resolve_level(level)

    pre_chain: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    renderer: Processor
    if json_output:
        renderer = structlog.processors.JSONRenderer(sort_keys=True)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    # Reports go to stdout or files; keep diagnostics off that channel.
    handler = _build_handler(renderer, pre_chain, stream or sys.stderr)
    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == HANDLER_NAME]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level_value)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level_value, logging.WARNING))

    structlog.configure(
        processors=pre_chain
        + [
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level_value),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )
    return handler


__all__ = ["LOG_LEVELS", "configure_logging", "resolve_level"]
