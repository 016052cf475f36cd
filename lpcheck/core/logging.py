"""Structured logging.

Usage:
    from lpcheck.core.logging import get_logger, configure_logging

    configure_logging(log_level="INFO", log_format="console")

    logger = get_logger(__name__)
    logger.info("schema_loaded", path="schema/", tables=12)

Log output always goes to stderr so that reports printed to stdout stay
machine readable.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, cast

import structlog
from structlog.typing import FilteringBoundLogger


def _stderr_logger_factory(*args: Any) -> structlog.PrintLogger:
    # sys.stderr is looked up per logger so replaced streams (pytest capture) are honoured
    return structlog.PrintLogger(file=sys.stderr)


def configure_logging(
    log_level: str = "WARNING",
    log_format: str = "console",
    show_timestamps: bool = True,
    color: bool = False,
) -> None:
    """Configure structured logging for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_format: Output format ("console" or "json")
        show_timestamps: Whether to add ISO timestamps
        color: Whether to use colors in console mode
    """
    level = getattr(logging, log_level.upper(), logging.WARNING)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if show_timestamps:
        shared_processors.insert(0, structlog.processors.TimeStamper(fmt="iso", utc=True))

    if log_format == "json":
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(
                colors=color,
                exception_formatter=structlog.dev.plain_traceback,
            ),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=_stderr_logger_factory,
        cache_logger_on_first_use=False,
    )

    logging.basicConfig(
        format="%(message)s",
        level=level,
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )


def get_logger(name: str | None = None) -> FilteringBoundLogger:
    """Get a structured logger.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Bound structlog logger
    """
    return cast(FilteringBoundLogger, structlog.get_logger(name))
