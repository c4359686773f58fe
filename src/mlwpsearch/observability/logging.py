"""Structured logging configuration using structlog."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from mlwpsearch.config.settings import Settings


def setup_logging(settings: Settings | None = None) -> None:
    """Configure structured logging for mlwpsearch.

    Debug mode always logs at debug level; otherwise the configured
    observability level applies (``error`` by default).

    Args:
        settings: Application settings. Uses defaults if None.
    """
    observability = settings.observability if settings else None
    log_level = getattr(observability, "log_level", "error").upper()
    log_format = getattr(observability, "log_format", "json")
    if settings is not None and settings.debug:
        log_level = "DEBUG"

    processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if log_format == "console":
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Stdlib loggers (logging.getLogger(__name__)) share the same level and stream.
    # force=True replaces handlers a launcher may already have installed.
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level, logging.ERROR),
        force=True,
    )
