"""Structured logging setup for wristpack.

Library modules log through ``structlog.get_logger(__name__)``; the command
line host calls configure_logging() once at startup to pick the renderer
and level.
"""

from __future__ import annotations

import logging
from typing import Any

import structlog


def configure_logging(
    *,
    log_level: str = "INFO",
    json_format: bool = True,
    add_timestamp: bool = True,
) -> None:
    """Configure structured logging for wristpack.

    Args:
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: If True, output JSON format. If False, output human-readable.
        add_timestamp: If True, add ISO timestamp to log entries.

    Example:
        >>> configure_logging(log_level="DEBUG", json_format=False)
    """
    processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if add_timestamp:
        processors.insert(1, structlog.processors.TimeStamper(fmt="iso"))

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    # Set log level for the stdlib handler
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, log_level.upper()),
        force=True,
    )
