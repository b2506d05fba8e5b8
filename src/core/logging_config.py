"""Structured logging configuration.

This module initializes structlog with a stable JSON line format.
Library modules only call get_logger; entry points call configure_logging.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from core.constants import DEFAULT_LOG_LEVEL


def configure_logging(log_level: str = DEFAULT_LOG_LEVEL) -> None:
    """Configure structured JSON logging on stderr.

    Args:
        log_level: Minimum level name, e.g. WARNING.
    """
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(sort_keys=True),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(_level_number(log_level)),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> Any:
    """Return a module logger instance.

    Args:
        name: Logger name, usually __name__.

    Returns:
        A lazily configured structlog logger.
    """
    return structlog.get_logger(name)


def _level_number(log_level: str) -> int:
    level_number = logging.getLevelName(log_level.upper())
    return level_number if isinstance(level_number, int) else logging.WARNING
