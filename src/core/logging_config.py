"""Structured logging configuration.

This module initializes structlog with a stable JSON event format.
Log lines go to stderr so CLI output on stdout stays machine-readable.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import structlog

from core.constants import DEFAULT_LOG_LEVEL, SUPPORTED_LOG_LEVELS


def get_logger(name: str) -> Any:
    """Return a module logger instance.

    Args:
        name: Logger name, usually __name__.

    Returns:
        A structlog logger with structured JSON output.
    """
    configure_logging(os.getenv("CHRONODOC_LOG_LEVEL", DEFAULT_LOG_LEVEL))
    return structlog.get_logger(name)


def configure_logging(level_name: str) -> None:
    """Configure structlog processors and level filtering.

    Args:
        level_name: Minimum level name such as ``INFO``.
    """
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(sort_keys=True),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(_resolve_level(level_name)),
        logger_factory=_stderr_logger_factory,
        cache_logger_on_first_use=False,
    )


def _resolve_level(level_name: str) -> int:
    """Map a level name onto a stdlib logging level.

    Unknown names fall back to the default level.
    """
    normalized = level_name.strip().upper()
    if normalized not in SUPPORTED_LOG_LEVELS:
        normalized = DEFAULT_LOG_LEVEL
    return int(getattr(logging, normalized))


def _stderr_logger_factory(*args: Any) -> structlog.PrintLogger:
    """Build a print logger bound to the stderr stream active right now."""
    return structlog.PrintLogger(file=sys.stderr)
