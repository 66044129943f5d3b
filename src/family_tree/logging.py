"""Structlog-based logging for Family Tree.

Library code logs through structlog; command output is the interpreter's
job and goes to stdout, so log lines are written to stderr. Nothing here
touches the stdlib root logger.
"""
from __future__ import annotations

from typing import Literal

import logging
import sys

import structlog

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def configure_logging(level: LogLevel = "WARNING") -> None:
    """(Re)configure structlog; safe to call again, e.g. from ``--log-level``."""
    threshold = logging.getLevelName(level)
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="ISO"),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(threshold),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str = "family_tree"):
    return structlog.get_logger(name)


configure_logging()
