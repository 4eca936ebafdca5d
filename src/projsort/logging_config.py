"""structlog setup for the projsort CLI.

Environment variables:
    PROJSORT_DEBUG: When set to a non-empty value other than "0", emit
        debug events (including the full record of each detected project).
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Any

import structlog

ENV_DEBUG = "PROJSORT_DEBUG"


def debug_enabled() -> bool:
    value = os.environ.get(ENV_DEBUG, "")
    return bool(value) and value != "0"


def configure_logging(
    debug: bool | None = None,
    log_file: Path | None = None,
) -> None:
    """Configure structlog.

    Args:
        debug: Force debug level on/off. None = read PROJSORT_DEBUG.
        log_file: Append plain-text events to this file instead of stderr.
    """
    if debug is None:
        debug = debug_enabled()
    level = logging.DEBUG if debug else logging.INFO

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger_factory: Any = structlog.WriteLoggerFactory(
            file=log_file.open("a", encoding="utf-8")
        )
        colors = False
    else:
        logger_factory = structlog.PrintLoggerFactory(file=sys.stderr)
        colors = sys.stderr.isatty()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=colors),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=logger_factory,
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> Any:
    return structlog.get_logger(name)
