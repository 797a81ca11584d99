"""structlog setup for the command line.

Log output goes to stderr so the schema script can be piped from stdout.
Set TAGSCHEMA_DEBUG=1 to see per-field debug events.
"""

from __future__ import annotations

import logging
import sys

import structlog

from tagschema.config import is_debug_enabled


def configure_logging(debug: bool | None = None) -> None:
    if debug is None:
        debug = is_debug_enabled()
    level = logging.DEBUG if debug else logging.WARNING

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
