"""structlog setup for the command line."""

import logging
import sys

import structlog


def _stderr_logger(*args) -> structlog.PrintLogger:
    # Looked up per call so a replaced sys.stderr is honoured
    return structlog.PrintLogger(file=sys.stderr)


def configure_logging(verbosity: int = 0) -> None:
    """Send log events to stderr so reports and CSV on stdout stay clean.

    0 = warnings only, 1 = info, 2+ = debug.
    """
    level = {0: logging.WARNING, 1: logging.INFO}.get(verbosity, logging.DEBUG)
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )
