"""structlog setup for the resumeintake CLI.

Events such as ``candidates.filtered`` are emitted as JSON lines on stderr so
that the filtered candidate JSON written to stdout can be piped unchanged.
"""

from __future__ import annotations

import logging
import sys

import structlog


def configure_logging(level: str = "INFO") -> None:
    """Route filter and pipeline events to stderr at ``level`` (default INFO)."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(level=log_level, format="%(message)s")

    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=True,
    )


def _stderr_logger(*args: object) -> structlog.PrintLogger:
    # Resolve sys.stderr per logger so CLI stdout stays machine-readable.
    return structlog.PrintLogger(file=sys.stderr)
