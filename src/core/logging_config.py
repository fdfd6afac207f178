"""Structured logging configuration.

This module initializes a logger with a stable structured format.
Events are rendered as JSON lines on stderr so command output stays clean.
"""

from __future__ import annotations

import sys
from typing import Any

import structlog


def get_logger(name: str) -> Any:
    """Return a module logger instance.

    Args:
        name: Logger name, usually __name__.

    Returns:
        A structlog logger with structured output.
    """
    if not structlog.is_configured():
        structlog.configure(
            processors=[
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.add_log_level,
                structlog.processors.JSONRenderer(),
            ],
            logger_factory=_stderr_logger_factory,
            cache_logger_on_first_use=False,
        )
    return structlog.get_logger(name)


def _stderr_logger_factory(*args: Any) -> structlog.PrintLogger:
    """Bind a print logger to the current stderr stream.

    The stream is looked up on every call so redirected stderr is honored.
    """
    return structlog.PrintLogger(sys.stderr)
