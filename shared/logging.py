"""
Logging utilities: framework-agnostic helpers.

Every module obtains its logger with ``log = get_logger(__name__)`` and logs
snake_case event names with key-value context.
"""

import structlog
from structlog.stdlib import BoundLogger

from shared.logging_config import configure_structlog, setup_logging


def get_logger(name: str) -> BoundLogger:
    """
    Get a configured logger instance.

    Example:
        >>> log = get_logger(__name__)
        >>> log.info("otp_sent", email="a@x.com")
    """
    return structlog.get_logger(name)


def log_with_context(logger: BoundLogger, **context) -> BoundLogger:
    """Bind context to a logger for all subsequent log calls."""
    return logger.bind(**context)


__all__ = [
    "get_logger",
    "log_with_context",
    "configure_structlog",
    "setup_logging",
]
