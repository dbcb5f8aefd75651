"""Centralized logging configuration for z3_handles."""

import logging
import sys
from typing import Optional

ROOT_LOGGER_NAME = "z3_handles"

# Library default: silent unless the application configures logging
logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())

_stream_handler: Optional[logging.Handler] = None


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the package root.

    Args:
        name: Logger name (typically __name__ from calling module).

    Returns:
        Logger instance inheriting the package root configuration.
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)  # Inherit from parent
    return logger


def set_global_log_level(
    level: int,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> None:
    """Set the log level for all z3_handles loggers and attach one handler.

    Args:
        level: Logging level (e.g., logging.DEBUG, logging.INFO).
        format_string: Custom format string (optional).
        handler: Custom handler (optional, defaults to a stderr StreamHandler).
    """
    global _stream_handler

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)

    if _stream_handler is None:
        if format_string is None:
            format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        _stream_handler = handler or logging.StreamHandler(sys.stderr)
        _stream_handler.setFormatter(logging.Formatter(format_string))
        root_logger.addHandler(_stream_handler)

    _stream_handler.setLevel(level)


def enable_debug_logging() -> None:
    """Enable debug logging for the entire package."""
    set_global_log_level(logging.DEBUG)


def reset_logging() -> None:
    """Remove the handler attached by set_global_log_level (mainly for testing)."""
    global _stream_handler

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    if _stream_handler is not None:
        root_logger.removeHandler(_stream_handler)
        _stream_handler = None
    root_logger.setLevel(logging.NOTSET)
