"""
Structured Logging Module

Modules in this package log through ``logging.getLogger(__name__)``. This
module renders those records as structured JSON via structlog and stamps
every record with the transaction ID of the completion being processed.

Pattern: Structured logging for observability
Pattern: Singleton configuration (configure once at startup)

Example:
    >>> configure_logging(level="DEBUG")
    >>> with completion_id_context("42"):
    ...     logging.getLogger("streamcache.services").debug("cache hit")
    {"event": "cache hit", "completion_id": "42", "level": "debug", ...}
"""

import contextvars
import logging
import sys
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Generator, Optional, TextIO

import structlog
from structlog.types import EventDict, Processor


PACKAGE_LOGGER = "streamcache"

# =============================================================================
# Configuration State
# =============================================================================

_configured: bool = False
_handler: Optional[logging.Handler] = None


# =============================================================================
# Completion ID Context
# =============================================================================

_completion_id_var: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "completion_id", default=None
)


def get_completion_id() -> Optional[str]:
    """
    Get the current completion ID.

    Returns:
        Completion ID if set, None otherwise
    """
    return _completion_id_var.get()


@contextmanager
def completion_id_context(completion_id: str) -> Generator[None, None, None]:
    """
    Context manager for setting the completion ID.

    Args:
        completion_id: Transaction ID of the call being processed

    Yields:
        None
    """
    token = _completion_id_var.set(completion_id)
    try:
        yield
    finally:
        _completion_id_var.reset(token)


# =============================================================================
# Custom Processors
# =============================================================================


def add_completion_id(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add completion ID to log event if set."""
    completion_id = get_completion_id()
    if completion_id is not None:
        event_dict["completion_id"] = completion_id
    return event_dict


def add_timestamp(
    logger: logging.Logger, _method_name: str, event_dict: EventDict
) -> EventDict:
    """
    Add ISO 8601 timestamp to log event.

    Args:
        logger: The logger instance (unused but required by structlog interface)
        _method_name: The log method name (unused but required by structlog interface)
        event_dict: The event dictionary to process
    """
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


# =============================================================================
# Singleton Configuration
# =============================================================================


def configure_logging(
    level: str = "INFO",
    stream: Optional[TextIO] = None,
    force: bool = False,
) -> None:
    """
    Configure JSON logging for the streamcache logger hierarchy.

    This should be called once at application startup. Subsequent calls
    are no-ops unless force=True, which replaces the installed handler.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        stream: Output stream (default: sys.stdout)
        force: Force reconfiguration (for testing only)
    """
    global _configured, _handler

    if _configured and not force:
        return

    shared_processors: list[Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_timestamp,
        add_completion_id,
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[structlog.stdlib.ExtraAdder(), *shared_processors],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
    )

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(formatter)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if _handler is not None:
        package_logger.removeHandler(_handler)
    package_logger.addHandler(handler)
    package_logger.setLevel(_level_to_int(level))

    _handler = handler
    _configured = True


def reset_logging() -> None:
    """
    Reset logging configuration state and remove the installed handler.

    WARNING: This should only be used in tests.
    """
    global _configured, _handler

    if _handler is not None:
        logging.getLogger(PACKAGE_LOGGER).removeHandler(_handler)
    _handler = None
    _configured = False


def _level_to_int(level: str) -> int:
    """Convert level string to logging int."""
    levels = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return levels.get(level.upper(), logging.INFO)
