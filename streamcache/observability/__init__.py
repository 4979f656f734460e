"""
Observability Package - structured logging with completion ID correlation.
"""

from streamcache.observability.logging import (
    completion_id_context,
    configure_logging,
    get_completion_id,
    reset_logging,
)

__all__ = [
    "completion_id_context",
    "configure_logging",
    "get_completion_id",
    "reset_logging",
]
