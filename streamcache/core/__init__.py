"""
Core module for streamcache.

This module contains configuration, exceptions, and content hashing.
"""

from streamcache.core.config import Settings, get_settings
from streamcache.core.exceptions import (
    AuthError,
    CacheError,
    CacheReadError,
    CacheWriteError,
    ErrorCode,
    MalformedRequestError,
    StreamCacheError,
    StreamError,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Exceptions
    "ErrorCode",
    "StreamCacheError",
    "AuthError",
    "MalformedRequestError",
    "CacheError",
    "CacheReadError",
    "CacheWriteError",
    "StreamError",
]
