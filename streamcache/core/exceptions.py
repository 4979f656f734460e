"""
Custom exceptions for streamcache.

This module provides the exception hierarchy raised by the completion client.
All exceptions inherit from StreamCacheError and carry an error code for
consistent handling and logging.

Errors are raised where they are detected and propagate unmodified to the
caller. Nothing in the package retries or falls back: a cache read failure is
surfaced even when a live call would likely have succeeded.
"""

from enum import Enum
from typing import Any


# =============================================================================
# Error Codes
# =============================================================================


class ErrorCode(str, Enum):
    """
    Error codes for streamcache exceptions.

    These codes provide a consistent way to identify error types in logs and
    in caller-side handling.
    """

    STREAMCACHE_ERROR = "STREAMCACHE_ERROR"
    AUTH_ERROR = "AUTH_ERROR"
    MALFORMED_REQUEST = "MALFORMED_REQUEST"
    CACHE_READ_ERROR = "CACHE_READ_ERROR"
    CACHE_WRITE_ERROR = "CACHE_WRITE_ERROR"
    STREAM_ERROR = "STREAM_ERROR"


# =============================================================================
# Base Exception
# =============================================================================


class StreamCacheError(Exception):
    """
    Base exception for all streamcache errors.

    Attributes:
        message: Human-readable error message.
        error_code: Machine-readable error code from ErrorCode enum.
    """

    def __init__(
        self,
        message: str,
        error_code: str = ErrorCode.STREAMCACHE_ERROR,
        **kwargs: Any,
    ) -> None:
        """
        Initialize the exception.

        Args:
            message: Human-readable error message.
            error_code: Machine-readable error code.
            **kwargs: Additional attributes to set on the exception.
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code

        for key, value in kwargs.items():
            setattr(self, key, value)


# =============================================================================
# AuthError
# =============================================================================


class AuthError(StreamCacheError):
    """
    Raised when neither an API key nor a base URL is configured.

    Surfaced before any cache lookup or network attempt.
    """

    def __init__(
        self,
        message: str = (
            "OPENAI_API_KEY is not set. Please set the OPENAI_API_KEY "
            "environment variable"
        ),
        error_code: str = ErrorCode.AUTH_ERROR,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, error_code, **kwargs)


# =============================================================================
# MalformedRequestError
# =============================================================================


class MalformedRequestError(StreamCacheError):
    """
    Raised when a completion request compiles to an empty message list.

    Attributes:
        model: Model the request was addressed to (if known).
    """

    def __init__(
        self,
        message: str,
        model: str | None = None,
        error_code: str = ErrorCode.MALFORMED_REQUEST,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, error_code, **kwargs)
        self.model = model


# =============================================================================
# Cache Errors
# =============================================================================


class CacheError(StreamCacheError):
    """
    Base exception for cache store contract failures.

    Attributes:
        key: Cache key involved in the failed operation.
    """

    def __init__(
        self,
        message: str,
        key: str | None = None,
        error_code: str = ErrorCode.CACHE_READ_ERROR,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, error_code, **kwargs)
        self.key = key


class CacheReadError(CacheError):
    """Raised when a cache entry cannot be fetched or decoded."""

    def __init__(
        self,
        message: str,
        key: str | None = None,
        error_code: str = ErrorCode.CACHE_READ_ERROR,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, key, error_code, **kwargs)


class CacheWriteError(CacheError):
    """Raised when a completed chunk sequence cannot be written back."""

    def __init__(
        self,
        message: str,
        key: str | None = None,
        error_code: str = ErrorCode.CACHE_WRITE_ERROR,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, key, error_code, **kwargs)


# =============================================================================
# StreamError
# =============================================================================


class StreamError(StreamCacheError):
    """
    Raised when the transport fails to open or read a completion stream.

    Partial results of a failed stream are never written to the cache.

    Attributes:
        provider: Name of the provider (e.g., "openai").
        status_code: HTTP status code from the provider API (if applicable).
    """

    def __init__(
        self,
        message: str,
        provider: str = "openai",
        status_code: int | None = None,
        error_code: str = ErrorCode.STREAM_ERROR,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, error_code, **kwargs)
        self.provider = provider
        self.status_code = status_code
