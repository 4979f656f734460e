"""
Completion Cache Store

This module provides the client-side protocol for the completion cache: the
store contract, two adapters, the gzip/JSON codec for chunk sequences, and
the per-context cache bypass switch.

An entry maps a cache key to the full chunk sequence of one successful live
call. Entries are written whole, once, and only ever read afterwards; the
store performs no eviction and this layer performs no locking.

Pattern: Repository pattern with Redis storage
"""

import contextvars
import gzip
import json
import logging
import zlib
from contextlib import contextmanager
from typing import Generator, Optional, Protocol, runtime_checkable

from pydantic import TypeAdapter, ValidationError
from redis.asyncio import Redis
from redis.exceptions import RedisError

from streamcache.core.exceptions import CacheReadError, CacheWriteError
from streamcache.models.responses import StreamChunk

logger = logging.getLogger(__name__)

_chunk_list_adapter = TypeAdapter(list[StreamChunk])


# =============================================================================
# Cache Bypass Context
# =============================================================================

_no_cache_var: contextvars.ContextVar[bool] = contextvars.ContextVar(
    "no_cache", default=False
)


@contextmanager
def no_cache() -> Generator[None, None, None]:
    """
    Disable cache lookups and writes for calls made inside the block.

    Example:
        >>> with no_cache():
        ...     message = await client.call(request, queue)
    """
    token = _no_cache_var.set(True)
    try:
        yield
    finally:
        _no_cache_var.reset(token)


def is_no_cache() -> bool:
    """True inside a ``no_cache()`` block."""
    return _no_cache_var.get()


# =============================================================================
# Chunk Codec
# =============================================================================


def encode_chunks(chunks: list[StreamChunk]) -> bytes:
    """Serialize a chunk sequence to gzip-compressed JSON."""
    payload = json.dumps(
        [chunk.model_dump(mode="json", exclude_none=True) for chunk in chunks]
    )
    return gzip.compress(payload.encode("utf-8"))


def decode_chunks(data: bytes) -> list[StreamChunk]:
    """
    Deserialize a chunk sequence written by encode_chunks.

    Raises:
        CacheReadError: If the data is not gzip-compressed chunk JSON.
    """
    try:
        return _chunk_list_adapter.validate_json(gzip.decompress(data))
    except (OSError, EOFError, zlib.error, ValidationError) as e:
        raise CacheReadError(f"Failed to decode cached chunks: {e}") from e


# =============================================================================
# Store Contract
# =============================================================================


@runtime_checkable
class CacheStore(Protocol):
    """
    Key-value store holding compressed chunk sequences.

    Implementations raise CacheReadError / CacheWriteError on failure.
    """

    async def get(self, key: str) -> tuple[Optional[bytes], bool]:
        """Return (value, found)."""
        ...

    async def store(self, key: str, value: bytes) -> None:
        """Write a whole value for key."""
        ...


class DisabledCacheStore:
    """Store that never finds anything and discards writes."""

    async def get(self, key: str) -> tuple[Optional[bytes], bool]:
        return None, False

    async def store(self, key: str, value: bytes) -> None:
        return None


class RedisCacheStore:
    """
    Cache store backed by Redis.

    Attributes:
        redis: Redis client; must not decode responses (values are bytes)

    Example:
        >>> store = RedisCacheStore(Redis.from_url("redis://localhost:6379"))
    """

    KEY_PREFIX = "streamcache:completion:"

    def __init__(self, redis_client: Redis, key_prefix: Optional[str] = None) -> None:
        self._redis = redis_client
        self._key_prefix = self.KEY_PREFIX if key_prefix is None else key_prefix

    @classmethod
    def from_url(cls, url: str) -> "RedisCacheStore":
        """Create a store for a redis:// or rediss:// URL."""
        return cls(Redis.from_url(url, decode_responses=False))

    def _redis_key(self, key: str) -> str:
        return f"{self._key_prefix}{key}"

    async def get(self, key: str) -> tuple[Optional[bytes], bool]:
        """
        Fetch an entry.

        Raises:
            CacheReadError: If Redis fails.
        """
        try:
            data = await self._redis.get(self._redis_key(key))
        except RedisError as e:
            raise CacheReadError(f"Failed to get cached completion: {e}", key=key) from e

        if data is None:
            return None, False
        return data, True

    async def store(self, key: str, value: bytes) -> None:
        """
        Write an entry. No TTL: entries are never evicted by this layer.

        Raises:
            CacheWriteError: If Redis fails.
        """
        try:
            await self._redis.set(self._redis_key(key), value)
        except RedisError as e:
            raise CacheWriteError(f"Failed to cache completion: {e}", key=key) from e

    async def aclose(self) -> None:
        await self._redis.aclose()


def create_cache_store(redis_url: Optional[str]) -> CacheStore:
    """Redis store when a URL is configured, else a disabled store."""
    if not redis_url:
        logger.debug("no cache redis url configured, completion cache disabled")
        return DisabledCacheStore()
    return RedisCacheStore.from_url(redis_url)
