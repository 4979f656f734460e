"""
Integration Test Infrastructure

Fixtures for tests that wire the completion client to real adapters: the
OpenAI transport over a scripted SDK client, and Redis. Tests that need a
live Redis server skip unless one answers at INTEGRATION_REDIS_URL.
"""

import os
from typing import Any, AsyncIterator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
import redis
import redis.asyncio as aioredis
from openai.types.chat import ChatCompletionChunk


# =============================================================================
# Redis Fixtures
# =============================================================================


@pytest.fixture(scope="session")
def redis_url() -> str:
    """Redis URL from the environment, or the local default."""
    return os.getenv("INTEGRATION_REDIS_URL", "redis://localhost:6379/15")


@pytest.fixture(scope="session")
def redis_available(redis_url: str) -> bool:
    """True when a Redis server answers PING at redis_url."""
    client = redis.Redis.from_url(redis_url, socket_connect_timeout=1)
    try:
        return bool(client.ping())
    except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError):
        return False
    finally:
        client.close()


@pytest.fixture
def skip_if_no_redis(redis_available: bool) -> None:
    """Skip the test when no Redis server is reachable."""
    if not redis_available:
        pytest.skip("Redis not available - set INTEGRATION_REDIS_URL or start a local server")


@pytest_asyncio.fixture
async def clean_redis(skip_if_no_redis, redis_url: str) -> AsyncIterator[aioredis.Redis]:
    """
    Async Redis client on a flushed database.

    The database is flushed before and after each test.
    """
    client = aioredis.from_url(redis_url, decode_responses=False)
    await client.flushdb()
    try:
        yield client
    finally:
        await client.flushdb()
        await client.aclose()


# =============================================================================
# Scripted SDK Client
# =============================================================================


class ScriptedStream:
    """Async iterable, async context manager stand-in for openai.AsyncStream."""

    def __init__(self, chunks: list[ChatCompletionChunk]) -> None:
        self._chunks = chunks

    async def __aenter__(self) -> "ScriptedStream":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        return None

    async def __aiter__(self):
        for chunk in self._chunks:
            yield chunk


def sdk_chunks(*pieces: str) -> list[ChatCompletionChunk]:
    """SDK chunks streaming an assistant reply piece by piece."""
    deltas: list[dict[str, Any]] = [{"role": "assistant"}]
    deltas.extend({"content": piece} for piece in pieces)
    return [
        ChatCompletionChunk.model_validate(
            {
                "id": "chatcmpl-integration",
                "object": "chat.completion.chunk",
                "created": 1700000000,
                "model": "gpt-4-turbo-preview",
                "choices": [{"index": 0, "delta": delta, "finish_reason": None}],
            }
        )
        for delta in deltas
    ]


@pytest.fixture
def sdk_client() -> MagicMock:
    """SDK client whose chat completions stream "4"."""
    client = MagicMock()
    client.close = AsyncMock()
    client.chat.completions.create = AsyncMock(
        side_effect=lambda **kwargs: ScriptedStream(sdk_chunks("4"))
    )
    return client
