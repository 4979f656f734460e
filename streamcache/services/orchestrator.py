"""
Completion Client

This module implements the caching, streaming completion client. One call
compiles the request, derives its cache key, and then either replays a
stored chunk sequence or streams a live completion, emitting progress
events to a caller-supplied sink along the way.

Call lifecycle:
    INIT -> CACHE_LOOKUP -> CACHE_HIT -> REPLAY -> DONE
                         -> CACHE_MISS -> LIVE_CALL -> STREAM -> STORE -> DONE

Status protocol, per call:
- exactly one Submitted event right after compilation;
- on a miss, one "waiting" Partial, then one Partial per received chunk;
- exactly one Final event, with ``cached`` telling which path served it.

The sink is awaited inline with stream consumption and nothing is buffered,
so a sink that stops draining stalls the stream. Errors are never retried:
cache failures surface even when a live call could have answered, and a
failed stream stores nothing.

Pattern: Service Layer (orchestrates compiler, cache, transport, assembler)
Pattern: Dependency Injection (transport, cache store, counter)
"""

import logging
import threading
from contextlib import aclosing
from typing import Optional, Protocol

from streamcache.core.config import Settings, get_settings
from streamcache.core.exceptions import AuthError
from streamcache.models.domain import (
    CompletionMessage,
    CompletionRequest,
    CompletionStatus,
    MessageRole,
    StatusKind,
    text_content,
)
from streamcache.models.requests import ChatCompletionRequest
from streamcache.models.responses import StreamChunk
from streamcache.observability.logging import completion_id_context
from streamcache.providers.base import CompletionTransport
from streamcache.providers.openai import OpenAITransport
from streamcache.services.assembler import StreamAssembler, assemble, backfill_tool_call_ids
from streamcache.services.cache import (
    CacheStore,
    create_cache_store,
    decode_chunks,
    encode_chunks,
    is_no_cache,
)
from streamcache.services.cache_key import cache_key, cache_key_base, seed
from streamcache.services.compiler import compile_request

logger = logging.getLogger(__name__)

WAITING_MESSAGE = "Waiting for model response..."


# =============================================================================
# Status Sink and Transaction IDs
# =============================================================================


class StatusSink(Protocol):
    """Ordered push channel for status events; ``asyncio.Queue`` satisfies it."""

    async def put(self, item: CompletionStatus) -> None:
        ...


class TransactionCounter:
    """
    Thread-safe counter minting per-call transaction IDs.

    IDs are unique for the lifetime of the counter. The module-level
    COMPLETION_IDS instance is shared by every client that is not handed
    its own counter, and is never reset.
    """

    def __init__(self, start: int = 0) -> None:
        self._value = start
        self._lock = threading.Lock()

    def next(self) -> int:
        """Increment and return the new value."""
        with self._lock:
            self._value += 1
            return self._value

    @property
    def value(self) -> int:
        return self._value


COMPLETION_IDS = TransactionCounter()


# =============================================================================
# CompletionClient
# =============================================================================


class CompletionClient:
    """
    Caching, streaming chat completion client.

    Args:
        settings: Resolved settings; the process settings when omitted.
        transport: Completion transport; an OpenAITransport when omitted.
        cache_store: Cache store; built from ``settings.cache_redis_url`` when omitted.
        counter: Transaction ID counter; the process-wide one when omitted.

    Example:
        >>> async with CompletionClient(settings) as client:
        ...     queue: asyncio.Queue[CompletionStatus] = asyncio.Queue()
        ...     message = await client.call(request, queue)
        ...     print(message.text)
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        transport: Optional[CompletionTransport] = None,
        cache_store: Optional[CacheStore] = None,
        counter: Optional[TransactionCounter] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._transport = transport or OpenAITransport(self._settings)
        self._cache = cache_store or create_cache_store(self._settings.cache_redis_url)
        self._counter = counter or COMPLETION_IDS
        self._cache_key_base = cache_key_base(self._settings)
        self._invalid_auth = not self._settings.has_auth

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def default_model(self) -> str:
        return self._settings.default_model

    # =========================================================================
    # Auth and Model Discovery
    # =========================================================================

    def validate_auth(self) -> None:
        """
        Raises:
            AuthError: If neither an API key nor an endpoint is configured.
        """
        if self._invalid_auth:
            raise AuthError()

    async def list_models(self, *providers: str) -> list[str]:
        """
        List the endpoint's models, sorted.

        Args:
            *providers: Provider filter; this client only serves the "" provider,
                so a non-empty filter without "" yields no models.

        Returns:
            Sorted model IDs.

        Raises:
            AuthError: If credentials are missing.
            StreamError: If the transport fails.
        """
        if providers and "" not in providers:
            return []

        self.validate_auth()
        return sorted(await self._transport.list_models())

    async def supports(self, model: str) -> bool:
        """True when the endpoint lists the model."""
        return model in await self.list_models()

    # =========================================================================
    # call()
    # =========================================================================

    async def call(
        self,
        request: CompletionRequest,
        status: Optional[StatusSink] = None,
    ) -> CompletionMessage:
        """
        Complete a request, from the cache when possible.

        Args:
            request: The completion request.
            status: Sink for status events; None disables them.

        Returns:
            The assembled assistant message, tool call IDs backfilled.

        Raises:
            AuthError: Credentials missing; nothing else is attempted.
            MalformedRequestError: No messages remain after compilation.
            CacheReadError: The cache lookup failed or the entry is unreadable.
            StreamError: The live stream failed; nothing is cached.
            CacheWriteError: The completed stream could not be stored.
        """
        self.validate_auth()

        if not request.model:
            request = request.model_copy(update={"model": self._settings.default_model})

        wire = compile_request(request, user=self._settings.user)

        completion_id = str(self._counter.next())
        with completion_id_context(completion_id):
            await self._emit(
                status,
                CompletionStatus(
                    kind=StatusKind.SUBMITTED,
                    completion_id=completion_id,
                    request=wire.model_copy(deep=True),
                ),
            )

            if self._settings.set_seed:
                wire.seed = seed(wire)

            chunks = await self._from_cache(request, wire)
            cached = chunks is not None
            if chunks is None:
                chunks = await self._call_live(wire, completion_id, status)

            message = backfill_tool_call_ids(assemble(chunks))

            await self._emit(
                status,
                CompletionStatus(
                    kind=StatusKind.FINAL,
                    completion_id=completion_id,
                    chunks=chunks,
                    response=message.model_copy(deep=True),
                    cached=cached,
                ),
            )
            return message

    # =========================================================================
    # Cache Path
    # =========================================================================

    def _cache_key(self, wire: ChatCompletionRequest) -> str:
        return cache_key(self._cache_key_base, wire)

    async def _from_cache(
        self,
        request: CompletionRequest,
        wire: ChatCompletionRequest,
    ) -> Optional[list[StreamChunk]]:
        """Stored chunks for the request, or None on a miss or when bypassed."""
        if is_no_cache() or request.cache is False:
            return None

        key = self._cache_key(wire)
        data, found = await self._cache.get(key)
        if not found or data is None:
            logger.debug("cache miss", extra={"cache_key": key})
            return None

        chunks = decode_chunks(data)
        logger.debug("cache hit", extra={"cache_key": key, "chunks": len(chunks)})
        return chunks

    async def _store(self, key: str, chunks: list[StreamChunk]) -> None:
        if is_no_cache():
            return
        await self._cache.store(key, encode_chunks(chunks))
        logger.debug("cache store", extra={"cache_key": key, "chunks": len(chunks)})

    # =========================================================================
    # Live Path
    # =========================================================================

    async def _call_live(
        self,
        wire: ChatCompletionRequest,
        completion_id: str,
        status: Optional[StatusSink],
    ) -> list[StreamChunk]:
        key = self._cache_key(wire)

        await self._emit(
            status,
            CompletionStatus(
                kind=StatusKind.PARTIAL,
                completion_id=completion_id,
                partial_response=CompletionMessage(
                    role=MessageRole.ASSISTANT,
                    content=text_content(WAITING_MESSAGE),
                ),
            ),
        )

        logger.debug(
            "calling openai",
            extra={"messages": [m.model_dump(exclude_none=True) for m in wire.messages]},
        )

        assembler = StreamAssembler()
        chunks: list[StreamChunk] = []
        async with aclosing(self._transport.stream(wire)) as stream:
            async for chunk in stream:
                if chunk.choices:
                    logger.debug("stream", extra={"content": chunk.choices[0].delta.content})
                if status is not None:
                    assembler.feed(chunk)
                    await status.put(
                        CompletionStatus(
                            kind=StatusKind.PARTIAL,
                            completion_id=completion_id,
                            partial_response=assembler.snapshot(),
                        )
                    )
                chunks.append(chunk)

        await self._store(key, chunks)
        return chunks

    @staticmethod
    async def _emit(status: Optional[StatusSink], event: CompletionStatus) -> None:
        if status is not None:
            await status.put(event)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def aclose(self) -> None:
        """Close the transport and, when it supports it, the cache store."""
        await self._transport.aclose()
        close = getattr(self._cache, "aclose", None)
        if close is not None:
            await close()

    async def __aenter__(self) -> "CompletionClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
