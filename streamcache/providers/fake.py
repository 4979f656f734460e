"""
Fake Transport - Test Double Implementation

This module provides a FakeTransport that implements the real
CompletionTransport interface without making network calls.

This is NOT mocking - it's a proper implementation of the interface with
scripted behavior. It can be used for:
- Unit and integration tests of the completion client
- Local development without API keys
- Demo/sandbox environments
"""

from typing import AsyncIterator, Iterable, Optional

from streamcache.models.requests import ChatCompletionRequest
from streamcache.models.responses import ChunkChoice, ChunkDelta, StreamChunk
from streamcache.providers.base import CompletionTransport


def text_chunks(*pieces: str, role: Optional[str] = "assistant") -> list[StreamChunk]:
    """
    Build a chunk sequence streaming the given text pieces.

    The first chunk carries the role when one is given.

    Example:
        >>> text_chunks("Hel", "lo")
    """
    chunks: list[StreamChunk] = []
    if role:
        chunks.append(StreamChunk(choices=[ChunkChoice(delta=ChunkDelta(role=role))]))
    for piece in pieces:
        chunks.append(StreamChunk(choices=[ChunkChoice(delta=ChunkDelta(content=piece))]))
    return chunks


class FakeTransport(CompletionTransport):
    """
    Fake transport replaying a scripted chunk sequence.

    Attributes:
        chunks: Chunks yielded by every stream() call
        models: Model IDs returned by list_models()
        error: Optional exception raised after ``error_after`` chunks
        error_after: Number of chunks yielded before ``error`` is raised
        stream_calls: Requests passed to stream(), for assertions
        list_calls: Number of list_models() calls
        closed: Whether aclose() was called

    Example:
        >>> transport = FakeTransport(chunks=text_chunks("4"))
        >>> client = CompletionClient(settings, transport=transport)

        # For error testing:
        >>> transport = FakeTransport(chunks=text_chunks("4"), error=StreamError("boom"))
    """

    def __init__(
        self,
        chunks: Optional[Iterable[StreamChunk]] = None,
        models: Optional[list[str]] = None,
        error: Optional[Exception] = None,
        error_after: int = 0,
    ) -> None:
        self.chunks = list(chunks or [])
        self.models = list(models or [])
        self.error = error
        self.error_after = error_after

        self.stream_calls: list[ChatCompletionRequest] = []
        self.list_calls = 0
        self.closed = False

    async def list_models(self) -> list[str]:
        self.list_calls += 1
        return list(self.models)

    async def stream(self, request: ChatCompletionRequest) -> AsyncIterator[StreamChunk]:
        """
        Yield the scripted chunks.

        Raises:
            Exception: The configured error once ``error_after`` chunks were yielded
        """
        self.stream_calls.append(request)

        for i, chunk in enumerate(self.chunks):
            if self.error is not None and i == self.error_after:
                raise self.error
            yield chunk.model_copy(deep=True)

        if self.error is not None:
            raise self.error

    async def aclose(self) -> None:
        self.closed = True
