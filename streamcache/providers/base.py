"""
Transport Base Interface

This module defines the abstract base class for completion transports. The
completion client talks to the remote API only through this interface:
one unary call to list models and one server-streamed call per completion.

Design Pattern:
- Ports and Adapters (Hexagonal Architecture)
- CompletionTransport serves as the "port" (interface)
- OpenAITransport and FakeTransport serve as "adapters"
"""

from abc import ABC, abstractmethod
from typing import AsyncIterator

from streamcache.models.requests import ChatCompletionRequest
from streamcache.models.responses import StreamChunk


class CompletionTransport(ABC):
    """
    Abstract base class for completion transports.

    Implementations must raise StreamError for any failure to open or read
    a stream, and must not retry.

    Methods:
        list_models: Model IDs offered by the endpoint
        stream: Streamed chat completion, one StreamChunk per provider chunk
        aclose: Release the underlying HTTP client
    """

    @abstractmethod
    async def list_models(self) -> list[str]:
        """
        List the model IDs available at the endpoint.

        Returns:
            Model identifiers in provider order.

        Raises:
            StreamError: If the request fails.
        """
        ...

    @abstractmethod
    def stream(self, request: ChatCompletionRequest) -> AsyncIterator[StreamChunk]:
        """
        Open a completion stream for a compiled request.

        Implementations are async generators; the stream ends when the
        provider signals end of stream.

        Args:
            request: The compiled wire request.

        Yields:
            StreamChunk objects in arrival order.

        Raises:
            StreamError: If the stream cannot be opened or fails mid-way.
        """
        ...

    async def aclose(self) -> None:
        """Close underlying resources. Safe to call multiple times."""
        return None
