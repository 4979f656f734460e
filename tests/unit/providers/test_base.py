"""
Tests for Transport Base Interface
"""

from abc import ABC

import pytest

from streamcache.models.requests import ChatCompletionRequest, Message
from streamcache.models.responses import StreamChunk
from streamcache.providers.base import CompletionTransport


class TestCompletionTransportAbstractClass:
    def test_is_abstract(self) -> None:
        assert issubclass(CompletionTransport, ABC)

    def test_cannot_be_instantiated_directly(self) -> None:
        with pytest.raises(TypeError):
            CompletionTransport()  # type: ignore[abstract]

    def test_subclass_missing_stream_cannot_be_instantiated(self) -> None:
        class ListOnly(CompletionTransport):
            async def list_models(self) -> list[str]:
                return []

        with pytest.raises(TypeError):
            ListOnly()  # type: ignore[abstract]


class TestConcreteTransport:
    """A minimal concrete transport gets a no-op aclose()."""

    @pytest.mark.asyncio
    async def test_concrete_transport(self) -> None:
        class EchoTransport(CompletionTransport):
            async def list_models(self) -> list[str]:
                return ["echo"]

            async def stream(self, request: ChatCompletionRequest):
                yield StreamChunk(model=request.model)

        transport = EchoTransport()
        request = ChatCompletionRequest(model="echo", messages=[Message(role="user", content="hi")])

        chunks = [chunk async for chunk in transport.stream(request)]

        assert chunks[0].model == "echo"
        assert await transport.list_models() == ["echo"]
        assert await transport.aclose() is None
