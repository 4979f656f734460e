"""
OpenAI Transport

This module implements the completion transport for OpenAI and Azure OpenAI
endpoints on top of the official ``openai`` SDK.

The SDK client is built with retries disabled and no timeout: a failed call
surfaces immediately as StreamError and cancellation is left to the caller.

Design Patterns:
- Ports and Adapters: OpenAITransport implements CompletionTransport
- Adapter Pattern: Transforms SDK chunks into StreamChunk models
"""

import logging
from collections.abc import AsyncIterator
from typing import Any, Optional

import openai
from openai import AsyncAzureOpenAI, AsyncOpenAI

from streamcache.core.config import Settings
from streamcache.core.exceptions import StreamError
from streamcache.models.requests import ChatCompletionRequest
from streamcache.models.responses import StreamChunk
from streamcache.providers.base import CompletionTransport
from streamcache.providers.router import ModelRouter

logger = logging.getLogger(__name__)

DEFAULT_AZURE_API_VERSION = "2023-05-15"

# Local OpenAI-compatible servers accept any bearer token.
PLACEHOLDER_API_KEY = "EMPTY"


class OpenAITransport(CompletionTransport):
    """
    Completion transport for OpenAI-compatible endpoints.

    Args:
        settings: Resolved client settings.
        router: Model router; built from settings when omitted.
        client: Pre-configured SDK client (AsyncOpenAI or AsyncAzureOpenAI).

    Example:
        >>> transport = OpenAITransport(Settings(api_key="sk-..."))
        >>> async for chunk in transport.stream(request):
        ...     print(chunk.choices[0].delta.content)
    """

    def __init__(
        self,
        settings: Settings,
        router: Optional[ModelRouter] = None,
        client: Optional[AsyncOpenAI] = None,
    ) -> None:
        self._router = router or ModelRouter.from_settings(settings)
        self._client = client or self._build_client(settings)

    @staticmethod
    def _build_client(settings: Settings) -> AsyncOpenAI:
        """Build the SDK client for the configured API type."""
        api_key = settings.api_key.get_secret_value()
        base_url = settings.resolved_base_url or None

        if settings.is_azure:
            client_kwargs: dict[str, Any] = {
                "azure_endpoint": base_url,
                "api_version": settings.api_version or DEFAULT_AZURE_API_VERSION,
                "max_retries": 0,
                "timeout": None,
            }
            if settings.api_type == "AZURE_AD":
                client_kwargs["azure_ad_token"] = api_key
            else:
                client_kwargs["api_key"] = api_key
            return AsyncAzureOpenAI(**client_kwargs)

        return AsyncOpenAI(
            api_key=api_key or PLACEHOLDER_API_KEY,
            base_url=base_url,
            organization=settings.org_id or None,
            max_retries=0,
            timeout=None,
        )

    @property
    def router(self) -> ModelRouter:
        return self._router

    async def list_models(self) -> list[str]:
        """
        List model IDs via the models endpoint.

        Raises:
            StreamError: On any SDK error.
        """
        try:
            return [model.id async for model in self._client.models.list()]
        except openai.OpenAIError as e:
            raise self._wrap_error(e) from e

    async def stream(self, request: ChatCompletionRequest) -> AsyncIterator[StreamChunk]:
        """
        Stream a chat completion.

        Args:
            request: The compiled wire request.

        Yields:
            StreamChunk objects as they arrive.

        Raises:
            StreamError: On unmapped models, SDK errors and undecodable chunks.
        """
        model = self._router.map(request.model)
        if not model:
            raise StreamError(f"no deployment configured for model {request.model!r}")

        kwargs = request.to_openai_kwargs()
        kwargs["model"] = model
        kwargs["stream"] = True

        try:
            stream = await self._client.chat.completions.create(**kwargs)
            async with stream:
                async for chunk in stream:
                    yield StreamChunk.from_openai(chunk)
        except openai.OpenAIError as e:
            raise self._wrap_error(e) from e
        except Exception as e:
            # The SDK decodes SSE payloads unwrapped; malformed data surfaces here.
            logger.warning("openai stream failed", extra={"error": type(e).__name__})
            raise StreamError(str(e), provider="openai") from e

    async def aclose(self) -> None:
        await self._client.close()

    @staticmethod
    def _wrap_error(error: openai.OpenAIError) -> StreamError:
        status_code = getattr(error, "status_code", None)
        logger.warning("openai request failed", extra={"status_code": status_code})
        return StreamError(str(error), provider="openai", status_code=status_code)
