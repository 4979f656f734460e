"""
Providers Package - completion transports and model routing.

This package contains the abstract transport interface, the OpenAI/Azure
adapter, a scripted fake for tests, and the deployment model router.
"""

from streamcache.providers.base import CompletionTransport
from streamcache.providers.fake import FakeTransport, text_chunks
from streamcache.providers.openai import OpenAITransport
from streamcache.providers.router import ModelRouter

__all__ = [
    "CompletionTransport",
    "FakeTransport",
    "ModelRouter",
    "OpenAITransport",
    "text_chunks",
]
