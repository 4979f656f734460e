"""
Cache Key Derivation

Two independent content hashes over a compiled wire request:

- ``cache_key`` identifies a request for cache lookup. It covers the client
  identity and the full request, tool call IDs included.
- ``seed`` is sent to the provider for reproducible sampling. It is computed
  over a copy with every tool call ID removed, so conversations that differ
  only in provider-assigned IDs sample alike.

The two intentionally normalize different things. Whether the cache key
should also ignore tool call IDs is an open product question; until it is
answered the key keeps them.
"""

from streamcache.core import hashing
from streamcache.core.config import Settings
from streamcache.models.requests import ChatCompletionRequest


def cache_key_base(settings: Settings) -> str:
    """
    Client-scoped identity mixed into every cache key.

    An explicit ``cache_key`` setting wins; otherwise the identity is derived
    from the API key and endpoint so different accounts never share entries.
    """
    if settings.cache_key:
        return settings.cache_key
    return hashing.id(settings.api_key.get_secret_value(), settings.resolved_base_url)


def cache_key(base: str, request: ChatCompletionRequest) -> str:
    """
    Derive the cache key for a compiled request.

    Args:
        base: Client-scoped identity from cache_key_base().
        request: The compiled wire request.

    Returns:
        Hex digest; changes whenever model, messages, tools or sampling change.
    """
    return hashing.encode(
        {
            "base": base,
            "request": request.model_dump(mode="json", exclude_none=True),
        }
    )


def strip_tool_call_ids(request: ChatCompletionRequest) -> ChatCompletionRequest:
    """Return a deep copy with every tool call ID cleared."""
    stripped = request.model_copy(deep=True)
    for message in stripped.messages:
        message.tool_call_id = None
        for call in message.tool_calls or []:
            call.id = ""
    return stripped


def seed(request: ChatCompletionRequest) -> int:
    """Derive the reproducibility seed for a compiled request."""
    return hashing.seed(
        strip_tool_call_ids(request).model_dump(mode="json", exclude_none=True)
    )
