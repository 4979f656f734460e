"""streamcache - caching, streaming chat completion client.

Import the client from the package root:

    from streamcache import CompletionClient, CompletionRequest
"""

from streamcache.core import (
    AuthError,
    CacheReadError,
    CacheWriteError,
    MalformedRequestError,
    Settings,
    StreamCacheError,
    StreamError,
    get_settings,
)
from streamcache.models import (
    CompletionMessage,
    CompletionRequest,
    CompletionStatus,
    CompletionTool,
    CompletionToolCall,
    ContentPart,
    MessageRole,
    StatusKind,
    text_content,
)
from streamcache.services import CompletionClient, no_cache

__version__ = "0.1.0"

__all__ = [
    "AuthError",
    "CacheReadError",
    "CacheWriteError",
    "CompletionClient",
    "CompletionMessage",
    "CompletionRequest",
    "CompletionStatus",
    "CompletionTool",
    "CompletionToolCall",
    "ContentPart",
    "MalformedRequestError",
    "MessageRole",
    "Settings",
    "StatusKind",
    "StreamCacheError",
    "StreamError",
    "get_settings",
    "no_cache",
    "text_content",
]
