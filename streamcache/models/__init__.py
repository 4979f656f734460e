"""Models Package - domain, wire request and stream chunk models."""

from streamcache.models.domain import (
    CompletionFunctionCall,
    CompletionFunctionDefinition,
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
from streamcache.models.requests import (
    ChatCompletionRequest,
    ContentPartText,
    FunctionCall,
    FunctionDefinition,
    Message,
    ResponseFormat,
    Tool,
    ToolCall,
)
from streamcache.models.responses import (
    ChunkChoice,
    ChunkDelta,
    FunctionCallDelta,
    StreamChunk,
    ToolCallDelta,
)

__all__ = [
    # Domain
    "CompletionFunctionCall",
    "CompletionFunctionDefinition",
    "CompletionMessage",
    "CompletionRequest",
    "CompletionStatus",
    "CompletionTool",
    "CompletionToolCall",
    "ContentPart",
    "MessageRole",
    "StatusKind",
    "text_content",
    # Requests
    "ChatCompletionRequest",
    "ContentPartText",
    "FunctionCall",
    "FunctionDefinition",
    "Message",
    "ResponseFormat",
    "Tool",
    "ToolCall",
    # Responses
    "ChunkChoice",
    "ChunkDelta",
    "FunctionCallDelta",
    "StreamChunk",
    "ToolCallDelta",
]
