"""
Domain Models

Provider-agnostic completion request, message and status models. Callers
build a CompletionRequest, receive CompletionStatus events while a call is
in flight, and get a CompletionMessage back.

Pattern: Domain models as value objects validated by Pydantic
Note: These models are distinct from the wire models in requests.py, which
are produced from them by the request compiler.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, model_validator

from streamcache.models.requests import ChatCompletionRequest
from streamcache.models.responses import StreamChunk


# =============================================================================
# Roles
# =============================================================================


class MessageRole:
    """Well-known message roles. Roles are plain strings on the models."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


# =============================================================================
# Tool Calls and Content
# =============================================================================


class CompletionFunctionCall(BaseModel):
    """Function name and arguments; both grow by append while streaming."""

    name: str = ""
    arguments: str = ""


class CompletionToolCall(BaseModel):
    """
    A tool call within a completion message.

    Attributes:
        index: Position among the tool calls of the message.
        id: Call ID; backfilled deterministically when a provider omits it.
        type: Always "function".
        function: Function name and arguments.
    """

    index: Optional[int] = None
    id: str = ""
    type: str = "function"
    function: CompletionFunctionCall = Field(default_factory=CompletionFunctionCall)


class ContentPart(BaseModel):
    """
    One part of a message: free text or a tool call, never both.

    Example:
        >>> ContentPart(text="hello")
        >>> ContentPart(tool_call=CompletionToolCall(id="call_1"))
    """

    text: str = ""
    tool_call: Optional[CompletionToolCall] = None

    @model_validator(mode="after")
    def text_or_tool_call(self) -> "ContentPart":
        if self.text and self.tool_call is not None:
            raise ValueError("content part must be text or a tool call, not both")
        return self

    @property
    def is_tool_call(self) -> bool:
        return self.tool_call is not None


def text_content(value: str) -> list[ContentPart]:
    """Content list holding a single text part."""
    return [ContentPart(text=value)]


class CompletionMessage(BaseModel):
    """
    A role plus an ordered list of content parts.

    Adjacent text parts are merged on construction so a message never holds
    split text.

    Attributes:
        role: Message role; empty while a streamed message has not declared one.
        content: Ordered content parts.
        tool_call: Set on tool result messages to the call being answered.
    """

    role: str = ""
    content: list[ContentPart] = Field(default_factory=list)
    tool_call: Optional[CompletionToolCall] = None

    @model_validator(mode="after")
    def merge_adjacent_text(self) -> "CompletionMessage":
        merged: list[ContentPart] = []
        for part in self.content:
            if merged and not part.is_tool_call and not merged[-1].is_tool_call:
                merged[-1] = ContentPart(text=merged[-1].text + part.text)
            else:
                merged.append(part)
        self.content = merged
        return self

    @property
    def text(self) -> str:
        """Concatenated text of all text parts."""
        return "".join(part.text for part in self.content if not part.is_tool_call)

    @property
    def tool_calls(self) -> list[CompletionToolCall]:
        """Tool calls in content order."""
        return [part.tool_call for part in self.content if part.tool_call is not None]


# =============================================================================
# Tools and Requests
# =============================================================================


class CompletionFunctionDefinition(BaseModel):
    """Function exposed to the model as a tool."""

    name: str
    description: Optional[str] = None
    parameters: Optional[dict[str, Any]] = None


class CompletionTool(BaseModel):
    """Tool definition offered with a request."""

    type: str = "function"
    function: CompletionFunctionDefinition


class CompletionRequest(BaseModel):
    """
    Provider-agnostic completion request.

    Attributes:
        messages: Ordered conversation.
        tools: Tools the model may call.
        model: Model name; empty selects the configured default.
        temperature: Sampling temperature; unset compiles to 0.
        max_tokens: Maximum tokens to generate.
        json_response: Request a JSON object response.
        cache: Unset or True allows cache lookup; False skips it.
        internal_system_prompt: Unset or True prepends the internal system prompt.
    """

    messages: list[CompletionMessage] = Field(default_factory=list)
    tools: list[CompletionTool] = Field(default_factory=list)
    model: str = ""
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    json_response: bool = False
    cache: Optional[bool] = None
    internal_system_prompt: Optional[bool] = None


# =============================================================================
# Status Events
# =============================================================================


class StatusKind(str, Enum):
    """Kind of a status event."""

    SUBMITTED = "submitted"
    PARTIAL = "partial"
    FINAL = "final"


class CompletionStatus(BaseModel):
    """
    Progress event emitted while a call is in flight.

    All events of one call share ``completion_id``.

    Attributes:
        kind: Submitted, partial or final.
        completion_id: Per-call transaction ID.
        request: Compiled wire request (submitted).
        partial_response: Message folded so far (partial).
        chunks: Full chunk sequence (final).
        response: Final message (final).
        cached: Whether the final message was served from the cache (final).
    """

    kind: StatusKind
    completion_id: str
    request: Optional[ChatCompletionRequest] = None
    partial_response: Optional[CompletionMessage] = None
    chunks: Optional[list[StreamChunk]] = None
    response: Optional[CompletionMessage] = None
    cached: bool = False
