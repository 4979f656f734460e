"""
Wire Request Models

Pydantic models for the chat completion request as it is sent to an
OpenAI-compatible API. The compiled request is also the input to cache key
and seed derivation, so its dump must be stable: optional fields default to
None and are excluded when hashing.

Anti-Patterns Avoided:
- Optional fields use Optional[T] with explicit None default
- Mutable defaults use default_factory
"""

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field


# =============================================================================
# Message Models
# =============================================================================


class FunctionCall(BaseModel):
    """Function name and JSON-encoded arguments of a tool call."""

    name: str = ""
    arguments: str = ""


class ToolCall(BaseModel):
    """
    A tool call carried on an assistant message.

    Attributes:
        index: Position of the call within the message (if known)
        id: Provider-assigned or backfilled call ID
        type: Always "function"
        function: Function name and arguments
    """

    index: Optional[int] = None
    id: str = ""
    type: Literal["function"] = "function"
    function: FunctionCall = Field(default_factory=FunctionCall)


class ContentPartText(BaseModel):
    """A text part of a multi-part message."""

    type: Literal["text"] = "text"
    text: str


class Message(BaseModel):
    """
    Chat message in wire form.

    Exactly one of content or multi_content is used: a single text part is
    sent as scalar content, anything else as a list of parts.

    Attributes:
        role: Message role (system, user, assistant, tool)
        content: Scalar text content
        multi_content: Multi-part content
        name: Originating function name for tool result messages
        tool_calls: Tool calls requested by an assistant message
        tool_call_id: ID of the call a tool result message answers
    """

    role: str
    content: Optional[str] = None
    multi_content: Optional[list[ContentPartText]] = None
    name: Optional[str] = None
    tool_calls: Optional[list[ToolCall]] = None
    tool_call_id: Optional[str] = None

    def to_openai(self) -> dict[str, Any]:
        """Render the message as an OpenAI SDK message param."""
        data: dict[str, Any] = {"role": self.role}
        if self.multi_content:
            data["content"] = [part.model_dump() for part in self.multi_content]
        elif self.content is not None:
            data["content"] = self.content
        if self.name:
            data["name"] = self.name
        if self.tool_calls:
            data["tool_calls"] = [
                {
                    "id": call.id,
                    "type": call.type,
                    "function": call.function.model_dump(),
                }
                for call in self.tool_calls
            ]
        if self.tool_call_id:
            data["tool_call_id"] = self.tool_call_id
        return data


# =============================================================================
# Tool Models
# =============================================================================


class FunctionDefinition(BaseModel):
    """Function definition for tool calling."""

    name: str
    description: Optional[str] = None
    parameters: Optional[dict[str, Any]] = None


class Tool(BaseModel):
    """Tool definition for function calling."""

    type: Literal["function"] = "function"
    function: FunctionDefinition


class ResponseFormat(BaseModel):
    """Requested response format, e.g. {"type": "json_object"}."""

    type: str


# =============================================================================
# ChatCompletionRequest
# =============================================================================


class ChatCompletionRequest(BaseModel):
    """
    Compiled chat completion request.

    Required Fields:
        model: Canonical model identifier (deployment mapping happens in transport)
        messages: Compiled conversation

    Optional Fields:
        max_tokens: Maximum tokens to generate
        temperature: Sampling temperature (compiled requests always set it)
        response_format: JSON mode
        tools: Function tools
        user: End-user identifier
        seed: Reproducibility seed
    """

    model: str = Field(..., description="Model identifier")
    messages: list[Message] = Field(..., description="Conversation messages")
    max_tokens: Optional[int] = Field(default=None, description="Maximum tokens")
    temperature: Optional[float] = Field(default=None, description="Sampling temperature")
    response_format: Optional[ResponseFormat] = Field(
        default=None, description="Response format"
    )
    tools: Optional[list[Tool]] = Field(default=None, description="Tools for function calling")
    user: Optional[str] = Field(default=None, description="End-user identifier")
    seed: Optional[int] = Field(default=None, description="Random seed")

    def to_openai_kwargs(self) -> dict[str, Any]:
        """
        Build keyword arguments for ``chat.completions.create``.

        The model is left as-is; callers substitute deployment names.
        """
        kwargs: dict[str, Any] = {
            "model": self.model,
            "messages": [message.to_openai() for message in self.messages],
        }
        if self.max_tokens:
            kwargs["max_tokens"] = self.max_tokens
        if self.temperature is not None:
            kwargs["temperature"] = self.temperature
        if self.response_format is not None:
            kwargs["response_format"] = self.response_format.model_dump()
        if self.tools:
            kwargs["tools"] = [tool.model_dump(exclude_none=True) for tool in self.tools]
        if self.user:
            kwargs["user"] = self.user
        if self.seed is not None:
            kwargs["seed"] = self.seed
        return kwargs
