"""
Streaming Response Models

Pydantic models for raw streamed completion chunks. These are the unit that
is folded into a CompletionMessage and the unit that is persisted in the
cache, so a replayed chunk must validate back to exactly what was received.

Every field is optional: providers omit ids, indices and roles on some chunk
shapes, and unknown provider fields are ignored.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field


class FunctionCallDelta(BaseModel):
    """Fragment of a tool call's function name and arguments."""

    name: Optional[str] = None
    arguments: Optional[str] = None

    model_config = {"extra": "ignore"}


class ToolCallDelta(BaseModel):
    """
    Fragment of a tool call within a streaming chunk.

    Attributes:
        index: Target tool call position (treated as 0 when absent)
        id: Tool call ID (usually only in the first fragment)
        type: Tool type (usually only in the first fragment)
        function: Name and argument fragments
    """

    index: Optional[int] = None
    id: Optional[str] = None
    type: Optional[str] = None
    function: Optional[FunctionCallDelta] = None

    model_config = {"extra": "ignore"}


class ChunkDelta(BaseModel):
    """
    Delta content within a streaming chunk.

    Attributes:
        role: Message role (usually only in first chunk)
        content: Incremental content piece
        tool_calls: Incremental tool call fragments
    """

    role: Optional[str] = Field(default=None, description="Message role")
    content: Optional[str] = Field(default=None, description="Content delta")
    tool_calls: Optional[list[ToolCallDelta]] = Field(
        default=None, description="Tool calls delta"
    )

    model_config = {"extra": "ignore"}


class ChunkChoice(BaseModel):
    """A single choice within a streaming chunk."""

    index: int = Field(default=0, description="Choice index")
    delta: ChunkDelta = Field(default_factory=ChunkDelta, description="Incremental content")
    finish_reason: Optional[str] = Field(default=None, description="Completion stop reason")

    model_config = {"extra": "ignore"}


class StreamChunk(BaseModel):
    """
    One raw chunk of a streamed chat completion.

    Attributes:
        id: Response identifier (same for all chunks of a stream)
        object: Object type (always 'chat.completion.chunk')
        created: Unix timestamp of creation
        model: Model that produced the chunk
        choices: Zero or one choice carrying a delta
        system_fingerprint: Optional system fingerprint
    """

    id: str = Field(default="", description="Response ID")
    object: str = Field(default="chat.completion.chunk", description="Object type")
    created: int = Field(default=0, description="Creation timestamp")
    model: str = Field(default="", description="Model used")
    choices: list[ChunkChoice] = Field(default_factory=list, description="Chunk choices")
    system_fingerprint: Optional[str] = Field(default=None, description="System fingerprint")

    model_config = {"extra": "ignore"}

    @classmethod
    def from_openai(cls, chunk: Any) -> "StreamChunk":
        """Convert an OpenAI SDK ``ChatCompletionChunk`` into a StreamChunk."""
        return cls.model_validate(chunk.model_dump(exclude_none=True))
