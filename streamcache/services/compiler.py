"""
Request Compiler

Pure transform from a provider-agnostic CompletionRequest into the wire
ChatCompletionRequest sent to the provider and hashed for the cache.

Rules:
- The internal system prompt leads the conversation unless disabled.
- System messages followed by a system or user message are hoisted into one
  leading, newline-joined system message. Any other system message (trailing,
  or followed by an assistant/tool turn) is demoted to the user role.
- Single-text messages use scalar content; the placeholder texts "." and "{}"
  drop the message entirely.
- Temperature is always explicit, defaulting to 0.
"""

from typing import Optional

from streamcache.core.exceptions import MalformedRequestError
from streamcache.models.domain import (
    CompletionMessage,
    CompletionRequest,
    CompletionToolCall,
    MessageRole,
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


INTERNAL_SYSTEM_PROMPT = """You are task oriented system.
You receive input from a user, process the input from the given instructions, and then output the result.
Your objective is to provide consistent and correct results.
You do not need to explain the steps taken, only provide the result to the given instructions.
You are referred to as a tool.
You don't move to the next step until you have a result.
"""

# Upstream placeholders for intentionally empty tool results.
SENTINEL_TEXTS = frozenset({".", "{}"})

DEFAULT_TEMPERATURE = 0.0


def to_tool_call(call: CompletionToolCall) -> ToolCall:
    """Convert a domain tool call to its wire form."""
    return ToolCall(
        index=call.index,
        id=call.id,
        type="function",
        function=FunctionCall(name=call.function.name, arguments=call.function.arguments),
    )


def _coalesce_system_messages(request: CompletionRequest) -> list[CompletionMessage]:
    system_prompts: list[str] = []
    if request.internal_system_prompt is None or request.internal_system_prompt:
        system_prompts.append(INTERNAL_SYSTEM_PROMPT)

    messages: list[CompletionMessage] = []
    last = len(request.messages) - 1
    for i, message in enumerate(request.messages):
        if message.role == MessageRole.SYSTEM:
            successor: Optional[str] = (
                request.messages[i + 1].role if i < last else None
            )
            if successor in (MessageRole.SYSTEM, MessageRole.USER):
                system_prompts.append(message.text)
                continue
            message = message.model_copy(update={"role": MessageRole.USER})
        messages.append(message)

    if system_prompts:
        messages.insert(
            0,
            CompletionMessage(
                role=MessageRole.SYSTEM,
                content=text_content("\n".join(system_prompts)),
            ),
        )
    return messages


def _to_wire_message(message: CompletionMessage) -> Optional[Message]:
    """Compile one message; None when it collapses to a sentinel placeholder."""
    wire = Message(role=message.role)

    if message.tool_call is not None:
        wire.tool_call_id = message.tool_call.id
        # Azure expects the originating function name on tool results.
        wire.name = message.tool_call.function.name

    tool_calls: list[ToolCall] = []
    parts: list[ContentPartText] = []
    for part in message.content:
        if part.tool_call is not None:
            tool_calls.append(to_tool_call(part.tool_call))
        if part.text:
            parts.append(ContentPartText(text=part.text))

    if tool_calls:
        wire.tool_calls = tool_calls

    if len(parts) == 1:
        if parts[0].text in SENTINEL_TEXTS:
            return None
        wire.content = parts[0].text
    elif parts:
        wire.multi_content = parts

    return wire


def compile_messages(request: CompletionRequest) -> list[Message]:
    """
    Compile the conversation of a request into wire messages.

    Args:
        request: The abstract completion request.

    Returns:
        Wire messages; may be empty.
    """
    result: list[Message] = []
    for message in _coalesce_system_messages(request):
        wire = _to_wire_message(message)
        if wire is not None:
            result.append(wire)
    return result


def compile_request(request: CompletionRequest, user: str = "") -> ChatCompletionRequest:
    """
    Compile a CompletionRequest into a wire ChatCompletionRequest.

    The request model must already be resolved (empty models are replaced by
    the configured default before compilation).

    Args:
        request: The abstract completion request.
        user: End-user identifier to attach.

    Returns:
        The compiled wire request.

    Raises:
        MalformedRequestError: If no messages remain after compilation.
    """
    messages = compile_messages(request)
    if not messages:
        raise MalformedRequestError(
            "invalid request, no messages to send to the model", model=request.model
        )

    wire = ChatCompletionRequest(
        model=request.model,
        messages=messages,
        max_tokens=request.max_tokens,
        temperature=(
            DEFAULT_TEMPERATURE if request.temperature is None else request.temperature
        ),
        user=user or None,
    )

    if request.json_response:
        wire.response_format = ResponseFormat(type="json_object")

    if request.tools:
        wire.tools = [
            Tool(
                function=FunctionDefinition(
                    name=tool.function.name,
                    description=tool.function.description,
                    parameters=tool.function.parameters,
                )
            )
            for tool in request.tools
        ]

    return wire
