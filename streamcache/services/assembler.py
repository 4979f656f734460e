"""
Stream Assembler

Folds streamed completion chunks into a single CompletionMessage.

The fold is a plain left fold, so assembling a whole chunk sequence at once
gives the same message as feeding it chunk by chunk. A cache replay and a
live stream of the same chunks are therefore indistinguishable to callers.

Fold step for the first choice of each chunk:
1. A non-empty delta role replaces the accumulated role.
2. Each tool call fragment targets its index (0 when absent). Missing slots
   up to that index are filled with empty tool call placeholders so calls
   whose first fragment arrives early keep their position. The ID is
   replaced only by a non-empty ID; name and arguments are appended.
3. Delta text is appended to the first text part, or starts one.
"""

from typing import Iterable, Optional

from streamcache.core import hashing
from streamcache.models.domain import (
    CompletionMessage,
    CompletionToolCall,
    ContentPart,
)
from streamcache.models.responses import StreamChunk, ToolCallDelta

TOOL_CALL_ID_PREFIX = "call_"


def _override(current: str, new: Optional[str]) -> str:
    return new if new else current


def _tool_call_slot(message: CompletionMessage, index: int) -> CompletionToolCall:
    """Return the tool call at index, creating placeholders up to it."""
    while len(message.content) <= index:
        message.content.append(
            ContentPart(tool_call=CompletionToolCall(index=len(message.content)))
        )

    part = message.content[index]
    if part.tool_call is None:
        # A text part occupies the slot: the tool call takes the position and
        # the text moves right.
        part = ContentPart(tool_call=CompletionToolCall(index=index))
        message.content.insert(index, part)
    return part.tool_call


def _apply_tool_call(message: CompletionMessage, fragment: ToolCallDelta) -> None:
    index = fragment.index if fragment.index is not None else 0
    call = _tool_call_slot(message, index)

    if fragment.index is not None:
        call.index = fragment.index
    call.id = _override(call.id, fragment.id)
    if fragment.function is not None:
        call.function.name += fragment.function.name or ""
        call.function.arguments += fragment.function.arguments or ""


def _apply_text(message: CompletionMessage, text: str) -> None:
    for i, part in enumerate(message.content):
        if part.is_tool_call:
            continue
        message.content[i] = ContentPart(text=part.text + text)
        return
    message.content.append(ContentPart(text=text))


def append_chunk(message: CompletionMessage, chunk: StreamChunk) -> CompletionMessage:
    """
    Fold one chunk into a message, in place.

    Args:
        message: Accumulated message; mutated.
        chunk: Next raw chunk. Chunks without choices are ignored.

    Returns:
        The same message, for chaining.
    """
    if not chunk.choices:
        return message

    delta = chunk.choices[0].delta
    message.role = _override(message.role, delta.role)

    for fragment in delta.tool_calls or []:
        _apply_tool_call(message, fragment)

    if delta.content:
        _apply_text(message, delta.content)

    return message


def assemble(chunks: Iterable[StreamChunk]) -> CompletionMessage:
    """Fold a whole chunk sequence into a new message."""
    message = CompletionMessage()
    for chunk in chunks:
        append_chunk(message, chunk)
    return message


def synthetic_tool_call_id(call: CompletionToolCall) -> str:
    """Deterministic ID for a tool call, from its name and full arguments."""
    return TOOL_CALL_ID_PREFIX + hashing.id(call.function.name, call.function.arguments)[:8]


def backfill_tool_call_ids(message: CompletionMessage) -> CompletionMessage:
    """
    Assign synthetic IDs to tool calls that finished without one.

    Some providers omit IDs on certain call shapes; callers need an ID to
    answer the call.
    """
    for call in message.tool_calls:
        if not call.id:
            call.id = synthetic_tool_call_id(call)
    return message


class StreamAssembler:
    """
    Incremental assembler for a single stream.

    Example:
        >>> assembler = StreamAssembler()
        >>> for chunk in chunks:
        ...     assembler.feed(chunk)
        ...     print(assembler.snapshot().text)
        >>> message = assembler.finish()
    """

    def __init__(self) -> None:
        self._message = CompletionMessage()

    @property
    def message(self) -> CompletionMessage:
        """The accumulated message (live object, mutated by feed)."""
        return self._message

    def feed(self, chunk: StreamChunk) -> CompletionMessage:
        """Fold the next chunk and return the accumulated message."""
        return append_chunk(self._message, chunk)

    def snapshot(self) -> CompletionMessage:
        """Independent copy of the message folded so far."""
        return self._message.model_copy(deep=True)

    def finish(self) -> CompletionMessage:
        """Backfill missing tool call IDs and return the message."""
        return backfill_tool_call_ids(self._message)
