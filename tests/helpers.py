"""Builders for messages, chunks and status queues shared by the test suite."""

import asyncio
from typing import Any

from streamcache.models.domain import CompletionMessage, CompletionStatus, text_content
from streamcache.models.responses import StreamChunk

def message(role: str, text: str) -> CompletionMessage:
    """Build a single-text completion message."""
    return CompletionMessage(role=role, content=text_content(text))


def chunk(**delta: Any) -> StreamChunk:
    """Build a one-choice chunk from delta fields."""
    return StreamChunk.model_validate({"choices": [{"index": 0, "delta": delta}]})


def tool_fragment(
    index: int | None = None,
    id: str | None = None,
    name: str | None = None,
    arguments: str | None = None,
) -> StreamChunk:
    """Build a chunk carrying a single tool call fragment."""
    fragment: dict[str, Any] = {}
    if index is not None:
        fragment["index"] = index
    if id is not None:
        fragment["id"] = id
    function: dict[str, Any] = {}
    if name is not None:
        function["name"] = name
    if arguments is not None:
        function["arguments"] = arguments
    if function:
        fragment["function"] = function
    return chunk(tool_calls=[fragment])


async def drain(queue: asyncio.Queue) -> list[CompletionStatus]:
    """Collect every event currently in a status queue."""
    events: list[CompletionStatus] = []
    while not queue.empty():
        events.append(queue.get_nowait())
    return events
