"""
Server-Sent Events (SSE) stream parser.
"""
import codecs
from typing import Any, AsyncGenerator, AsyncIterable, List, Optional

from ..types import SSEEvent
from ..utils import safe_json

# End-of-stream sentinel (OpenAI-style streams)
DONE_SENTINEL = "[DONE]"


async def parse_sse_stream(
    body: AsyncIterable[bytes],
) -> AsyncGenerator[SSEEvent, None]:
    """
    Parse SSE stream from an async iterable body.

    Args:
        body: Async iterable of bytes (httpx response stream).

    Yields:
        SSEEvent objects.
    """
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    buffer = ""

    async for chunk in body:
        buffer += decoder.decode(chunk)
        buffer = buffer.replace("\r\n", "\n")

        # Split on double newlines (SSE event delimiter)
        parts = buffer.split("\n\n")

        # Keep the last part in buffer (may be incomplete)
        buffer = parts.pop() if parts else ""

        for part in parts:
            event = parse_sse_event(part)
            if event:
                yield event

    # Handle any remaining data
    buffer += decoder.decode(b"", final=True).replace("\r\n", "\n")
    if buffer.strip():
        event = parse_sse_event(buffer)
        if event:
            yield event


def parse_sse_event(text: str) -> Optional[SSEEvent]:
    """
    Parse a single SSE event from text.

    Args:
        text: Raw SSE event text.

    Returns:
        Parsed SSEEvent or None if it carries neither data nor an event name.
    """
    data_lines: List[str] = []
    event_type: Optional[str] = None
    event_id: Optional[str] = None
    retry: Optional[int] = None

    for line in text.split("\n"):
        if line.startswith(":"):
            # Comment line, ignore
            continue

        colon_index = line.find(":")
        if colon_index == -1:
            continue

        field = line[:colon_index]
        value = line[colon_index + 1:]
        if value.startswith(" "):
            value = value[1:]

        if field == "event":
            event_type = value
        elif field == "id":
            event_id = value
        elif field == "retry":
            try:
                retry = int(value)
            except ValueError:
                pass
        elif field == "data":
            data_lines.append(value)

    data = "\n".join(data_lines)

    if not data and not event_type:
        return None

    return SSEEvent(
        data=data,
        id=event_id,
        event=event_type,
        retry=retry,
    )


def is_done_event(event: SSEEvent) -> bool:
    """Whether the event is the end-of-stream sentinel."""
    return event.data.strip() == DONE_SENTINEL


def parse_sse_data(event: SSEEvent) -> Optional[Any]:
    """
    Decode an event's data field.

    Returns:
        The JSON value, the raw text when it is not JSON, or None for an
        empty event or the end-of-stream sentinel.
    """
    if not event.data or is_done_event(event):
        return None

    parsed = safe_json(event.data)
    return parsed.value if parsed.ok else event.data
