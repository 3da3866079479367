"""
Streaming decoders for aichat_client.
"""
from .sse_reader import (
    parse_sse_stream,
    parse_sse_event,
    parse_sse_data,
    is_done_event,
    DONE_SENTINEL,
)
from .ndjson_reader import parse_ndjson_stream
from .stream import Stream

__all__ = [
    "parse_sse_stream",
    "parse_sse_event",
    "parse_sse_data",
    "is_done_event",
    "DONE_SENTINEL",
    "parse_ndjson_stream",
    "Stream",
]
