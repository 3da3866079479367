"""
Single-use async stream over an incrementally delivered response body.
"""
import asyncio
import logging
from typing import Any, AsyncGenerator, AsyncIterator, Callable, Optional, Tuple

import httpx

from ..errors import AIChatError, APIError
from ..headers import ResponseHeaders
from ..utils import race_abort, safe_json
from .ndjson_reader import parse_ndjson_stream
from .sse_reader import is_done_event, parse_sse_data, parse_sse_stream

logger = logging.getLogger("aichat_client.stream")

NDJSON_CONTENT_TYPE = "application/x-ndjson"


class Stream:
    """
    Lazily decoded event records from a streamed response.

    Nothing is read until iteration starts. A stream can be iterated once;
    the body is released when iteration ends, breaks or fails, or when
    ``aclose()`` is called. Setting the request's ``signal`` (or the
    attempt ``controller``) stops iteration with ``APIUserAbortError``.

    Example:
        stream = await client.post("/chat/completions/abc", body=..., stream=True)
        async with stream:
            async for record in stream:
                print(record["token"])
    """

    def __init__(
        self,
        decoder: Callable[["Stream"], AsyncGenerator[Any, None]],
        response: httpx.Response,
        controller: Optional[asyncio.Event] = None,
        signal: Optional[asyncio.Event] = None,
    ) -> None:
        self._decoder = decoder
        self.response = response
        self.controller = controller if controller is not None else asyncio.Event()
        self.signal = signal
        self._consumed = False

    @classmethod
    def from_sse_response(
        cls,
        response: httpx.Response,
        controller: Optional[asyncio.Event] = None,
        signal: Optional[asyncio.Event] = None,
    ) -> "Stream":
        """Decode a ``text/event-stream`` body, one record per ``data:`` event."""
        return cls(_iter_sse, response, controller, signal)

    @classmethod
    def from_ndjson_response(
        cls,
        response: httpx.Response,
        controller: Optional[asyncio.Event] = None,
        signal: Optional[asyncio.Event] = None,
    ) -> "Stream":
        """Decode an ``application/x-ndjson`` body, one record per line."""
        return cls(_iter_ndjson, response, controller, signal)

    @classmethod
    def from_response(
        cls,
        response: httpx.Response,
        controller: Optional[asyncio.Event] = None,
        signal: Optional[asyncio.Event] = None,
    ) -> "Stream":
        """Pick the decoder from the response's content type (SSE by default)."""
        content_type = response.headers.get("content-type", "")
        if NDJSON_CONTENT_TYPE in content_type:
            return cls.from_ndjson_response(response, controller, signal)
        return cls.from_sse_response(response, controller, signal)

    def _claim(self) -> None:
        if self._consumed:
            raise AIChatError(
                "Cannot iterate over a consumed stream; the response body can only be read once."
            )
        self._consumed = True

    def __aiter__(self) -> AsyncIterator[Any]:
        self._claim()
        return self._guarded(self._decoder(self))

    async def iter_text(self) -> AsyncGenerator[str, None]:
        """Yield the body as raw decoded text chunks, undecoded by any framing."""
        self._claim()
        async for chunk in self._guarded(self.response.aiter_text()):
            yield chunk

    async def _guarded(self, source: AsyncIterator[Any]) -> AsyncGenerator[Any, None]:
        try:
            while True:
                received, item = await race_abort(
                    lambda: _next(source), self.signal, self.controller
                )
                if not received:
                    break
                yield item
        finally:
            await self.aclose()

    async def aclose(self) -> None:
        """Stop the stream and release the connection."""
        self.controller.set()
        await self.response.aclose()

    async def __aenter__(self) -> "Stream":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()


async def _next(source: AsyncIterator[Any]) -> Tuple[bool, Any]:
    try:
        return True, await source.__anext__()
    except StopAsyncIteration:
        return False, None


async def _iter_sse(stream: Stream) -> AsyncGenerator[Any, None]:
    async for event in parse_sse_stream(stream.response.aiter_bytes()):
        if is_done_event(event):
            logger.debug("Stream: received end-of-stream sentinel")
            break

        if event.event == "error":
            parsed = safe_json(event.data)
            raise APIError(
                error=parsed.value if parsed.ok else None,
                message=None if parsed.ok else event.data,
                headers=ResponseHeaders.from_response(stream.response),
            )

        data = parse_sse_data(event)
        if data is not None:
            yield data


async def _iter_ndjson(stream: Stream) -> AsyncGenerator[Any, None]:
    async for item in parse_ndjson_stream(stream.response.aiter_bytes()):
        yield item
