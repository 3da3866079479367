"""
Newline-Delimited JSON (NDJSON) stream parser.
"""
import codecs
import logging
from typing import Any, AsyncGenerator, AsyncIterable

from ..utils import safe_json

logger = logging.getLogger("aichat_client.ndjson_reader")


async def parse_ndjson_stream(
    body: AsyncIterable[bytes],
) -> AsyncGenerator[Any, None]:
    """
    Parse NDJSON stream from an async iterable body.

    Blank lines are skipped. Lines that are not valid JSON are logged and
    skipped.

    Args:
        body: Async iterable of bytes (httpx response stream).

    Yields:
        Parsed JSON objects.
    """
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    buffer = ""

    async for chunk in body:
        buffer += decoder.decode(chunk)

        lines = buffer.split("\n")

        # Keep the last line in buffer (may be incomplete)
        buffer = lines.pop() if lines else ""

        for line in lines:
            trimmed = line.strip()
            if not trimmed:
                continue
            parsed = safe_json(trimmed)
            if parsed.ok:
                yield parsed.value
            else:
                logger.warning(f"parse_ndjson_stream: skipping malformed line: {trimmed[:80]!r}")

    buffer += decoder.decode(b"", final=True)
    trimmed = buffer.strip()
    if trimmed:
        parsed = safe_json(trimmed)
        if parsed.ok:
            yield parsed.value
        else:
            logger.warning(f"parse_ndjson_stream: skipping malformed line: {trimmed[:80]!r}")
