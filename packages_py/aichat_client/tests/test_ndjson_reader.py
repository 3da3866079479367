"""
Tests for ndjson_reader.py
Logic testing: Loop, Boundary, Error Path coverage
"""
import logging

import pytest

from aichat_client.streaming.ndjson_reader import parse_ndjson_stream


async def chunked(*chunks: str):
    for chunk in chunks:
        yield chunk.encode("utf-8")


async def collect(source):
    return [item async for item in parse_ndjson_stream(source)]


class TestParseNdjsonStream:
    """Tests for parse_ndjson_stream function."""

    # Happy Path: one record per line
    @pytest.mark.asyncio
    async def test_records(self):
        items = await collect(chunked('{"token":"Hi"}\n{"token":"!"}\n'))
        assert items == [{"token": "Hi"}, {"token": "!"}]

    # Loop: line split across chunks
    @pytest.mark.asyncio
    async def test_split_line(self):
        items = await collect(chunked('{"a"', ':1}\n{"b":', "2}\n"))
        assert items == [{"a": 1}, {"b": 2}]

    # Boundary: last line without newline
    @pytest.mark.asyncio
    async def test_trailing_line(self):
        assert await collect(chunked('{"a":1}\n[1,2]')) == [{"a": 1}, [1, 2]]

    @pytest.mark.asyncio
    async def test_blank_lines(self):
        assert await collect(chunked("\n  \n1\n\r\n2\n")) == [1, 2]

    @pytest.mark.asyncio
    async def test_empty(self):
        assert await collect(chunked()) == []

    # Error Path: malformed lines logged and skipped
    @pytest.mark.asyncio
    async def test_malformed_skipped(self, caplog):
        with caplog.at_level(logging.WARNING, logger="aichat_client.ndjson_reader"):
            items = await collect(chunked('{"ok":1}\n{broken\n{"ok":2}\nnot json'))
        assert items == [{"ok": 1}, {"ok": 2}]
        assert sum("malformed" in record.message for record in caplog.records) == 2
