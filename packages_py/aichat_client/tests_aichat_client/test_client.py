"""
Tests for client.py and the resources package
Logic testing: Path coverage, Decision/Branch
"""
import json

import httpx
import pytest

from aichat_client import AIChatClient, Assistant, Discussion, Stream
from aichat_client.config import ClientConfig
from aichat_client.errors import AIChatError, NotFoundError
from aichat_client.resources import APIEnvelope


def envelope(data):
    return {"data": data, "status": {"timestamp": 1700000000, "error_code": 0, "error_message": None}}


class TestAIChatClient:
    """Tests for AIChatClient construction and auth."""

    def test_keyword_options(self, make_agent, recorder):
        client = AIChatClient(api_key="sk-1", assistant_id="a1", http_agent=make_agent(recorder()))
        assert client.api_key == "sk-1"
        assert client.assistant_id == "a1"
        assert client.base_url == "https://ai.fastlybot.com/v1"

    def test_config_and_options_rejected(self):
        with pytest.raises(TypeError):
            AIChatClient(ClientConfig(api_key="k"), api_key="other")

    # Decision: environment supplies the key
    def test_env_api_key(self, monkeypatch):
        monkeypatch.setenv("AICHAT_API_KEY", "env-key")
        assert AIChatClient().api_key == "env-key"

    @pytest.mark.asyncio
    async def test_bearer_header(self, make_config, recorder):
        handler = recorder(httpx.Response(200, json={}))
        client = AIChatClient(make_config(handler))
        await client.get("/ping")
        headers = handler.requests[0].headers
        assert headers["authorization"] == "Bearer test-key"
        assert headers["user-agent"].startswith("AIChatClient/Python ")

    @pytest.mark.asyncio
    async def test_context_manager_closes(self, make_config, recorder):
        async with AIChatClient(make_config(recorder())) as client:
            pass
        with pytest.raises(RuntimeError):
            client.get("/x")


class TestAssistantResource:
    """Tests for client.assistant."""

    # Happy Path: profile unwrapped from the envelope
    @pytest.mark.asyncio
    async def test_info(self, make_config, recorder):
        handler = recorder(httpx.Response(200, json=envelope({"id": "a1", "name": "Bot", "color": "#fff"})))
        client = AIChatClient(make_config(handler))
        assistant = await client.assistant.info("a1")
        assert isinstance(assistant, Assistant)
        assert assistant.name == "Bot"
        assert assistant.color == "#fff"
        assert str(handler.requests[0].url) == "https://api.example.com/v1/assistant/info/a1"

    # Path: raw envelope still reachable through the same exchange
    @pytest.mark.asyncio
    async def test_info_both(self, make_config, recorder):
        handler = recorder(httpx.Response(200, json=envelope({"id": "a1", "name": "Bot"})))
        client = AIChatClient(make_config(handler))
        result = client.assistant.info("a1")
        both = await result.both()
        assert both.data.name == "Bot"
        assert both.response.status_code == 200
        assert handler.call_count == 1

    # Decision: configured assistant used by default
    @pytest.mark.asyncio
    async def test_info_default_assistant(self, make_config, recorder):
        handler = recorder(httpx.Response(200, json=envelope({"id": "cfg"})))
        client = AIChatClient(make_config(handler, assistant_id="cfg"))
        assert (await client.assistant.info()).id == "cfg"

    def test_info_without_assistant(self, make_config, recorder):
        client = AIChatClient(make_config(recorder()))
        with pytest.raises(AIChatError, match="assistant_id is required"):
            client.assistant.info()

    @pytest.mark.asyncio
    async def test_info_not_found(self, make_config, recorder):
        handler = recorder(httpx.Response(404, json={"message": "Assistant not found"}))
        client = AIChatClient(make_config(handler))
        with pytest.raises(NotFoundError):
            await client.assistant.info("missing")
        assert handler.call_count == 1


class TestChatResource:
    """Tests for client.chat."""

    @pytest.mark.asyncio
    async def test_create(self, make_config, recorder):
        handler = recorder(httpx.Response(200, json=envelope({"id": "d1", "title": "New chat", "assistant_id": "a1"})))
        client = AIChatClient(make_config(handler))
        discussion = await client.chat.create("a1")
        assert isinstance(discussion, Discussion)
        assert discussion.id == "d1"
        request = handler.requests[0]
        assert request.method == "POST"
        assert str(request.url) == "https://api.example.com/v1/chat/create-chat"
        assert json.loads(request.content) == {"input": {"assistant_id": "a1"}}

    # Happy Path: streamed answer decoded record by record
    @pytest.mark.asyncio
    async def test_completions_stream(self, make_config, recorder):
        body = b'data: {"token":"Hi"}\n\ndata: {"token":"!"}\n\ndata: [DONE]\n\n'
        handler = recorder(httpx.Response(200, content=body, headers={"content-type": "text/event-stream"}))
        client = AIChatClient(make_config(handler))
        stream = await client.chat.completions("d1", "Hello")
        assert isinstance(stream, Stream)
        records = [record async for record in stream]
        assert records == [{"token": "Hi"}, {"token": "!"}]
        request = handler.requests[0]
        assert str(request.url) == "https://api.example.com/v1/chat/completions/d1"
        assert json.loads(request.content) == {"input": {"user": "Hello"}}

    # Path: plain-text answer read through iter_text
    @pytest.mark.asyncio
    async def test_completions_text(self, make_config, recorder):
        handler = recorder(httpx.Response(200, text="Hello there"))
        client = AIChatClient(make_config(handler))
        stream = await client.chat.completions("d1", "Hi")
        assert "".join([chunk async for chunk in stream.iter_text()]) == "Hello there"


class TestModels:
    """Tests for the pydantic response models."""

    def test_envelope_defaults(self):
        parsed = APIEnvelope.model_validate({"data": [1]})
        assert parsed.data == [1]
        assert parsed.status.error_code is None

    def test_assistant_created_at(self):
        assistant = Assistant.model_validate({"id": "a1", "created_at": "2024-05-01T10:00:00Z"})
        assert assistant.created_at.year == 2024

    def test_discussion_requires_id(self):
        with pytest.raises(ValueError):
            Discussion.model_validate({"title": "x"})


class TestReservedOptions:
    """Tests for per-call options that endpoints set themselves."""

    # Error Path: body cannot be overridden on create
    def test_create_rejects_body(self, make_config, recorder):
        handler = recorder()
        client = AIChatClient(make_config(handler))
        with pytest.raises(AIChatError, match="body"):
            client.chat.create("a1", body={"other": True})
        assert handler.call_count == 0

    @pytest.mark.parametrize("option", [{"body": {}}, {"stream": False}])
    def test_completions_rejects_body_and_stream(self, make_config, recorder, option):
        client = AIChatClient(make_config(recorder()))
        with pytest.raises(AIChatError, match=next(iter(option))):
            client.chat.completions("d1", "Hi", **option)

    # Path: other per-call options still pass through
    @pytest.mark.asyncio
    async def test_create_passes_headers(self, make_config, recorder):
        handler = recorder(httpx.Response(200, json=envelope({"id": "d1"})))
        client = AIChatClient(make_config(handler))
        await client.chat.create("a1", headers={"X-Trace": "t1"})
        assert handler.requests[0].headers["x-trace"] == "t1"
