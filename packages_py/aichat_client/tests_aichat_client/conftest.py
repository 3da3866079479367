"""
Shared fixtures for aichat_client tests.
"""
import pytest

import httpx

from aichat_client.agent import ConnectionAgent
from aichat_client.config import (
    ClientConfig,
    ENV_API_KEY,
    ENV_ASSISTANT_ID,
    ENV_BASE_URL,
    ENV_DEBUG,
    resolve_config,
)

BASE_URL = "https://api.example.com/v1"


class RecordingHandler:
    """
    ``httpx.MockTransport`` handler that replays scripted outcomes in order.

    Each outcome is an ``httpx.Response``, an exception to raise, or a
    callable taking the request. Every request seen is recorded.
    """

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.requests = []

    @property
    def call_count(self):
        return len(self.requests)

    def __call__(self, request):
        self.requests.append(request)
        if not self.outcomes:
            raise AssertionError(f"Unexpected request: {request.method} {request.url}")
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        if callable(outcome):
            return outcome(request)
        return outcome


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the caller's AICHAT_* environment out of every test."""
    for name in (ENV_API_KEY, ENV_ASSISTANT_ID, ENV_BASE_URL, ENV_DEBUG):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_agent():
    """Build a ConnectionAgent whose requests are answered by a handler."""

    def factory(handler, timeout=300.0):
        return ConnectionAgent(transport=httpx.MockTransport(handler), timeout=timeout)

    return factory


@pytest.fixture
def make_config(make_agent):
    """Build a ClientConfig wired to a recording handler."""

    def factory(handler, **overrides):
        options = {
            "api_key": "test-key",
            "base_url": BASE_URL,
            "http_agent": make_agent(handler),
        }
        options.update(overrides)
        return ClientConfig(**options)

    return factory


@pytest.fixture
def resolved_config():
    """Resolved config with no agent and default options."""
    return resolve_config(ClientConfig(api_key="test-key", base_url=BASE_URL))


@pytest.fixture
def recorder():
    """The RecordingHandler class, for scripting transport outcomes."""
    return RecordingHandler
