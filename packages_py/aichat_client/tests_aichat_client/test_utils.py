"""
Tests for utils.py
Logic testing: Decision/Branch, State Transition
"""
import asyncio

import pytest

from aichat_client.errors import APIUserAbortError
from aichat_client.utils import race_abort, safe_json


class TestSafeJson:
    """Tests for safe_json function."""

    def test_valid(self):
        parsed = safe_json('{"a": 1}')
        assert parsed.ok is True
        assert parsed.value == {"a": 1}

    def test_invalid(self):
        parsed = safe_json("<html>")
        assert parsed.ok is False
        assert parsed.text == "<html>"
        assert parsed.value is None


class TestRaceAbort:
    """Tests for race_abort function."""

    # Happy Path: the call wins
    @pytest.mark.asyncio
    async def test_call_completes(self):
        async def call():
            return "done"

        controller = asyncio.Event()
        assert await race_abort(call, asyncio.Event(), controller) == "done"
        assert not controller.is_set()

    # Decision: a pre-set signal never starts the call
    @pytest.mark.asyncio
    async def test_signal_already_set(self):
        started = []

        async def call():
            started.append(True)

        signal = asyncio.Event()
        signal.set()
        controller = asyncio.Event()
        with pytest.raises(APIUserAbortError):
            await race_abort(call, signal, controller)
        assert started == []
        assert controller.is_set()

    # State Transition: the signal propagates to the controller and cancels the call
    @pytest.mark.asyncio
    async def test_signal_cancels_pending_call(self):
        cancelled = asyncio.Event()

        async def call():
            try:
                await asyncio.sleep(10)
            except asyncio.CancelledError:
                cancelled.set()
                raise

        signal = asyncio.Event()
        controller = asyncio.Event()
        asyncio.get_running_loop().call_later(0.01, signal.set)
        with pytest.raises(APIUserAbortError):
            await race_abort(call, signal, controller)
        assert controller.is_set()
        assert cancelled.is_set()

    # Decision: the controller alone also aborts
    @pytest.mark.asyncio
    async def test_controller_aborts(self):
        async def call():
            await asyncio.sleep(10)

        controller = asyncio.Event()
        asyncio.get_running_loop().call_later(0.01, controller.set)
        with pytest.raises(APIUserAbortError):
            await race_abort(call, None, controller)

    # Error Path: the call's own failure propagates
    @pytest.mark.asyncio
    async def test_call_error(self):
        async def call():
            raise ValueError("bad read")

        with pytest.raises(ValueError, match="bad read"):
            await race_abort(call, None, asyncio.Event())
