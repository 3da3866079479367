"""
Tests for aichat_retry types.

Test coverage includes:
- State transition testing: budget consumption down to exhaustion
- Boundary value testing: zero budget
"""

import pytest

from aichat_retry.types import RetryConfig, RetryState


class TestRetryConfig:
    """Tests for RetryConfig dataclass."""

    def test_status_lists_are_independent(self):
        """Should not share the status list between instances."""
        first = RetryConfig()
        second = RetryConfig()
        first.retry_on_status.append(418)
        assert 418 not in second.retry_on_status


class TestRetryState:
    """Tests for RetryState dataclass."""

    def test_start_sets_full_budget(self):
        """Should start with the whole budget remaining."""
        state = RetryState.start(3)
        assert state.max_retries == 3
        assert state.retries_remaining == 3
        assert state.attempts_made == 0
        assert state.last_headers is None

    # State: each consume strictly decreases the budget
    def test_consume_decrements(self):
        """Should decrease remaining retries and increase attempts made."""
        state = RetryState.start(2)
        state.consume()
        assert state.retries_remaining == 1
        assert state.attempts_made == 1
        state.consume()
        assert state.retries_remaining == 0
        assert state.exhausted is True

    # Boundary: zero budget
    def test_zero_budget_is_exhausted(self):
        """Should be exhausted immediately with a zero budget."""
        state = RetryState.start(0)
        assert state.exhausted is True
        with pytest.raises(RuntimeError, match="exhausted"):
            state.consume()
