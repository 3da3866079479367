"""
Type definitions for aichat_retry
"""
from dataclasses import dataclass, field
from typing import Mapping, Optional


@dataclass
class RetryConfig:
    """Retry configuration"""

    max_retries: int = 2
    """Maximum number of retries per logical call. Default: 2"""

    initial_delay_seconds: float = 0.5
    """Delay before the first retry, doubled for every retry made. Default: 0.5"""

    max_delay_seconds: float = 8.0
    """Cap applied to the exponential delay (seconds). Default: 8.0"""

    jitter_factor: float = 0.25
    """Largest fraction shaved off the delay at random. Default: 0.25"""

    max_retry_after_seconds: float = 60.0
    """Longest server-supplied Retry-After delay that is honored. Default: 60.0"""

    retry_on_status: list[int] = field(
        default_factory=lambda: [408, 409, 429]
    )
    """HTTP status codes below 500 that should trigger retry"""

    retry_on_server_errors: bool = True
    """Whether any 5xx status should trigger retry. Default: True"""


@dataclass
class RetryState:
    """Retry bookkeeping for a single logical call.

    Created from the configured budget when the call starts and consumed
    one retry at a time. Never shared between logical calls.
    """

    max_retries: int
    """Budget the call started with"""

    retries_remaining: int
    """Retries still available"""

    last_headers: Optional[Mapping[str, str]] = None
    """Headers of the last failed response, read for a Retry-After hint"""

    @classmethod
    def start(cls, max_retries: int) -> "RetryState":
        """Create the state for a new logical call."""
        return cls(max_retries=max_retries, retries_remaining=max_retries)

    @property
    def attempts_made(self) -> int:
        """Number of retries already consumed."""
        return self.max_retries - self.retries_remaining

    @property
    def exhausted(self) -> bool:
        return self.retries_remaining <= 0

    def consume(self) -> None:
        """Spend one retry from the budget."""
        if self.retries_remaining <= 0:
            raise RuntimeError("Retry budget exhausted")
        self.retries_remaining -= 1


# Header servers use to override status-based retry eligibility
SHOULD_RETRY_HEADER = "x-should-retry"

# Standard header carrying the server's retry hint
RETRY_AFTER_HEADER = "retry-after"
