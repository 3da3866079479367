"""
Retry policy for the AI chat client: eligibility, backoff with jitter and
Retry-After handling.
"""
from .types import (
    RetryConfig,
    RetryState,
    SHOULD_RETRY_HEADER,
    RETRY_AFTER_HEADER,
)
from .config import (
    DEFAULT_RETRY_CONFIG,
    validate_max_retries,
    calculate_backoff_delay,
    calculate_retry_delay,
    is_retryable_status,
    should_retry_response,
    parse_retry_after,
    merge_config,
    async_sleep,
)


__all__ = [
    # Types
    "RetryConfig",
    "RetryState",
    "SHOULD_RETRY_HEADER",
    "RETRY_AFTER_HEADER",
    # Config
    "DEFAULT_RETRY_CONFIG",
    "validate_max_retries",
    "calculate_backoff_delay",
    "calculate_retry_delay",
    "is_retryable_status",
    "should_retry_response",
    "parse_retry_after",
    "merge_config",
    "async_sleep",
]


__version__ = "0.1.0"
