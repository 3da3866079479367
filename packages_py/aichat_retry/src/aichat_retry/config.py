"""
Configuration utilities for aichat_retry
"""
import asyncio
import random
import re
import time
from typing import Mapping, Optional
from email.utils import parsedate_to_datetime

from .types import RetryConfig, RetryState, SHOULD_RETRY_HEADER, RETRY_AFTER_HEADER


# Leading integer of a delta-seconds value
_LEADING_INTEGER = re.compile(r"^\s*([+-]?\d+)")

# Default retry configuration
DEFAULT_RETRY_CONFIG = RetryConfig(
    max_retries=2,
    initial_delay_seconds=0.5,
    max_delay_seconds=8.0,
    jitter_factor=0.25,
    max_retry_after_seconds=60.0,
    retry_on_status=[408, 409, 429],
    retry_on_server_errors=True,
)


def validate_max_retries(max_retries: object) -> int:
    """
    Validate a retry budget.

    Raises:
        ValueError: If the value is not a non-negative integer
    """
    if isinstance(max_retries, bool) or not isinstance(max_retries, int):
        raise ValueError("max_retries must be an integer")
    if max_retries < 0:
        raise ValueError("max_retries must be a positive integer")
    return max_retries


def calculate_backoff_delay(attempts_made: int, config: Optional[RetryConfig] = None) -> float:
    """
    Calculate exponential backoff delay with negative jitter.

    delay = min(initial * 2^attempts_made, cap) * (1 - random() * jitter)

    The jitter only ever shortens the delay, so concurrent clients spread
    out below the cap instead of piling up on it.

    Args:
        attempts_made: Retries already made in this logical call (0-indexed)
        config: Retry configuration

    Returns:
        Delay in seconds
    """
    config = merge_config(config)
    sleep_seconds = min(
        config.initial_delay_seconds * (2 ** attempts_made),
        config.max_delay_seconds,
    )
    jitter = 1 - random.random() * config.jitter_factor
    return sleep_seconds * jitter


def _get_header(headers: Optional[Mapping[str, str]], name: str) -> Optional[str]:
    """Case-insensitive header lookup over any mapping."""
    if not headers:
        return None
    value = headers.get(name)
    if value is not None:
        return value
    lowered = name.lower()
    for key, candidate in headers.items():
        if key.lower() == lowered:
            return candidate
    return None


def is_retryable_status(status: int, config: Optional[RetryConfig] = None) -> bool:
    """
    Check if an HTTP status code should trigger a retry.

    Args:
        status: The HTTP status code
        config: Retry configuration

    Returns:
        Whether the status is retryable
    """
    config = merge_config(config)
    if status in config.retry_on_status:
        return True
    return config.retry_on_server_errors and status >= 500


def should_retry_response(
    status: int,
    headers: Optional[Mapping[str, str]] = None,
    config: Optional[RetryConfig] = None,
) -> bool:
    """
    Decide whether a non-ok response is worth another attempt.

    An explicit ``x-should-retry`` header from the server wins over the
    status code.

    Args:
        status: The HTTP status code
        headers: Response headers
        config: Retry configuration

    Returns:
        Whether the response should be retried
    """
    should_retry_header = _get_header(headers, SHOULD_RETRY_HEADER)
    if should_retry_header == "true":
        return True
    if should_retry_header == "false":
        return False
    return is_retryable_status(status, config)


def parse_retry_after(
    value: Optional[str],
    config: Optional[RetryConfig] = None,
) -> Optional[float]:
    """
    Parse Retry-After header value.

    The Retry-After header can contain either:
    - A number of seconds to wait; only the leading integer is read, so
      "1.5" waits 1 second
    - An HTTP-date indicating when to retry

    Args:
        value: Retry-After header value
        config: Retry configuration (supplies the upper bound)

    Returns:
        Wait time in seconds, or None when missing, unparseable, not
        positive, or longer than the configured maximum
    """
    if not value:
        return None

    config = merge_config(config)
    delay: Optional[float] = None

    match = _LEADING_INTEGER.match(value)
    if match:
        delay = float(int(match.group(1)))

    if delay is None:
        try:
            dt = parsedate_to_datetime(value)
            delay = dt.timestamp() - time.time()
        except (ValueError, TypeError, IndexError):
            return None

    if delay <= 0 or delay > config.max_retry_after_seconds:
        return None
    return delay


def calculate_retry_delay(state: RetryState, config: Optional[RetryConfig] = None) -> float:
    """
    Compute how long to wait before the next attempt.

    Prefers a reasonable server-supplied Retry-After value and falls back to
    exponential backoff.

    Args:
        state: Retry state of the logical call
        config: Retry configuration

    Returns:
        Delay in seconds
    """
    retry_after = parse_retry_after(
        _get_header(state.last_headers, RETRY_AFTER_HEADER), config
    )
    if retry_after is not None:
        return retry_after
    return calculate_backoff_delay(state.attempts_made, config)


def merge_config(config: Optional[RetryConfig] = None) -> RetryConfig:
    """
    Merge configuration with defaults.

    Args:
        config: User-provided configuration

    Returns:
        Complete configuration with defaults
    """
    if config is None:
        return DEFAULT_RETRY_CONFIG
    return config


async def async_sleep(seconds: float) -> None:
    """
    Sleep for a specified duration (async).

    Args:
        seconds: Duration in seconds
    """
    await asyncio.sleep(seconds)
