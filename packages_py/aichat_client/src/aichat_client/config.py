"""
Configuration for aichat_client.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from urllib.parse import urlparse
import os

from aichat_retry import RetryConfig, merge_config, validate_max_retries

from .agent import ConnectionAgent
from .errors import AIChatError
from .types import Headers, Query

DEFAULT_BASE_URL = "https://ai.fastlybot.com/v1"
DEFAULT_TIMEOUT = 600.0  # 10 minutes
DEFAULT_MAX_RETRIES = 2

# Environment variables read when the matching option is not given
ENV_API_KEY = "AICHAT_API_KEY"
ENV_ASSISTANT_ID = "AICHAT_ASSISTANT_ID"
ENV_BASE_URL = "AICHAT_BASE_URL"
ENV_DEBUG = "AICHAT_DEBUG"


@dataclass
class ClientConfig:
    """Client configuration.

    ``api_key``, ``assistant_id`` and ``base_url`` fall back to the
    ``AICHAT_API_KEY``, ``AICHAT_ASSISTANT_ID`` and ``AICHAT_BASE_URL``
    environment variables.

    ``default_headers`` and ``default_query`` are sent with every request;
    individual calls remove a default header by passing ``None`` for it.
    ``timeout`` is in seconds and applies to each attempt separately.
    """

    api_key: Optional[str] = None
    assistant_id: Optional[str] = None
    base_url: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT
    max_retries: int = DEFAULT_MAX_RETRIES
    http_agent: Optional[ConnectionAgent] = None
    default_headers: Headers = field(default_factory=dict)
    default_query: Query = field(default_factory=dict)
    idempotency_header: Optional[str] = None
    retry: Optional[RetryConfig] = None


@dataclass
class ResolvedConfig:
    """Resolved client configuration with defaults applied."""

    api_key: str
    assistant_id: Optional[str]
    base_url: str
    timeout: float
    max_retries: int
    http_agent: Optional[ConnectionAgent]
    default_headers: Headers
    default_query: Query
    idempotency_header: Optional[str]
    retry: RetryConfig


def validate_timeout(name: str, value: Any) -> float:
    """Validate a timeout in seconds."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise AIChatError(f"{name} must be a number")
    if value < 0:
        raise AIChatError(f"{name} must be a positive number")
    return float(value)


def validate_retries(value: Any) -> int:
    """Validate a retry budget, re-raising as a client usage error."""
    try:
        return validate_max_retries(value)
    except ValueError as e:
        raise AIChatError(str(e)) from e


def validate_base_url(base_url: str) -> None:
    """Validate the base URL."""
    if not base_url:
        raise AIChatError("base_url is required")

    parsed = urlparse(base_url)
    if not parsed.scheme or not parsed.netloc:
        raise AIChatError(f"Invalid base_url: {base_url}")


def resolve_config(config: Optional[ClientConfig] = None) -> ResolvedConfig:
    """Resolve client configuration with environment fallbacks and defaults."""
    config = config or ClientConfig()

    api_key = config.api_key if config.api_key is not None else os.environ.get(ENV_API_KEY)
    if not api_key:
        raise AIChatError(
            f"The AI Chat api key is missing or empty; either provide it, or "
            f"set the {ENV_API_KEY} environment variable."
        )

    assistant_id = (
        config.assistant_id
        if config.assistant_id is not None
        else os.environ.get(ENV_ASSISTANT_ID)
    )
    base_url = config.base_url or os.environ.get(ENV_BASE_URL) or DEFAULT_BASE_URL
    validate_base_url(base_url)

    return ResolvedConfig(
        api_key=api_key,
        assistant_id=assistant_id,
        base_url=base_url,
        timeout=validate_timeout("timeout", config.timeout),
        max_retries=validate_retries(config.max_retries),
        http_agent=config.http_agent,
        default_headers=dict(config.default_headers or {}),
        default_query=dict(config.default_query or {}),
        idempotency_header=config.idempotency_header,
        retry=merge_config(config.retry),
    )


def is_debug_enabled() -> bool:
    """Whether request/response pretty-printing is switched on."""
    return os.environ.get(ENV_DEBUG, "").lower() == "true"


def mask_sensitive(value: Optional[str], show_chars: int = 15) -> str:
    """Mask sensitive value for safe logging."""
    if not value:
        return "<none>"
    if len(value) <= show_chars:
        return "*" * len(value)
    return value[:show_chars] + "***"
