"""
Asynchronous client for the AI Chat API.

Provides deferred, memoized call results, automatic retries with backoff,
status-specific errors, and streamed answers (SSE, NDJSON).
"""
from .version import __version__
from .types import (
    NOT_GIVEN,
    NotGiven,
    HttpMethod,
    MultipartBody,
    FinalRequestOptions,
    BuiltRequest,
    APIResponseProps,
    APIResponse,
    SSEEvent,
)
from .config import (
    ClientConfig,
    ResolvedConfig,
    resolve_config,
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
    DEFAULT_MAX_RETRIES,
)
from .errors import (
    AIChatError,
    APIError,
    APIUserAbortError,
    APIConnectionError,
    APIConnectionTimeoutError,
    BadRequestError,
    AuthenticationError,
    PermissionDeniedError,
    NotFoundError,
    ConflictError,
    UnprocessableEntityError,
    RateLimitError,
    InternalServerError,
)
from .agent import ConnectionAgent, get_default_agent, close_default_agents
from .headers import merge_headers, ResponseHeaders
from .core.api_result import APIResult
from .core.base_client import APIClient
from .streaming.stream import Stream
from .client import AIChatClient
from .resources import (
    APIEnvelope,
    APIStatus,
    Assistant,
    ChatMessage,
    Discussion,
)

__all__ = [
    "__version__",
    # Types
    "NOT_GIVEN",
    "NotGiven",
    "HttpMethod",
    "MultipartBody",
    "FinalRequestOptions",
    "BuiltRequest",
    "APIResponseProps",
    "APIResponse",
    "SSEEvent",
    # Config
    "ClientConfig",
    "ResolvedConfig",
    "resolve_config",
    "DEFAULT_BASE_URL",
    "DEFAULT_TIMEOUT",
    "DEFAULT_MAX_RETRIES",
    # Errors
    "AIChatError",
    "APIError",
    "APIUserAbortError",
    "APIConnectionError",
    "APIConnectionTimeoutError",
    "BadRequestError",
    "AuthenticationError",
    "PermissionDeniedError",
    "NotFoundError",
    "ConflictError",
    "UnprocessableEntityError",
    "RateLimitError",
    "InternalServerError",
    # Transport
    "ConnectionAgent",
    "get_default_agent",
    "close_default_agents",
    "merge_headers",
    "ResponseHeaders",
    # Clients
    "APIResult",
    "APIClient",
    "AIChatClient",
    "Stream",
    # Models
    "APIEnvelope",
    "APIStatus",
    "Assistant",
    "ChatMessage",
    "Discussion",
]
