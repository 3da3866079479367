"""
Core modules for aichat_client.
"""
from .api_result import APIResult, ResponseHandle
from .base_client import APIClient
from .request_builder import (
    build_body,
    build_request,
    build_url,
    calculate_content_length,
    generate_idempotency_key,
    stringify_query,
)
from .response import default_parse_response, make_status_error_from_response
from .transport import fetch_with_timeout

__all__ = [
    "APIClient",
    "APIResult",
    "ResponseHandle",
    "build_body",
    "build_request",
    "build_url",
    "calculate_content_length",
    "generate_idempotency_key",
    "stringify_query",
    "default_parse_response",
    "make_status_error_from_response",
    "fetch_with_timeout",
]
