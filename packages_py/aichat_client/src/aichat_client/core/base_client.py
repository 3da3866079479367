"""
Base API client: request building, the per-call retry loop, and the
get/post/put/patch/delete surface.
"""
import asyncio
import logging
from typing import Any, Dict, Mapping, Optional

from aichat_retry import (
    RetryState,
    async_sleep,
    calculate_retry_delay,
    should_retry_response,
)

from ..version import __version__
from ..config import ClientConfig, ResolvedConfig, resolve_config, validate_retries
from ..debug import print_request
from ..errors import APIConnectionError
from ..headers import ResponseHeaders, merge_headers
from ..types import APIResponseProps, BuiltRequest, FinalRequestOptions, HttpMethod
from .api_result import APIResult, ResponseHandle
from .request_builder import build_request
from .response import make_status_error_from_response
from .transport import fetch_with_timeout

logger = logging.getLogger("aichat_client.base_client")


class APIClient:
    """Asynchronous API client core.

    Subclasses customize authentication and headers through
    ``auth_headers``, ``default_headers`` and ``validate_headers``, and may
    adjust the built request in ``prepare_request``.
    """

    def __init__(self, config: Optional[ClientConfig] = None) -> None:
        self._config = resolve_config(config)
        self._closed = False

    @property
    def config(self) -> ResolvedConfig:
        return self._config

    @property
    def base_url(self) -> str:
        return self._config.base_url

    @property
    def max_retries(self) -> int:
        return self._config.max_retries

    @property
    def timeout(self) -> float:
        return self._config.timeout

    @property
    def user_agent(self) -> str:
        return f"{type(self).__name__}/Python {__version__}"

    def auth_headers(self, options: FinalRequestOptions) -> Dict[str, Any]:
        return {}

    def default_headers(self, options: FinalRequestOptions) -> Dict[str, Any]:
        """Headers sent with every request, before per-call headers."""
        return merge_headers(
            {
                "Accept": "application/json",
                "Content-Type": "application/json",
                "User-Agent": self.user_agent,
            },
            self.auth_headers(options),
            self._config.default_headers,
        )

    def validate_headers(self, headers: Mapping[str, str], custom_headers: Mapping[str, Any]) -> None:
        """Override to reject header combinations before sending."""

    async def prepare_request(self, request: BuiltRequest, options: FinalRequestOptions) -> None:
        """Override to adjust a built request (e.g. sign it) before it is sent."""

    def build_request(self, options: FinalRequestOptions) -> BuiltRequest:
        request = build_request(options, self._config, self.default_headers(options))
        self.validate_headers(request.headers, options.headers or {})
        return request

    def get(self, path: str, **options: Any) -> APIResult:
        """GET request."""
        return self._method_request("GET", path, options)

    def post(self, path: str, **options: Any) -> APIResult:
        """POST request."""
        return self._method_request("POST", path, options)

    def put(self, path: str, **options: Any) -> APIResult:
        """PUT request."""
        return self._method_request("PUT", path, options)

    def patch(self, path: str, **options: Any) -> APIResult:
        """PATCH request."""
        return self._method_request("PATCH", path, options)

    def delete(self, path: str, **options: Any) -> APIResult:
        """DELETE request."""
        return self._method_request("DELETE", path, options)

    def _method_request(self, method: HttpMethod, path: str, options: Dict[str, Any]) -> APIResult:
        return self.request(FinalRequestOptions(method=method, path=path, **options))

    def request(self, options: FinalRequestOptions) -> APIResult:
        """
        Make a logical call.

        Nothing is sent until the returned result is awaited.
        """
        if self._closed:
            raise RuntimeError("Client has been closed")
        return APIResult(ResponseHandle(lambda: self._make_request(options)))

    async def _make_request(self, options: FinalRequestOptions) -> APIResponseProps:
        max_retries = (
            validate_retries(options.max_retries)
            if options.max_retries is not None
            else self._config.max_retries
        )
        state = RetryState.start(max_retries)

        while True:
            request = self.build_request(options)
            await self.prepare_request(request, options)

            logger.debug(
                f"APIClient.request: {request.method} {request.url} "
                f"(retries remaining: {state.retries_remaining})"
            )
            print_request(
                request.method,
                request.url,
                request.headers,
                options.body,
                retries_remaining=state.retries_remaining,
            )

            controller = asyncio.Event()
            try:
                response = await fetch_with_timeout(request, options.signal, controller)
            except APIConnectionError as error:
                if state.exhausted:
                    logger.warning(f"APIClient.request: {request.method} {request.url} failed: {error}")
                    raise
                state.last_headers = None
                await self._wait_before_retry(state, request, str(error))
                continue

            if response.is_success:
                return APIResponseProps(
                    response=response,
                    options=options,
                    controller=controller,
                    retries_taken=state.attempts_made,
                )

            headers = ResponseHeaders.from_response(response)
            if not state.exhausted and should_retry_response(
                response.status_code, headers, self._config.retry
            ):
                await response.aclose()
                state.last_headers = headers
                await self._wait_before_retry(state, request, f"HTTP {response.status_code}")
                continue

            raise await make_status_error_from_response(response)

    async def _wait_before_retry(self, state: RetryState, request: BuiltRequest, reason: str) -> None:
        delay = calculate_retry_delay(state, self._config.retry)
        logger.info(
            f"APIClient.request: retrying {request.method} {request.url} in {delay:.2f}s "
            f"after {reason} ({state.retries_remaining} retries remaining)"
        )
        await async_sleep(delay)
        state.consume()

    async def close(self) -> None:
        """Close the client. Shared agents stay open for their other users."""
        self._closed = True

    async def __aenter__(self) -> "APIClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
