"""
Error taxonomy for aichat_client.

AIChatError
  - raised directly for client usage mistakes (bad config, bad query values)
  APIError
    APIUserAbortError
    APIConnectionError
      APIConnectionTimeoutError
    BadRequestError (400), AuthenticationError (401),
    PermissionDeniedError (403), NotFoundError (404), ConflictError (409),
    UnprocessableEntityError (422), RateLimitError (429),
    InternalServerError (>=500)
"""
import json
from typing import Any, Mapping, Optional


class AIChatError(Exception):
    """Base class for every error raised by the client."""

    code = "AICHAT_ERROR"


class APIError(AIChatError):
    """An error surfaced by the API exchange.

    Carries the HTTP status (absent for connection failures), the parsed JSON
    error body when there was one, the raw text when there was not, and the
    response headers.
    """

    code = "API_ERROR"

    def __init__(
        self,
        status: Optional[int] = None,
        error: Any = None,
        message: Optional[str] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> None:
        super().__init__(self.make_message(status, error, message))
        self.status = status
        self.error = error
        self.body = error
        self.headers = headers

    @staticmethod
    def make_message(status: Optional[int], error: Any, message: Optional[str]) -> str:
        if isinstance(error, Mapping) and isinstance(error.get("message"), str):
            msg = error["message"]
        elif error is not None:
            msg = json.dumps(error) if not isinstance(error, str) else error
        else:
            msg = message

        if status and msg:
            return f"{status} {msg}"
        if status:
            return f"{status} status code (no body)"
        if msg:
            return msg
        return "(no status code or body)"

    @classmethod
    def generate(
        cls,
        status: Optional[int],
        error: Any = None,
        message: Optional[str] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> "APIError":
        """Build the status-specific error for a failed exchange."""
        if not status:
            return APIConnectionError(cause=AIChatError(message) if message else None)

        error_class = _STATUS_ERRORS.get(status)
        if error_class is None:
            error_class = InternalServerError if status >= 500 else APIError
        return error_class(status, error, message, headers)


class APIUserAbortError(APIError):
    """The caller cancelled the request."""

    code = "USER_ABORT"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message=message or "Request was aborted.")


class APIConnectionError(APIError):
    """The request never produced an HTTP response."""

    code = "CONNECTION_ERROR"

    def __init__(
        self,
        message: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message=message or "Connection error.")
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause


class APIConnectionTimeoutError(APIConnectionError):
    """An attempt exceeded its deadline."""

    code = "CONNECTION_TIMEOUT"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message=message or "Request timed out.")


class BadRequestError(APIError):
    code = "BAD_REQUEST"


class AuthenticationError(APIError):
    code = "AUTHENTICATION"


class PermissionDeniedError(APIError):
    code = "PERMISSION_DENIED"


class NotFoundError(APIError):
    code = "NOT_FOUND"


class ConflictError(APIError):
    code = "CONFLICT"


class UnprocessableEntityError(APIError):
    code = "UNPROCESSABLE_ENTITY"


class RateLimitError(APIError):
    code = "RATE_LIMIT"


class InternalServerError(APIError):
    code = "INTERNAL_SERVER"


_STATUS_ERRORS = {
    400: BadRequestError,
    401: AuthenticationError,
    403: PermissionDeniedError,
    404: NotFoundError,
    409: ConflictError,
    422: UnprocessableEntityError,
    429: RateLimitError,
}
