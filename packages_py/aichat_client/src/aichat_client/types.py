"""
Type definitions for aichat_client.
"""
import asyncio
from dataclasses import dataclass, field
from typing import (
    TYPE_CHECKING,
    Any,
    Awaitable,
    Callable,
    Dict,
    Literal,
    Mapping,
    Optional,
    TypeVar,
    Union,
)

import httpx

if TYPE_CHECKING:
    from .agent import ConnectionAgent


T = TypeVar("T")


class NotGiven:
    """Marker for "no value supplied", distinct from an explicit ``None``.

    In header mappings both ``None`` and ``NOT_GIVEN`` remove a header. In
    query mappings ``NOT_GIVEN`` skips the key while ``None`` renders it
    with an empty value.
    """

    _instance: Optional["NotGiven"] = None

    def __new__(cls) -> "NotGiven":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NOT_GIVEN"


NOT_GIVEN = NotGiven()

# HTTP methods
HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE"]

# Header values: None / NOT_GIVEN suppress the header
HeaderValue = Union[str, None, NotGiven]
Headers = Mapping[str, HeaderValue]

# Query values: NOT_GIVEN skips the key, None renders "key="
QueryValue = Union[str, int, float, bool, None, NotGiven]
Query = Mapping[str, Any]


@dataclass
class MultipartBody:
    """Pre-encoded multipart payload passed through untouched."""

    body: bytes
    content_type: Optional[str] = None


@dataclass
class FinalRequestOptions:
    """A logical request with method and path always present."""

    method: HttpMethod
    path: str
    query: Optional[Query] = None
    body: Any = None
    headers: Optional[Headers] = None
    max_retries: Optional[int] = None
    stream: bool = False
    timeout: Optional[float] = None
    http_agent: Optional["ConnectionAgent"] = None
    signal: Optional[asyncio.Event] = None
    idempotency_key: Optional[str] = None
    binary_response: bool = False


@dataclass
class BuiltRequest:
    """Transport-ready request."""

    method: HttpMethod
    url: str
    headers: Dict[str, str]
    content: Optional[Union[str, bytes]]
    timeout: float
    agent: "ConnectionAgent"

    def to_httpx(self) -> httpx.Request:
        return self.agent.client.build_request(
            self.method,
            self.url,
            headers=self.headers,
            content=self.content,
            timeout=httpx.Timeout(self.agent.timeout),
        )


@dataclass
class APIResponseProps:
    """A completed exchange handed to the response parser."""

    response: httpx.Response
    options: FinalRequestOptions
    controller: asyncio.Event
    retries_taken: int = 0


@dataclass
class APIResponse:
    """Parsed data together with the raw response it came from."""

    data: Any
    response: httpx.Response


@dataclass
class SSEEvent:
    """Server-Sent Event structure."""

    data: str
    id: Optional[str] = None
    event: Optional[str] = None
    retry: Optional[int] = None


@dataclass
class JSONParseResult:
    """Outcome of parsing text that may or may not be JSON."""

    ok: bool
    text: str
    value: Any = field(default=None)


ParseResponse = Callable[[APIResponseProps], Union[Awaitable[T], T]]
