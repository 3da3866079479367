"""
Deferred, memoized result of a logical call.
"""
import asyncio
import inspect
from typing import Any, Awaitable, Callable, Generator, Generic, Optional, TypeVar

import httpx

from ..types import APIResponse, APIResponseProps, ParseResponse
from .response import default_parse_response

T = TypeVar("T")
U = TypeVar("U")


class ResponseHandle:
    """Starts the network exchange on first use and shares its outcome."""

    def __init__(self, make_request: Callable[[], Awaitable[APIResponseProps]]) -> None:
        self._make_request = make_request
        self._future: Optional["asyncio.Future[APIResponseProps]"] = None

    @property
    def started(self) -> bool:
        return self._future is not None

    async def get(self) -> APIResponseProps:
        if self._future is None:
            self._future = asyncio.ensure_future(self._make_request())
        # One waiter being cancelled must not cancel the shared exchange
        return await asyncio.shield(self._future)


class APIResult(Generic[T]):
    """
    The eventual outcome of ``get/post/put/patch/delete``.

    Returned synchronously; the request is sent the first time any accessor
    is awaited, and only once however many accessors are awaited after that.
    The parse function runs at most once and its value is cached.

    Example:
        result = client.get("/assistant/info/abc")
        envelope = await result                   # parsed value
        response = await result.raw_response()    # same exchange, no parsing
        both = await result.both()                # both.data, both.response
    """

    def __init__(
        self,
        handle: ResponseHandle,
        parse_response: ParseResponse = default_parse_response,
    ) -> None:
        self._handle = handle
        self._parse_response = parse_response
        self._parsed: Optional["asyncio.Future[T]"] = None

    async def _parse(self) -> T:
        props = await self._handle.get()
        result = self._parse_response(props)
        if inspect.isawaitable(result):
            result = await result
        return result

    async def value(self) -> T:
        """The parsed payload."""
        if self._parsed is None:
            self._parsed = asyncio.ensure_future(self._parse())
        return await asyncio.shield(self._parsed)

    async def raw_response(self) -> httpx.Response:
        """The underlying response, without triggering parsing."""
        props = await self._handle.get()
        return props.response

    async def both(self) -> APIResponse:
        """The parsed payload together with the raw response."""
        data = await self.value()
        response = await self.raw_response()
        return APIResponse(data=data, response=response)

    def then_unwrap(self, transform: Callable[[T], U]) -> "APIResult[U]":
        """
        Derive a result that transforms this one's parsed value.

        Both results share one exchange and one parse.
        """

        async def parse(props: APIResponseProps) -> Any:
            return transform(await self.value())

        return APIResult(self._handle, parse)

    def __await__(self) -> Generator[Any, None, T]:
        return self.value().__await__()
