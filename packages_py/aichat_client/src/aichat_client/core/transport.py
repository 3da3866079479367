"""
Single-attempt transport with a hard deadline and caller cancellation.
"""
import asyncio
import logging
from typing import Optional

import httpx

from ..errors import APIConnectionError, APIConnectionTimeoutError, APIUserAbortError
from ..types import BuiltRequest

logger = logging.getLogger("aichat_client.transport")


async def _discard(task: "asyncio.Future[httpx.Response]") -> None:
    """Cancel an in-flight send and release a response that slipped through."""
    task.cancel()
    await asyncio.wait({task})
    if not task.cancelled() and task.exception() is None:
        await task.result().aclose()


async def fetch_with_timeout(
    request: BuiltRequest,
    signal: Optional[asyncio.Event] = None,
    controller: Optional[asyncio.Event] = None,
) -> httpx.Response:
    """
    Perform exactly one network attempt.

    The send races against the caller's ``signal`` and the attempt deadline
    (``request.timeout`` seconds). Whichever finishes first decides the
    outcome; the loser is cancelled before this returns. ``controller`` is
    set whenever the attempt is aborted.

    The response is returned with its body unread. A non-2xx status is a
    normal outcome here.

    Raises:
        APIUserAbortError: The caller's signal was set.
        APIConnectionTimeoutError: The deadline passed, or httpx timed out.
        APIConnectionError: Any other transport failure (cause attached).
    """
    controller = controller if controller is not None else asyncio.Event()

    if signal is not None and signal.is_set():
        controller.set()
        raise APIUserAbortError()

    send_task = asyncio.ensure_future(
        request.agent.client.send(request.to_httpx(), stream=True)
    )
    waiters = {send_task}
    signal_task: Optional[asyncio.Future] = None
    if signal is not None:
        signal_task = asyncio.ensure_future(signal.wait())
        waiters.add(signal_task)

    try:
        done, _ = await asyncio.wait(
            waiters, timeout=request.timeout, return_when=asyncio.FIRST_COMPLETED
        )
    finally:
        if signal_task is not None and not signal_task.done():
            signal_task.cancel()
        if not send_task.done():
            controller.set()
            await _discard(send_task)

    if send_task in done:
        error = send_task.exception()
        if error is None:
            return send_task.result()
        if signal is not None and signal.is_set():
            raise APIUserAbortError() from error
        if isinstance(error, httpx.TimeoutException):
            logger.debug(f"fetch_with_timeout: transport timeout for {request.url}: {error}")
            raise APIConnectionTimeoutError() from error
        logger.debug(f"fetch_with_timeout: connection error for {request.url}: {error!r}")
        raise APIConnectionError(cause=error)

    if signal is not None and signal.is_set():
        raise APIUserAbortError()

    logger.debug(f"fetch_with_timeout: deadline of {request.timeout}s passed for {request.url}")
    raise APIConnectionTimeoutError()
