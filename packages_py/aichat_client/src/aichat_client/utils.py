"""
Small helpers shared across aichat_client.
"""
import asyncio
import json
from typing import Awaitable, Callable, Optional, TypeVar

from .errors import APIUserAbortError
from .types import JSONParseResult

T = TypeVar("T")


def safe_json(text: str) -> JSONParseResult:
    """Parse text as JSON, reporting failure instead of raising."""
    try:
        return JSONParseResult(ok=True, text=text, value=json.loads(text))
    except ValueError:
        return JSONParseResult(ok=False, text=text)


async def race_abort(
    call: Callable[[], Awaitable[T]],
    signal: Optional[asyncio.Event],
    controller: asyncio.Event,
) -> T:
    """
    Await ``call()`` unless the attempt is aborted first.

    The attempt is aborted when the caller's ``signal`` or the attempt's
    ``controller`` is set. The caller's signal is linked to the controller:
    whichever fires, the controller ends up set and the pending read is
    cancelled.

    Raises:
        APIUserAbortError: The attempt was aborted before ``call()`` finished.
    """
    if controller.is_set() or (signal is not None and signal.is_set()):
        controller.set()
        raise APIUserAbortError()

    task = asyncio.ensure_future(call())
    waiters = {task, asyncio.ensure_future(controller.wait())}
    if signal is not None:
        waiters.add(asyncio.ensure_future(signal.wait()))

    try:
        done, _ = await asyncio.wait(waiters, return_when=asyncio.FIRST_COMPLETED)
    finally:
        for waiter in waiters:
            if not waiter.done():
                waiter.cancel()
        if not task.done():
            await asyncio.wait({task})

    if task in done:
        return task.result()

    controller.set()
    raise APIUserAbortError()
