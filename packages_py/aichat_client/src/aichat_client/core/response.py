"""
Response classification and parsing.
"""
import logging
from typing import Any, Optional, Tuple

import httpx

from ..debug import print_response
from ..errors import APIError, APIUserAbortError
from ..headers import ResponseHeaders
from ..streaming.stream import Stream
from ..types import APIResponseProps
from ..utils import race_abort, safe_json

logger = logging.getLogger("aichat_client.response")


async def read_error_body(response: httpx.Response) -> Tuple[Any, Optional[str]]:
    """
    Read a failed response's body.

    Returns:
        ``(parsed_json, None)`` when the body is JSON, otherwise
        ``(None, text)``. A body that cannot be read yields the read
        error's message as the text.
    """
    try:
        await response.aread()
        text = response.text
    except Exception as e:
        logger.debug(f"read_error_body: failed to read body: {e!r}")
        text = str(e)
    finally:
        await response.aclose()

    parsed = safe_json(text)
    if parsed.ok:
        return parsed.value, None
    return None, text


async def make_status_error_from_response(response: httpx.Response) -> APIError:
    """Build the status-specific error for a terminal failed response."""
    headers = ResponseHeaders.from_response(response)
    error, message = await read_error_body(response)
    print_response(response.status_code, str(response.url), headers, error if error is not None else message)
    logger.info(f"API error: status={response.status_code}, url={response.url}")
    return APIError.generate(response.status_code, error, message, headers)


def _is_json_content_type(content_type: Optional[str]) -> bool:
    return bool(content_type) and "application/json" in content_type


async def default_parse_response(props: APIResponseProps) -> Any:
    """
    Turn a successful exchange into a value.

    Order matters: streaming and 204 are decided before the content type is
    looked at. Reading the body is aborted when the request's ``signal`` is
    set.
    - stream requested: a ``Stream`` over the unread body
    - 204: ``None``, body left unread
    - binary requested: the raw ``httpx.Response``
    - ``application/json``: decoded JSON
    - anything else: text
    """
    response = props.response
    headers = ResponseHeaders.from_response(response)

    if props.options.stream:
        logger.debug(f"default_parse_response: streaming {response.url}")
        return Stream.from_response(response, props.controller, props.options.signal)

    if response.status_code == 204:
        await response.aclose()
        return None

    if props.options.binary_response:
        return response

    try:
        await race_abort(response.aread, props.options.signal, props.controller)
    except APIUserAbortError:
        await response.aclose()
        raise
    if _is_json_content_type(headers.get("content-type")):
        data = response.json()
    else:
        data = response.text

    print_response(response.status_code, str(response.url), headers, data)
    return data
