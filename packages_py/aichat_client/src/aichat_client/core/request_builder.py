"""
Request builder utilities for aichat_client.
"""
import json
import logging
import re
import uuid
from typing import Any, Dict, Mapping, Optional, Union
from urllib.parse import quote, urlsplit, urlunsplit

from ..agent import get_default_agent
from ..config import ResolvedConfig, validate_timeout
from ..errors import AIChatError
from ..headers import merge_headers
from ..types import BuiltRequest, FinalRequestOptions, MultipartBody, NotGiven, Query

logger = logging.getLogger("aichat_client.request_builder")

_ABSOLUTE_URL = re.compile(r"^(?:[a-z]+:)?//", re.IGNORECASE)

# Characters encodeURIComponent leaves alone
_URI_COMPONENT_SAFE = "-_.!~*'()"

# Extra socket time granted beyond the attempt deadline
AGENT_TIMEOUT_MARGIN = 1.0


def is_absolute_url(url: str) -> bool:
    """True when the URL carries its own scheme (or is protocol-relative)."""
    return bool(_ABSOLUTE_URL.match(url))


def _encode_component(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


def _stringify_value(value: Union[str, int, float, bool]) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def stringify_query(query: Query) -> str:
    """
    Serialize query parameters as ``key=value&...``.

    Entries keep their insertion order. ``NOT_GIVEN`` values are skipped,
    ``None`` renders as ``key=``. Only strings, numbers and booleans are
    accepted as values; anything else is a usage error.

    Raises:
        AIChatError: For nested or otherwise unsupported values.
    """
    parts = []
    for key, value in query.items():
        if isinstance(value, NotGiven):
            continue
        if value is None:
            parts.append(f"{_encode_component(key)}=")
        elif isinstance(value, (str, int, float, bool)):
            parts.append(f"{_encode_component(key)}={_encode_component(_stringify_value(value))}")
        else:
            raise AIChatError(
                f"Cannot stringify type {type(value).__name__}; Expected string, number, "
                f"boolean, or null. If you need to pass nested query parameters, you can "
                f"manually encode them, e.g. {{'foo[key1]': value1, 'foo[key2]': value2}}."
            )
    return "&".join(parts)


def build_url(
    base_url: str,
    path: str,
    query: Optional[Query] = None,
    default_query: Optional[Query] = None,
) -> str:
    """Build full URL from base and path."""
    if is_absolute_url(path):
        url = path
    elif base_url.endswith("/") and path.startswith("/"):
        url = base_url + path[1:]
    elif path and not base_url.endswith("/") and not path.startswith("/"):
        url = f"{base_url}/{path}"
    else:
        url = base_url + path

    if default_query:
        query = {**default_query, **(query or {})}

    if query:
        parts = urlsplit(url)
        url = urlunsplit(parts._replace(query=stringify_query(query)))

    return url


def build_body(body: Any) -> Optional[Union[str, bytes]]:
    """Encode the request body for the wire."""
    if body is None:
        return None
    if isinstance(body, MultipartBody):
        return body.body
    return json.dumps(body, indent=2)


def calculate_content_length(content: Optional[Union[str, bytes]]) -> Optional[str]:
    """Byte length of a string body, or None when it cannot be measured up front."""
    if isinstance(content, str):
        return str(len(content.encode("utf-8")))
    return None


def generate_idempotency_key() -> str:
    """Random 36-character idempotency key (UUID4)."""
    return str(uuid.uuid4())


def build_request(
    options: FinalRequestOptions,
    config: ResolvedConfig,
    default_headers: Optional[Mapping[str, Any]] = None,
) -> BuiltRequest:
    """
    Assemble a transport-ready request.

    Header layers, lowest precedence first: computed Content-Length, the
    client's default headers, the call's own headers. A missing
    idempotency key is generated for non-GET calls and written back to
    ``options`` so every retry of the call sends the same key.
    """
    content = build_body(options.body)
    content_length = calculate_content_length(content)

    url = build_url(config.base_url, options.path, options.query, config.default_query)

    if options.timeout is not None:
        validate_timeout("timeout", options.timeout)
    timeout = options.timeout if options.timeout is not None else config.timeout

    agent = options.http_agent or config.http_agent or get_default_agent(url)
    agent.widen_timeout(timeout + AGENT_TIMEOUT_MARGIN)

    call_headers: Dict[str, Any] = dict(options.headers or {})
    if config.idempotency_header and options.method != "GET":
        if not options.idempotency_key:
            options.idempotency_key = generate_idempotency_key()
        call_headers[config.idempotency_header] = options.idempotency_key

    headers = merge_headers(
        {"Content-Length": content_length} if content_length else None,
        default_headers,
        call_headers,
    )

    # The JSON default Content-Type never applies to a multipart payload;
    # only the payload's own boundary-bearing type may be sent.
    if isinstance(options.body, MultipartBody):
        headers = merge_headers(headers, {"Content-Type": options.body.content_type})

    logger.debug(f"build_request: method={options.method}, url={url}, timeout={timeout}")

    return BuiltRequest(
        method=options.method,
        url=url,
        headers=headers,
        content=content,
        timeout=timeout,
        agent=agent,
    )
