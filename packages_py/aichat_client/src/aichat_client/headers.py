"""
Header codec: layered merging with explicit removal, and case-insensitive
access to response headers.
"""
from typing import Dict, Iterator, Mapping, Optional

import httpx

from .types import HeaderValue, NotGiven


def is_removal(value: object) -> bool:
    """True for the values that suppress a header."""
    return value is None or isinstance(value, NotGiven)


def merge_headers(*layers: Optional[Mapping[str, HeaderValue]]) -> Dict[str, str]:
    """
    Merge header layers left to right.

    Later layers win, keys are compared case-insensitively and the casing of
    the last writer is kept. A ``None`` or ``NOT_GIVEN`` value removes the
    header from the result whatever the earlier layers held.

    Args:
        *layers: Header mappings, lowest precedence first. ``None`` layers
            are skipped.

    Returns:
        Plain dict of wire-ready header names to values.
    """
    merged: Dict[str, str] = {}
    names: Dict[str, str] = {}

    for layer in layers:
        if not layer:
            continue
        for key, value in layer.items():
            lowered = key.lower()
            previous = names.pop(lowered, None)
            if previous is not None:
                del merged[previous]
            if is_removal(value):
                continue
            names[lowered] = key
            merged[key] = str(value)

    return merged


class ResponseHeaders(Mapping[str, str]):
    """Read-only, insertion-ordered, case-insensitive view of response headers."""

    def __init__(self, headers: Optional[Mapping[str, str]] = None) -> None:
        self._headers = httpx.Headers(headers or {})

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ResponseHeaders":
        return cls(response.headers)

    def __getitem__(self, key: str) -> str:
        return self._headers[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._headers)

    def __len__(self) -> int:
        return len(self._headers)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key in self._headers

    def __repr__(self) -> str:
        return f"ResponseHeaders({dict(self._headers.items())!r})"
