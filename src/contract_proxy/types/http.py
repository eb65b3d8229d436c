# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Request and response envelopes exchanged with the transport.

These are deliberately small, library-agnostic dataclasses. Transports
translate them to and from their own HTTP client types.
"""

from dataclasses import dataclass, field

# Headers that describe the body rather than the request. They are attached
# to the content envelope, and only when a body is actually sent.
CONTENT_HEADERS = frozenset(
    {
        "allow",
        "content-disposition",
        "content-encoding",
        "content-language",
        "content-length",
        "content-location",
        "content-md5",
        "content-range",
        "content-type",
        "expires",
        "last-modified",
    }
)

QueryValue = str | list[str] | None


def is_content_header(name: str) -> bool:
    """Return True if ``name`` is a header describing the request content."""
    return name.strip().lower() in CONTENT_HEADERS


def find_header(headers: dict[str, str], name: str) -> str | None:
    """Case-insensitive header lookup."""
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


@dataclass
class RequestContent:
    """Serialized body plus the headers that describe it."""

    data: bytes
    headers: dict[str, str] = field(default_factory=dict)


@dataclass
class HttpRequest:
    """
    Outgoing request envelope.

    Attributes:
        method: HTTP verb, upper case
        path: Request target path with placeholders already expanded
        query_params: Query parameters; None values are never sent
        headers: Transport-level request headers
        content: Body envelope, or None when the request has no body
        path_variables: The raw substitution map, kept for inspection
    """

    method: str
    path: str
    query_params: dict[str, QueryValue] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)
    content: RequestContent | None = None
    path_variables: dict[str, str] = field(default_factory=dict)


@dataclass
class HttpResponse:
    """Incoming response envelope with the body fully read."""

    status_code: int
    headers: dict[str, str] = field(default_factory=dict)
    content: bytes = b""
    request: HttpRequest | None = None

    def header(self, name: str) -> str | None:
        return find_header(self.headers, name)

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


__all__ = [
    "CONTENT_HEADERS",
    "HttpRequest",
    "HttpResponse",
    "QueryValue",
    "RequestContent",
    "find_header",
    "is_content_header",
]
