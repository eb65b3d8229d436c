# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Protocol for the HTTP transport collaborator."""

from typing import Any, Protocol, runtime_checkable

from ..types.http import HttpRequest, HttpResponse, QueryValue


@runtime_checkable
class TransportProtocol(Protocol):
    """
    Protocol for the component that actually talks HTTP.

    The proxy core only builds requests and interprets responses. Connection
    pooling, retries, service discovery and status handling all live behind
    this protocol. Whatever a transport raises reaches the caller unchanged.
    """

    def build_request(
        self,
        method: str,
        path: str,
        path_variables: dict[str, str],
        query_params: dict[str, QueryValue],
    ) -> HttpRequest:
        """
        Create a request envelope.

        Args:
            method: HTTP verb
            path: Path template, possibly containing ``{name}`` placeholders
            path_variables: Values for the placeholders, keyed by name
            query_params: Query parameters; None values are omitted

        Returns:
            HttpRequest ready for headers and content to be attached
        """
        ...

    def invoke(self, request: HttpRequest) -> HttpResponse:
        """Send the request and block until the response is read."""
        ...

    async def invoke_async(self, request: HttpRequest) -> HttpResponse:
        """Send the request without blocking the event loop."""
        ...

    def get_header_value(
        self, response: HttpResponse, name: str, target_type: Any
    ) -> Any:
        """Read header ``name`` converted to ``target_type``; None if absent."""
        ...
