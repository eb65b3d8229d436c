# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Base transport with the HTTP-library-independent parts of the protocol.

Subclasses only need to implement ``invoke`` and ``invoke_async``.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any
from urllib.parse import quote

from ..protocols.serializer import SerializerProtocol
from ..serialization import JsonSerializer
from ..types.http import HttpRequest, HttpResponse, QueryValue

logger = logging.getLogger(__name__)


def expand_path(template: str, path_variables: dict[str, str]) -> str:
    """Substitute ``{name}`` placeholders with URL-quoted values."""
    path = template
    for name, value in path_variables.items():
        path = path.replace("{" + name + "}", quote(value, safe=""))
    return path


class BaseTransport(ABC):
    """
    Abstract base class for transports.

    Provides request construction and header conversion shared by every
    transport; sending is left to subclasses.
    """

    def __init__(self, serializer: SerializerProtocol | None = None) -> None:
        self._serializer: SerializerProtocol = serializer or JsonSerializer()

    def build_request(
        self,
        method: str,
        path: str,
        path_variables: dict[str, str],
        query_params: dict[str, QueryValue],
    ) -> HttpRequest:
        return HttpRequest(
            method=method.upper(),
            path=expand_path(path, path_variables),
            query_params={k: v for k, v in query_params.items() if v is not None},
            path_variables=dict(path_variables),
        )

    @abstractmethod
    def invoke(self, request: HttpRequest) -> HttpResponse:
        """Send the request and block until the response is read."""
        pass

    @abstractmethod
    async def invoke_async(self, request: HttpRequest) -> HttpResponse:
        """Send the request without blocking the event loop."""
        pass

    def get_header_value(
        self, response: HttpResponse, name: str, target_type: Any
    ) -> Any:
        text = response.header(name)
        if text is None:
            logger.debug(f"Response header '{name}' not present")
            return None
        return self._serializer.convert(text, target_type)


__all__ = ["BaseTransport", "expand_path"]
