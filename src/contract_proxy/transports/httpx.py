# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
httpx-backed transport.

One HttpxTransport talks to one service. Sync and async calls use separate
httpx clients, created lazily and shared by every call so connections are
pooled. Status handling is httpx's: with ``raise_for_status`` enabled (the
default) non-success responses raise ``httpx.HTTPStatusError`` unchanged.
"""

import logging
import os
import re
import threading

import httpx
from typing_extensions import Self

from ..protocols.serializer import SerializerProtocol
from ..types.http import HttpRequest, HttpResponse
from .base import BaseTransport

logger = logging.getLogger(__name__)


def service_url_variable(service_name: str) -> str:
    """Environment variable consulted for a service's base URL."""
    return re.sub(r"[^A-Za-z0-9]", "_", service_name).upper() + "_URL"


class HttpxTransport(BaseTransport):
    """
    Transport built on httpx.Client and httpx.AsyncClient.

    Args:
        base_url: Base URL every request path is resolved against
        timeout: Request timeout in seconds
        headers: Default headers sent with every request
        client: Pre-built sync client (overrides base_url/timeout/headers)
        async_client: Pre-built async client
        raise_for_status: Raise httpx.HTTPStatusError on 4xx/5xx responses
        serializer: Converter used for response header values
    """

    def __init__(
        self,
        base_url: str = "",
        timeout: float = 30.0,
        headers: dict[str, str] | None = None,
        client: httpx.Client | None = None,
        async_client: httpx.AsyncClient | None = None,
        raise_for_status: bool = True,
        serializer: SerializerProtocol | None = None,
    ) -> None:
        super().__init__(serializer)
        self.base_url = base_url
        self.timeout = timeout
        self.headers = dict(headers or {})
        self.raise_for_status = raise_for_status
        self._client = client
        self._async_client = async_client
        self._lock = threading.Lock()

    @classmethod
    def for_service(
        cls,
        service_name: str,
        base_url: str | None = None,
        **kwargs: object,
    ) -> Self:
        """
        Create a transport for a logical service name.

        The base URL is taken from ``base_url``, else from the
        ``<SERVICE_NAME>_URL`` environment variable, else ``http://<service_name>``.
        """
        url = (
            base_url
            or os.environ.get(service_url_variable(service_name))
            or f"http://{service_name}"
        )
        logger.debug(f"Resolved service '{service_name}' to {url}")
        return cls(base_url=url, **kwargs)  # type: ignore[arg-type]

    @property
    def client(self) -> httpx.Client:
        if self._client is None:
            with self._lock:
                if self._client is None:
                    self._client = httpx.Client(
                        base_url=self.base_url,
                        timeout=self.timeout,
                        headers=self.headers,
                    )
        return self._client

    @property
    def async_client(self) -> httpx.AsyncClient:
        if self._async_client is None:
            with self._lock:
                if self._async_client is None:
                    self._async_client = httpx.AsyncClient(
                        base_url=self.base_url,
                        timeout=self.timeout,
                        headers=self.headers,
                    )
        return self._async_client

    def _to_httpx(
        self, client: httpx.Client | httpx.AsyncClient, request: HttpRequest
    ) -> httpx.Request:
        headers = dict(request.headers)
        content = None
        if request.content is not None:
            headers.update(request.content.headers)
            content = request.content.data
        return client.build_request(
            request.method,
            request.path,
            params=request.query_params or None,
            headers=headers,
            content=content,
        )

    def _from_httpx(
        self, response: httpx.Response, request: HttpRequest
    ) -> HttpResponse:
        if self.raise_for_status:
            response.raise_for_status()
        return HttpResponse(
            status_code=response.status_code,
            headers=dict(response.headers),
            content=response.content,
            request=request,
        )

    def invoke(self, request: HttpRequest) -> HttpResponse:
        client = self.client
        response = client.send(self._to_httpx(client, request))
        logger.debug(f"{request.method} {response.url} -> {response.status_code}")
        return self._from_httpx(response, request)

    async def invoke_async(self, request: HttpRequest) -> HttpResponse:
        client = self.async_client
        response = await client.send(self._to_httpx(client, request))
        logger.debug(f"{request.method} {response.url} -> {response.status_code}")
        return self._from_httpx(response, request)

    def close(self) -> None:
        if self._client is not None:
            self._client.close()

    async def aclose(self) -> None:
        if self._async_client is not None:
            await self._async_client.aclose()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


__all__ = ["HttpxTransport", "service_url_variable"]
