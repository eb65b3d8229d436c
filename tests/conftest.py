"""
Shared fixtures for the contract proxy test suite.
"""

import asyncio
import json
from typing import Any

import pytest

from contract_proxy.registry import reset_default_registry
from contract_proxy.transports.base import BaseTransport
from contract_proxy.types.http import HttpRequest, HttpResponse


class StubTransport(BaseTransport):
    """Transport returning canned responses and recording every request."""

    def __init__(self) -> None:
        super().__init__()
        self.responses: dict[tuple[str, str], HttpResponse] = {}
        self.requests: list[HttpRequest] = []
        self.default_response = HttpResponse(status_code=200)

    def respond(
        self,
        method: str,
        path: str,
        json_body: Any = None,
        content: bytes = b"",
        headers: dict[str, str] | None = None,
        status_code: int = 200,
    ) -> None:
        if json_body is not None:
            content = json.dumps(json_body).encode("utf-8")
        self.responses[(method, path)] = HttpResponse(
            status_code=status_code,
            headers=headers or {},
            content=content,
        )

    @property
    def last_request(self) -> HttpRequest:
        return self.requests[-1]

    def invoke(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        return self.responses.get(
            (request.method, request.path), self.default_response
        )

    async def invoke_async(self, request: HttpRequest) -> HttpResponse:
        await asyncio.sleep(0)
        return self.invoke(request)


@pytest.fixture
def stub_transport():
    """Create a recording stub transport."""
    return StubTransport()


@pytest.fixture(autouse=True)
def _reset_default_registry():
    """Make sure no test sees another test's default registry."""
    reset_default_registry()
    yield
    reset_default_registry()
