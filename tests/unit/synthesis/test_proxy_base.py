"""
Unit tests for invocation through generated proxy instances.
"""

import asyncio
from typing import Annotated, Protocol

import pytest

from contract_proxy.config import ProxyConfig
from contract_proxy.markers import Body, PathVariable, Query, get, post, service
from contract_proxy.observability.metrics import ProxyMetrics
from contract_proxy.synthesis.synthesizer import ProxySynthesizer
from contract_proxy.transports.base import BaseTransport
from contract_proxy.types import BodyFormat
from contract_proxy.types.http import HttpRequest, HttpResponse


@service("files", route="/v1")
class Files(Protocol):
    @post("/files")
    def send(self, payload: Annotated[bytes, Body(BodyFormat.RAW)]) -> None: ...

    @post("/files")
    async def send_async(
        self, payload: Annotated[bytes, Body(BodyFormat.RAW)]
    ) -> None: ...

    @get("/files/{name}")
    def stat(
        self,
        name: Annotated[str, PathVariable()],
        revision: Annotated[int | None, Query()] = None,
    ) -> dict: ...

    @get("/files/{name}")
    async def stat_async(self, name: Annotated[str, PathVariable()]) -> dict: ...


class ParkedTransport(BaseTransport):
    """Transport whose async calls never complete."""

    def __init__(self) -> None:
        super().__init__()
        self.entered = asyncio.Event()

    def invoke(self, request: HttpRequest) -> HttpResponse:
        return HttpResponse(status_code=200)

    async def invoke_async(self, request: HttpRequest) -> HttpResponse:
        self.entered.set()
        await asyncio.Event().wait()
        return HttpResponse(status_code=200)  # pragma: no cover


@pytest.fixture
def synthesizer():
    return ProxySynthesizer(ProxyConfig(metrics_enabled=False))


@pytest.fixture
def metrics():
    return ProxyMetrics()


class TestInvocationMetrics:
    def test_success_is_recorded(self, synthesizer, stub_transport, metrics):
        stub_transport.respond("GET", "/v1/files/a.txt", json_body={"size": 3})
        files = synthesizer.generate(Files)(stub_transport, metrics=metrics)

        assert files.stat("a.txt") == {"size": 3}
        assert metrics.invocations == 1
        assert metrics.invocation_failures == 0

    def test_encoding_failure_is_recorded(self, synthesizer, stub_transport, metrics):
        files = synthesizer.generate(Files)(stub_transport, metrics=metrics)

        with pytest.raises(TypeError, match="Raw bodies"):
            files.send(123)

        assert stub_transport.requests == []
        assert metrics.invocations == 1
        assert metrics.invocation_failures == 1

    def test_binding_failure_is_recorded(self, synthesizer, stub_transport, metrics):
        files = synthesizer.generate(Files)(stub_transport, metrics=metrics)

        with pytest.raises(TypeError):
            files.stat("a.txt", unknown=1)

        assert metrics.invocation_failures == 1

    @pytest.mark.asyncio
    async def test_async_encoding_failure_is_recorded(
        self, synthesizer, stub_transport, metrics
    ):
        files = synthesizer.generate(Files)(stub_transport, metrics=metrics)

        with pytest.raises(TypeError, match="Raw bodies"):
            await files.send_async(123)

        assert stub_transport.requests == []
        assert metrics.invocations == 1
        assert metrics.invocation_failures == 1


class TestCancellation:
    @pytest.mark.asyncio
    async def test_cancelled_call_raises_cancelled_error(self, synthesizer):
        transport = ParkedTransport()
        files = synthesizer.generate(Files)(transport)

        task = asyncio.create_task(files.stat_async("a.txt"))
        await asyncio.wait_for(transport.entered.wait(), timeout=1.0)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
        assert task.cancelled()


class TestRepeatedGeneration:
    def test_separately_generated_proxies_behave_identically(
        self, synthesizer, stub_transport
    ):
        stub_transport.respond("GET", "/v1/files/a.txt", json_body={"size": 3})
        first = synthesizer.generate(Files)(stub_transport)
        second = synthesizer.generate(Files)(stub_transport)

        first_result = first.stat("a.txt", revision=2)
        second_result = second.stat("a.txt", revision=2)

        assert first_result == second_result == {"size": 3}
        assert len(stub_transport.requests) == 2
        assert stub_transport.requests[0] == stub_transport.requests[1]
        assert stub_transport.last_request.query_params == {"revision": "2"}
