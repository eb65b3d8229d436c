from typing import Any

from contract_proxy.protocols import SerializerProtocol, TransportProtocol
from contract_proxy.serialization import JsonSerializer
from contract_proxy.types import BodyFormat, HttpRequest, HttpResponse, RequestContent


class TestProtocols:
    def test_transport_protocol_runtime_checkable(self):
        """Verify TransportProtocol is runtime checkable."""

        class ValidTransport:
            def build_request(self, method, path, path_variables, query_params):
                return HttpRequest(method=method, path=path)

            def invoke(self, request: HttpRequest) -> HttpResponse:
                return HttpResponse(status_code=200)

            async def invoke_async(self, request: HttpRequest) -> HttpResponse:
                return HttpResponse(status_code=200)

            def get_header_value(self, response, name, target_type) -> Any:
                return None

        assert isinstance(ValidTransport(), TransportProtocol)

    def test_transport_protocol_rejects_incomplete(self):
        class NoAsync:
            def build_request(self, method, path, path_variables, query_params):
                return HttpRequest(method=method, path=path)

            def invoke(self, request):
                return HttpResponse(status_code=200)

        assert not isinstance(NoAsync(), TransportProtocol)

    def test_serializer_protocol_runtime_checkable(self):
        """Verify SerializerProtocol is runtime checkable."""

        class ValidSerializer:
            def encode(
                self, value: Any, fmt: BodyFormat, value_type: Any = None
            ) -> RequestContent:
                return RequestContent(data=b"")

            def decode(self, content: bytes, target_type: Any, fmt: BodyFormat) -> Any:
                return None

            def convert(self, text: str, target_type: Any) -> Any:
                return text

        assert isinstance(ValidSerializer(), SerializerProtocol)

    def test_json_serializer_satisfies_protocol(self):
        assert isinstance(JsonSerializer(), SerializerProtocol)

    def test_stub_transport_satisfies_protocol(self, stub_transport):
        assert isinstance(stub_transport, TransportProtocol)
