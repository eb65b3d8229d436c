"""
Unit tests for BaseTransport request construction and header conversion.
"""

import pytest

from contract_proxy.protocols import TransportProtocol
from contract_proxy.transports.base import BaseTransport, expand_path
from contract_proxy.types.http import HttpResponse


class TestExpandPath:
    def test_substitutes_placeholders(self):
        assert expand_path("/users/{id}/posts/{post}", {"id": "7", "post": "9"}) == (
            "/users/7/posts/9"
        )

    def test_values_are_quoted(self):
        assert expand_path("/files/{name}", {"name": "a b/c?"}) == "/files/a%20b%2Fc%3F"

    def test_repeated_placeholder(self):
        assert expand_path("/{x}/{x}", {"x": "1"}) == "/1/1"

    def test_empty_value(self):
        assert expand_path("/users/{id}", {"id": ""}) == "/users/"


class TestBaseTransport:
    def test_cannot_instantiate_without_invoke(self):
        with pytest.raises(TypeError):
            BaseTransport()  # type: ignore[abstract]

    def test_satisfies_protocol(self, stub_transport):
        assert isinstance(stub_transport, TransportProtocol)

    def test_build_request(self, stub_transport):
        request = stub_transport.build_request(
            "get",
            "/search/{kind}",
            {"kind": "books"},
            {"q": "dune", "page": None, "tag": ["a", "b"]},
        )

        assert request.method == "GET"
        assert request.path == "/search/books"
        assert request.query_params == {"q": "dune", "tag": ["a", "b"]}
        assert request.path_variables == {"kind": "books"}
        assert request.headers == {}
        assert request.content is None

    def test_get_header_value_converts(self, stub_transport):
        response = HttpResponse(status_code=200, headers={"x-count": "42"})

        assert stub_transport.get_header_value(response, "X-Count", int) == 42
        assert stub_transport.get_header_value(response, "X-Count", str) == "42"

    def test_missing_header_is_none(self, stub_transport):
        response = HttpResponse(status_code=200)

        assert stub_transport.get_header_value(response, "ETag", str) is None
