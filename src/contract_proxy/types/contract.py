# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Contract description types.

These dataclasses are the explicit, immutable description of a service
contract. They are derived once per contract class, on first use, and then
drive proxy synthesis. Nothing here is discovered again at call time.
"""

import inspect
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ParameterRole(Enum):
    """Role a contract method parameter plays in building the request.

    - PATH_VARIABLE: substituted into a ``{name}`` placeholder of the path
    - QUERY_PARAM: appended to the query string
    - REQUEST_HEADER: sent as a header (transport or content header)
    - BODY: serialized into the request content
    - RESPONSE_HEADER_OUT: output slot filled from a response header
    """

    PATH_VARIABLE = "path_variable"
    QUERY_PARAM = "query_param"
    REQUEST_HEADER = "request_header"
    BODY = "body"
    RESPONSE_HEADER_OUT = "response_header_out"


class ExtractionMode(Enum):
    """Where a method's return value comes from."""

    BODY = "body"
    HEADER = "header"


class BodyFormat(Enum):
    """Wire format of a request or response body.

    - JSON: encoded/decoded by the serializer collaborator
    - RAW: bytes (or text) passed through untouched
    """

    JSON = "json"
    RAW = "raw"


@dataclass(frozen=True)
class ParameterBinding:
    """
    How one method parameter contributes to the outgoing request.

    Attributes:
        parameter_name: Name of the Python parameter
        name: Binding name on the wire (explicit override or parameter name)
        type: Declared type of the parameter, markers stripped
        role: The single role the parameter was classified into
        is_content_header: True for headers that describe the body
            (Content-Type and friends); they travel with the content envelope
        body_format: Wire format, only meaningful for BODY bindings
    """

    parameter_name: str
    name: str
    type: Any
    role: ParameterRole
    is_content_header: bool = False
    body_format: BodyFormat = BodyFormat.JSON


@dataclass(frozen=True)
class ResponseBinding:
    """How a method's return value is populated from the response."""

    mode: ExtractionMode
    target_type: Any
    header_name: str | None = None
    body_format: BodyFormat = BodyFormat.JSON


@dataclass(frozen=True)
class MethodContract:
    """
    HTTP semantics of a single contract method.

    ``response`` is None when the method returns the void type (``None``),
    in which case no extraction runs after the call.
    """

    name: str
    verb: str
    path: str
    is_async: bool
    return_type: Any
    parameters: tuple[ParameterBinding, ...] = ()
    response: ResponseBinding | None = None
    signature: inspect.Signature | None = field(default=None, compare=False)
    doc: str | None = field(default=None, compare=False)


@dataclass(frozen=True)
class ServiceContract:
    """
    Complete description of a service contract.

    Attributes:
        service_name: Logical service name used to locate the service
        base_route: Route prefix shared by every method (may be empty)
        sealed: Whether the synthesized proxy class refuses subclassing
        methods: Method contracts in declaration order
        contract_type: The contract class this was derived from, if any
        full_name: Dotted module path and qualified name of the contract
    """

    service_name: str
    base_route: str = ""
    sealed: bool = True
    methods: tuple[MethodContract, ...] = ()
    contract_type: type | None = field(default=None, compare=False)
    full_name: str = ""

    def method(self, name: str) -> MethodContract:
        for method in self.methods:
            if method.name == name:
                return method
        raise KeyError(name)


__all__ = [
    "BodyFormat",
    "ExtractionMode",
    "MethodContract",
    "ParameterBinding",
    "ParameterRole",
    "ResponseBinding",
    "ServiceContract",
]
