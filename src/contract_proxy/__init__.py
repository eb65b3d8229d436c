# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Contract Proxy - Declarative HTTP clients from annotated service contracts.

Declare a remote service as an interface-like class, annotate its methods
with HTTP semantics, and get back a working client. No request or response
plumbing is written by hand.

Key Features:
    - Path variables, query parameters, request headers and bodies bound
      by ``typing.Annotated`` markers
    - Return values read from the body or from a response header
    - Synchronous and ``async def`` methods
    - Malformed contracts rejected when the proxy is generated, never mid-call
    - One generation per contract, safe under concurrent first use
    - Pluggable transport and serializer (httpx and pydantic by default)

Quick Start:
    >>> from typing import Annotated, Protocol
    >>> from contract_proxy import PathVariable, get, service
    >>> import contract_proxy
    >>>
    >>> @service("weather")
    ... class Weather(Protocol):
    ...     @get("/forecast/{city}")
    ...     def get_forecast(self, city: Annotated[str, PathVariable()]) -> Forecast:
    ...         ...
    >>>
    >>> weather = contract_proxy.get_default(Weather)
    >>> weather.get_forecast("NYC")

Main Exports:
    - service, get, post, put, patch, delete, head, options: Declaration decorators
    - PathVariable, Query, RequestHeader, Body, ResponseHeader, HeaderOut: Markers
    - ProxyRegistry, get_default, generate, configure: Obtaining proxies
    - ProxyConfig: Configuration options
    - TransportProtocol, SerializerProtocol: Collaborator interfaces
    - BaseTransport, HttpxTransport: Transports

Note: HttpxTransport requires the 'http' extra. Install with:
    pip install contract-proxy[http]

Version: 1.0.0
"""

__version__ = "1.0.0"

from typing import TYPE_CHECKING

from .config import ProxyConfig
from .exceptions import (
    ConfigurationError,
    ContractError,
    ContractProxyError,
    GenerationError,
    PersistenceWarning,
    UnsupportedFeatureError,
)
from .markers import (
    Body,
    HeaderOut,
    PathVariable,
    Query,
    RequestHeader,
    ResponseHeader,
    delete,
    get,
    head,
    http_method,
    options,
    patch,
    post,
    put,
    service,
)
from .observability import ProxyMetrics
from .protocols import SerializerProtocol, TransportProtocol
from .registry import (
    ProxyRegistry,
    configure,
    generate,
    get_default,
    get_registry,
)
from .serialization import JsonSerializer
from .synthesis import ProxySynthesizer, ServiceProxyBase, describe_contract
from .transports import BaseTransport
from .types import (
    BodyFormat,
    HttpRequest,
    HttpResponse,
    RequestContent,
    ServiceContract,
)

# Lazy import for optional httpx transport
if TYPE_CHECKING:
    from .transports import HttpxTransport

__all__ = [
    # Transports
    "BaseTransport",
    # Markers
    "Body",
    "BodyFormat",
    "ConfigurationError",
    "ContractError",
    # Exceptions
    "ContractProxyError",
    "GenerationError",
    "HeaderOut",
    "HttpRequest",
    "HttpResponse",
    "HttpxTransport",  # Lazy loaded - requires http extra
    "JsonSerializer",
    "PathVariable",
    "PersistenceWarning",
    # Configuration
    "ProxyConfig",
    "ProxyMetrics",
    # Registry
    "ProxyRegistry",
    "ProxySynthesizer",
    "Query",
    "RequestContent",
    "RequestHeader",
    "ResponseHeader",
    # Protocols
    "SerializerProtocol",
    "ServiceContract",
    "ServiceProxyBase",
    "TransportProtocol",
    "UnsupportedFeatureError",
    "configure",
    "delete",
    "describe_contract",
    "generate",
    # Declaration decorators
    "get",
    "get_default",
    "get_registry",
    "head",
    "http_method",
    "options",
    "patch",
    "post",
    "put",
    "service",
]


def __getattr__(name: str) -> type:
    """Lazy import for optional httpx transport."""
    if name == "HttpxTransport":
        from .transports import HttpxTransport

        return HttpxTransport
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
