# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Declarative markers for describing a service contract.

A contract is an interface-like class (a ``typing.Protocol`` or an abstract
base class) decorated with ``@service``. Each remote call is a method carrying
an HTTP verb decorator, and each parameter declares its role with a
``typing.Annotated`` marker.

Example:
    >>> @service("weather", route="/api")
    ... class Weather(Protocol):
    ...     @get("/forecast/{city}")
    ...     def get_forecast(self, city: Annotated[str, PathVariable()]) -> Forecast:
    ...         ...
    ...
    ...     @post("/reports")
    ...     async def submit(
    ...         self,
    ...         report: Annotated[Report, Body()],
    ...         trace: Annotated[str, RequestHeader("X-Trace")],
    ...     ) -> None:
    ...         ...
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from .types.contract import BodyFormat

T = TypeVar("T")
F = TypeVar("F", bound=Callable[..., Any])
C = TypeVar("C", bound=type)

SERVICE_ATTRIBUTE = "__contract_service__"
ENDPOINT_ATTRIBUTE = "__contract_endpoint__"


@dataclass(frozen=True)
class ServiceInfo:
    """Service-level metadata attached by ``@service``."""

    name: str
    route: str = ""


@dataclass(frozen=True)
class Endpoint:
    """Method-level metadata attached by the HTTP verb decorators."""

    verb: str
    path: str


@dataclass(frozen=True)
class PathVariable:
    """Bind the parameter to a ``{name}`` placeholder in the path."""

    name: str | None = None


@dataclass(frozen=True)
class Query:
    """Bind the parameter to a query string parameter."""

    name: str | None = None


@dataclass(frozen=True)
class RequestHeader:
    """Send the parameter as a request header.

    Headers describing the body (Content-Type, Content-Language, ...) are
    recognised by name and attached to the body instead of the request.
    """

    name: str


@dataclass(frozen=True)
class Body:
    """Serialize the parameter (or deserialize the return value) as the body."""

    fmt: BodyFormat = BodyFormat.JSON


@dataclass(frozen=True)
class ResponseHeader:
    """Read a response header into the return value or a ``HeaderOut`` slot."""

    name: str


ROLE_MARKERS = (PathVariable, Query, RequestHeader, Body, ResponseHeader)


@dataclass
class HeaderOut(Generic[T]):
    """Output slot filled from a response header once the call returns.

    Example:
        >>> total: HeaderOut[int] = HeaderOut()
        >>> client.list_items(total)
        >>> total.value
        42
    """

    value: T | None = None


def service(name: str, route: str = "") -> Callable[[C], C]:
    """Mark a class as a service contract.

    Args:
        name: Logical name of the remote service
        route: Optional route prefix shared by every method
    """
    if not name:
        raise ValueError("service name must not be empty")

    def decorator(cls: C) -> C:
        setattr(cls, SERVICE_ATTRIBUTE, ServiceInfo(name=name, route=route))
        return cls

    return decorator


def http_method(verb: str, path: str = "") -> Callable[[F], F]:
    """Mark a contract method as an HTTP call with the given verb and path."""
    if not verb:
        raise ValueError("HTTP verb must not be empty")

    def decorator(func: F) -> F:
        setattr(func, ENDPOINT_ATTRIBUTE, Endpoint(verb=verb.upper(), path=path))
        return func

    return decorator


def get(path: str = "") -> Callable[[F], F]:
    return http_method("GET", path)


def post(path: str = "") -> Callable[[F], F]:
    return http_method("POST", path)


def put(path: str = "") -> Callable[[F], F]:
    return http_method("PUT", path)


def patch(path: str = "") -> Callable[[F], F]:
    return http_method("PATCH", path)


def delete(path: str = "") -> Callable[[F], F]:
    return http_method("DELETE", path)


def head(path: str = "") -> Callable[[F], F]:
    return http_method("HEAD", path)


def options(path: str = "") -> Callable[[F], F]:
    return http_method("OPTIONS", path)


__all__ = [
    "ENDPOINT_ATTRIBUTE",
    "ROLE_MARKERS",
    "SERVICE_ATTRIBUTE",
    "Body",
    "Endpoint",
    "HeaderOut",
    "PathVariable",
    "Query",
    "RequestHeader",
    "ResponseHeader",
    "ServiceInfo",
    "delete",
    "get",
    "head",
    "http_method",
    "options",
    "patch",
    "post",
    "put",
    "service",
]
