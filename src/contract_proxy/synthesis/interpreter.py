# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Parameter role interpreter.

Classifies each contract method parameter into exactly one role
(path variable, query parameter, request header, body or response header
output slot) and applies that role while a request is being assembled.

Classification happens once, while the proxy is generated. Application
happens on every call and only mutates the per-call RequestAssembly, so
concurrent calls never share state.
"""

import inspect
import logging
import types
from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated, Any, Union, get_args, get_origin

from ..exceptions import ContractError
from ..markers import (
    ROLE_MARKERS,
    Body,
    HeaderOut,
    PathVariable,
    Query,
    RequestHeader,
    ResponseHeader,
)
from ..types.contract import ParameterBinding, ParameterRole
from ..types.http import QueryValue, is_content_header

logger = logging.getLogger(__name__)

_SEQUENCE_TYPES = (list, tuple, set, frozenset)


def split_annotated(annotation: Any) -> tuple[Any, list[Any]]:
    """Split ``Annotated[T, *extras]`` into ``T`` and its metadata.

    ``Optional[Annotated[T, ...]]`` (what Python 3.10 reports for parameters
    defaulting to None) yields ``Optional[T]`` and the same metadata.
    """
    origin = get_origin(annotation)
    if origin is Annotated:
        base, *extras = get_args(annotation)
        return base, list(extras)
    if origin is Union:
        members = get_args(annotation)
        annotated = [m for m in members if get_origin(m) is Annotated]
        if len(annotated) == 1:
            base, extras = split_annotated(annotated[0])
            rest = tuple(m for m in members if m is not annotated[0])
            return Union[(base, *rest)], extras
    return annotation, []


def to_text(value: Any) -> str | None:
    """
    Natural string form of a value for headers, query and path segments.

    None stays None so callers can treat it as absent rather than
    sending the literal text "None".
    """
    if value is None:
        return None
    if isinstance(value, Enum):
        return to_text(value.value)
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8")
    return str(value)


@dataclass
class RequestAssembly:
    """Per-call scratch state filled while parameters are applied."""

    path_variables: dict[str, str] = field(default_factory=dict)
    query_params: dict[str, QueryValue] = field(default_factory=dict)
    request_headers: dict[str, str] = field(default_factory=dict)
    content_headers: dict[str, str] = field(default_factory=dict)
    body: Any = None
    body_binding: ParameterBinding | None = None
    header_slots: list[tuple[ParameterBinding, HeaderOut[Any]]] = field(
        default_factory=list
    )

    @property
    def has_body(self) -> bool:
        return self.body_binding is not None and self.body is not None


def interpret_parameter(
    contract_name: str,
    method_name: str,
    parameter: inspect.Parameter,
    annotation: Any,
    is_async: bool,
) -> ParameterBinding:
    """
    Classify one parameter into its binding.

    Args:
        contract_name: Full name of the contract, for error context
        method_name: Name of the method declaring the parameter
        parameter: The parameter from the method signature
        annotation: Resolved annotation, ``Annotated`` metadata included
        is_async: Whether the method is asynchronous

    Returns:
        ParameterBinding describing the parameter's single role

    Raises:
        ContractError: If the parameter has no role marker, several markers,
            an empty binding name, or a response header slot on an async method
    """
    where = f"parameter '{parameter.name}' of {contract_name}.{method_name}"

    if parameter.kind in (
        inspect.Parameter.VAR_POSITIONAL,
        inspect.Parameter.VAR_KEYWORD,
    ):
        raise ContractError(
            f"Variadic {where} cannot be bound to a request",
            contract_name=contract_name,
            method_name=method_name,
        )

    base, extras = split_annotated(annotation)
    markers = [extra for extra in extras if isinstance(extra, ROLE_MARKERS)]

    if not markers:
        raise ContractError(
            f"No role marker on {where}; annotate it with PathVariable, Query, "
            "RequestHeader, Body or ResponseHeader",
            contract_name=contract_name,
            method_name=method_name,
        )
    if len(markers) > 1:
        names = ", ".join(type(marker).__name__ for marker in markers)
        raise ContractError(
            f"Ambiguous role for {where}: [{names}]",
            contract_name=contract_name,
            method_name=method_name,
        )

    marker = markers[0]

    if isinstance(marker, PathVariable):
        binding = ParameterBinding(
            parameter_name=parameter.name,
            name=marker.name or parameter.name,
            type=base,
            role=ParameterRole.PATH_VARIABLE,
        )
    elif isinstance(marker, Query):
        binding = ParameterBinding(
            parameter_name=parameter.name,
            name=marker.name or parameter.name,
            type=base,
            role=ParameterRole.QUERY_PARAM,
        )
    elif isinstance(marker, RequestHeader):
        if not marker.name:
            raise ContractError(
                f"RequestHeader on {where} needs a header name",
                contract_name=contract_name,
                method_name=method_name,
            )
        binding = ParameterBinding(
            parameter_name=parameter.name,
            name=marker.name,
            type=base,
            role=ParameterRole.REQUEST_HEADER,
            is_content_header=is_content_header(marker.name),
        )
    elif isinstance(marker, Body):
        binding = ParameterBinding(
            parameter_name=parameter.name,
            name=parameter.name,
            type=base,
            role=ParameterRole.BODY,
            body_format=marker.fmt,
        )
    else:
        binding = _interpret_response_header(
            contract_name, method_name, where, parameter, base, marker, is_async
        )

    logger.debug(f"Bound {where} as {binding.role.value} '{binding.name}'")
    return binding


def _interpret_response_header(
    contract_name: str,
    method_name: str,
    where: str,
    parameter: inspect.Parameter,
    base: Any,
    marker: ResponseHeader,
    is_async: bool,
) -> ParameterBinding:
    if not marker.name:
        raise ContractError(
            f"ResponseHeader on {where} needs a header name",
            contract_name=contract_name,
            method_name=method_name,
        )
    if is_async:
        raise ContractError(
            f"ResponseHeader output slot on {where} requires a synchronous method",
            contract_name=contract_name,
            method_name=method_name,
        )
    if get_origin(base) in (Union, types.UnionType):
        members = [m for m in get_args(base) if m is not type(None)]
        if len(members) == 1:
            base = members[0]
    if base is not HeaderOut and get_origin(base) is not HeaderOut:
        raise ContractError(
            f"ResponseHeader on {where} must annotate a HeaderOut[T] slot",
            contract_name=contract_name,
            method_name=method_name,
        )

    args = get_args(base)
    return ParameterBinding(
        parameter_name=parameter.name,
        name=marker.name,
        type=args[0] if args else Any,
        role=ParameterRole.RESPONSE_HEADER_OUT,
    )


def apply_binding(
    binding: ParameterBinding, value: Any, assembly: RequestAssembly
) -> None:
    """Apply one bound argument to the request being assembled."""
    role = binding.role

    if role is ParameterRole.PATH_VARIABLE:
        assembly.path_variables[binding.name] = to_text(value) or ""

    elif role is ParameterRole.QUERY_PARAM:
        if isinstance(value, _SEQUENCE_TYPES):
            assembly.query_params[binding.name] = [
                text for text in (to_text(item) for item in value) if text is not None
            ]
        else:
            assembly.query_params[binding.name] = to_text(value)

    elif role is ParameterRole.REQUEST_HEADER:
        text = to_text(value)
        if text is None:
            return
        if binding.is_content_header:
            assembly.content_headers[binding.name] = text
        else:
            assembly.request_headers[binding.name] = text

    elif role is ParameterRole.BODY:
        assembly.body = value
        assembly.body_binding = binding

    elif role is ParameterRole.RESPONSE_HEADER_OUT:
        if value is None:
            return
        if not isinstance(value, HeaderOut):
            raise TypeError(
                f"'{binding.parameter_name}' expects a HeaderOut slot, "
                f"got {type(value).__name__}"
            )
        assembly.header_slots.append((binding, value))


__all__ = [
    "RequestAssembly",
    "apply_binding",
    "interpret_parameter",
    "split_annotated",
    "to_text",
]
