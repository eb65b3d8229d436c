# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Return value planning: decide how a method's result is read from the response."""

from collections.abc import Awaitable, Coroutine
from typing import Any, get_args, get_origin

from ..exceptions import ContractError
from ..markers import ROLE_MARKERS, Body, ResponseHeader
from ..protocols.serializer import SerializerProtocol
from ..protocols.transport import TransportProtocol
from ..types.contract import BodyFormat, ExtractionMode, ResponseBinding
from ..types.http import HttpResponse
from .interpreter import split_annotated

_NONE_TYPES = (None, type(None))


def unwrap_awaitable(annotation: Any) -> tuple[Any, bool]:
    """Strip an ``Awaitable[T]``/``Coroutine[..., T]`` wrapper.

    Returns:
        Tuple of (payload type, whether a wrapper was removed)
    """
    if get_origin(annotation) in (Awaitable, Coroutine):
        args = get_args(annotation)
        return (args[-1] if args else Any), True
    return annotation, False


def plan_return(
    contract_name: str,
    method_name: str,
    annotation: Any,
    is_async: bool,
) -> tuple[Any, bool, ResponseBinding | None]:
    """
    Resolve a method's return annotation into a response binding.

    Args:
        contract_name: Full name of the contract, for error context
        method_name: Name of the method
        annotation: Resolved return annotation (``Any`` when missing)
        is_async: Whether the method was declared ``async def``

    Returns:
        Tuple of (payload type, async flag, binding). The binding is None
        for the void type, meaning no extraction runs.

    Raises:
        ContractError: If both Body and ResponseHeader mark the return value,
            a marker is repeated, or a parameter-only marker is used
    """
    outer, outer_markers = split_annotated(annotation)
    payload, wrapped = unwrap_awaitable(outer)
    payload, inner_markers = split_annotated(payload)
    is_async = is_async or wrapped

    markers = [m for m in outer_markers + inner_markers if isinstance(m, ROLE_MARKERS)]
    bodies = [m for m in markers if isinstance(m, Body)]
    headers = [m for m in markers if isinstance(m, ResponseHeader)]
    misplaced = [m for m in markers if not isinstance(m, (Body, ResponseHeader))]

    if misplaced:
        raise ContractError(
            f"{type(misplaced[0]).__name__} cannot mark the return value of "
            f"{contract_name}.{method_name}",
            contract_name=contract_name,
            method_name=method_name,
        )
    if bodies and headers:
        raise ContractError(
            "Cannot have different types of response markers on "
            f"{contract_name}.{method_name}. You had [Body, ResponseHeader]",
            contract_name=contract_name,
            method_name=method_name,
        )
    if len(bodies) > 1 or len(headers) > 1:
        raise ContractError(
            f"Return value of {contract_name}.{method_name} is marked more than once",
            contract_name=contract_name,
            method_name=method_name,
        )

    if payload in _NONE_TYPES:
        if markers:
            raise ContractError(
                f"{contract_name}.{method_name} returns None but its return value "
                "carries an extraction marker",
                contract_name=contract_name,
                method_name=method_name,
            )
        return None, is_async, None

    if headers:
        if not headers[0].name:
            raise ContractError(
                f"ResponseHeader on the return value of {contract_name}.{method_name} "
                "needs a header name",
                contract_name=contract_name,
                method_name=method_name,
            )
        binding = ResponseBinding(
            mode=ExtractionMode.HEADER,
            target_type=payload,
            header_name=headers[0].name,
        )
    else:
        binding = ResponseBinding(
            mode=ExtractionMode.BODY,
            target_type=payload,
            body_format=bodies[0].fmt if bodies else BodyFormat.JSON,
        )

    return payload, is_async, binding


def extract_return(
    binding: ResponseBinding,
    response: HttpResponse,
    transport: TransportProtocol,
    serializer: SerializerProtocol,
) -> Any:
    """Produce the typed result from a response."""
    if binding.mode is ExtractionMode.HEADER:
        return transport.get_header_value(
            response, binding.header_name or "", binding.target_type
        )
    return serializer.decode(response.content, binding.target_type, binding.body_format)


__all__ = [
    "extract_return",
    "plan_return",
    "unwrap_awaitable",
]
