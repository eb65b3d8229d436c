# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Request/response assembly planning.

``plan_method`` turns one decorated contract method into a MethodContract,
and ``AssemblyPlan`` executes that contract for a single call:

1. Bind the call arguments and apply each parameter's role in declared order
2. Build the request target from the path template, path variables and query
3. Attach the serialized body and its content headers, if there is a body
4. Attach the transport-level request headers
5. Invoke the transport (sync or async, the only suspension point)
6. Fill response header output slots
7. Extract the typed return value, unless the method returns None
"""

import inspect
import logging
import re
import typing
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from ..exceptions import ContractError
from ..markers import Endpoint
from ..protocols.serializer import SerializerProtocol
from ..protocols.transport import TransportProtocol
from ..types.contract import MethodContract, ParameterBinding, ParameterRole
from ..types.http import HttpRequest, HttpResponse
from .interpreter import RequestAssembly, apply_binding, interpret_parameter
from .returns import extract_return, plan_return

logger = logging.getLogger(__name__)

PLACEHOLDER_PATTERN = re.compile(r"\{([^{}]+)\}")


def join_route(base_route: str, path: str) -> str:
    """Join a service route prefix and a method path with a single slash."""
    if not base_route:
        return path
    if not path:
        return base_route
    return base_route.rstrip("/") + "/" + path.lstrip("/")


def merge_headers(target: dict[str, str], extra: dict[str, str]) -> None:
    """Merge ``extra`` into ``target``, replacing keys case-insensitively."""
    for name, value in extra.items():
        for existing in [key for key in target if key.lower() == name.lower()]:
            del target[existing]
        target[name] = value


def _resolve_hints(
    contract_name: str, name: str, func: Callable[..., Any]
) -> dict[str, Any]:
    try:
        return typing.get_type_hints(func, include_extras=True)
    except (NameError, TypeError) as e:
        raise ContractError(
            f"Cannot resolve annotations of {contract_name}.{name}: {e}",
            contract_name=contract_name,
            method_name=name,
        ) from e


def _check_path_variables(
    contract_name: str,
    name: str,
    template: str,
    bindings: list[ParameterBinding],
) -> None:
    placeholders = set(PLACEHOLDER_PATTERN.findall(template))
    seen: set[str] = set()

    for binding in bindings:
        if binding.name in seen:
            raise ContractError(
                f"Path variable '{binding.name}' is bound more than once in "
                f"{contract_name}.{name}",
                contract_name=contract_name,
                method_name=name,
            )
        seen.add(binding.name)

    missing = sorted(placeholders - seen)
    if missing:
        raise ContractError(
            f"Path placeholders {missing} in '{template}' have no matching "
            f"PathVariable in {contract_name}.{name}",
            contract_name=contract_name,
            method_name=name,
        )

    unused = sorted(seen - placeholders)
    if unused:
        raise ContractError(
            f"PathVariable bindings {unused} of {contract_name}.{name} do not "
            f"appear in '{template}'",
            contract_name=contract_name,
            method_name=name,
        )


def plan_method(
    contract_name: str,
    name: str,
    func: Callable[..., Any],
    endpoint: Endpoint,
    base_route: str = "",
) -> MethodContract:
    """
    Derive the MethodContract for one decorated contract method.

    Raises:
        ContractError: If the method's declaration is malformed
    """
    signature = inspect.signature(func)
    hints = _resolve_hints(contract_name, name, func)
    parameters = list(signature.parameters.values())

    if not parameters or parameters[0].kind not in (
        inspect.Parameter.POSITIONAL_ONLY,
        inspect.Parameter.POSITIONAL_OR_KEYWORD,
    ):
        raise ContractError(
            f"{contract_name}.{name} must be an instance method",
            contract_name=contract_name,
            method_name=name,
        )

    payload, is_async, response = plan_return(
        contract_name,
        name,
        hints.get("return", Any),
        inspect.iscoroutinefunction(func),
    )

    bindings = [
        interpret_parameter(
            contract_name,
            name,
            parameter,
            hints.get(parameter.name, parameter.annotation),
            is_async,
        )
        for parameter in parameters[1:]
    ]

    bodies = [b for b in bindings if b.role is ParameterRole.BODY]
    if len(bodies) > 1:
        names = ", ".join(b.parameter_name for b in bodies)
        raise ContractError(
            f"{contract_name}.{name} declares more than one Body parameter: [{names}]",
            contract_name=contract_name,
            method_name=name,
        )

    template = join_route(base_route, endpoint.path)
    _check_path_variables(
        contract_name,
        name,
        template,
        [b for b in bindings if b.role is ParameterRole.PATH_VARIABLE],
    )

    logger.debug(
        f"Planned {contract_name}.{name}: {endpoint.verb} {template} "
        f"({'async' if is_async else 'sync'}, {len(bindings)} bindings)"
    )

    return MethodContract(
        name=name,
        verb=endpoint.verb,
        path=template,
        is_async=is_async,
        return_type=payload,
        parameters=tuple(bindings),
        response=response,
        signature=signature,
        doc=inspect.getdoc(func),
    )


@dataclass(frozen=True)
class AssemblyPlan:
    """
    Executable plan for one contract method.

    The plan holds no per-call state; every call gets its own
    RequestAssembly, so one plan serves any number of concurrent calls.
    """

    contract_name: str
    method: MethodContract

    def assemble(
        self, instance: Any, args: tuple[Any, ...], kwargs: dict[str, Any]
    ) -> RequestAssembly:
        """Bind call arguments and apply every parameter's role."""
        if self.method.signature is None:
            raise TypeError(f"{self.contract_name}.{self.method.name} has no signature")

        bound = self.method.signature.bind(instance, *args, **kwargs)
        bound.apply_defaults()

        assembly = RequestAssembly()
        for binding in self.method.parameters:
            apply_binding(binding, bound.arguments[binding.parameter_name], assembly)
        return assembly

    def build_request(
        self,
        transport: TransportProtocol,
        serializer: SerializerProtocol,
        assembly: RequestAssembly,
    ) -> HttpRequest:
        """Turn an assembled call into a request envelope."""
        request = transport.build_request(
            self.method.verb,
            self.method.path,
            assembly.path_variables,
            assembly.query_params,
        )

        if assembly.has_body and assembly.body_binding is not None:
            content = serializer.encode(
                assembly.body,
                assembly.body_binding.body_format,
                assembly.body_binding.type,
            )
            merge_headers(content.headers, assembly.content_headers)
            request.content = content
        elif assembly.content_headers:
            logger.debug(
                f"{self.contract_name}.{self.method.name} has no body; dropping "
                f"content headers {sorted(assembly.content_headers)}"
            )

        merge_headers(request.headers, assembly.request_headers)
        return request

    def complete(
        self,
        transport: TransportProtocol,
        serializer: SerializerProtocol,
        response: HttpResponse,
        assembly: RequestAssembly,
    ) -> Any:
        """Fill output slots and extract the return value."""
        for binding, slot in assembly.header_slots:
            slot.value = transport.get_header_value(response, binding.name, binding.type)

        if self.method.response is None:
            return None
        return extract_return(self.method.response, response, transport, serializer)


__all__ = [
    "PLACEHOLDER_PATTERN",
    "AssemblyPlan",
    "join_route",
    "merge_headers",
    "plan_method",
]
