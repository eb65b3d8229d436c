# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Derive a ServiceContract from a decorated contract class."""

import inspect
import logging
from abc import ABCMeta
from collections.abc import Iterator
from typing import Any

from ..exceptions import ContractError, UnsupportedFeatureError
from ..markers import ENDPOINT_ATTRIBUTE, SERVICE_ATTRIBUTE, Endpoint, ServiceInfo
from ..types.contract import ServiceContract
from .planner import plan_method

logger = logging.getLogger(__name__)


def contract_full_name(contract_type: Any) -> str:
    """Dotted module path plus qualified name of a contract class."""
    module = getattr(contract_type, "__module__", None)
    qualname = getattr(contract_type, "__qualname__", repr(contract_type))
    return f"{module}.{qualname}" if module else qualname


def _iter_members(contract_type: type) -> Iterator[tuple[str, Any]]:
    """Yield class members in declaration order, base classes first."""
    members: dict[str, Any] = {}
    for klass in reversed(contract_type.__mro__):
        if klass is object:
            continue
        for name, member in vars(klass).items():
            if name.startswith("__") and name.endswith("__"):
                continue
            members[name] = member
    yield from members.items()


def describe_contract(contract_type: type, sealed: bool = True) -> ServiceContract:
    """
    Inspect a contract class and build its ServiceContract.

    Args:
        contract_type: A public Protocol or abstract base class decorated
            with ``@service``
        sealed: Non-extensibility flag recorded on the contract

    Returns:
        The complete, immutable ServiceContract

    Raises:
        ContractError: If the class or any of its methods is malformed
        UnsupportedFeatureError: If the class is parametric (generic)
    """
    if not isinstance(contract_type, type):
        raise ContractError(f"{contract_type!r} is not a class")

    full_name = contract_full_name(contract_type)

    if contract_type.__name__.startswith("_") or not isinstance(
        contract_type, ABCMeta
    ):
        raise ContractError(
            f"{full_name} must be a public Protocol or abstract base class",
            contract_name=full_name,
        )

    if getattr(contract_type, "__parameters__", ()):
        raise UnsupportedFeatureError(
            f"Generic contracts are not supported: {full_name}",
            contract_name=full_name,
        )

    info = getattr(contract_type, SERVICE_ATTRIBUTE, None)
    if not isinstance(info, ServiceInfo):
        raise ContractError(
            f"{full_name} is not decorated with @service",
            contract_name=full_name,
        )

    methods = []
    for name, member in _iter_members(contract_type):
        endpoint = getattr(member, ENDPOINT_ATTRIBUTE, None)

        if not isinstance(endpoint, Endpoint):
            if getattr(member, "__isabstractmethod__", False):
                raise ContractError(
                    f"Abstract member {full_name}.{name} has no HTTP method marker",
                    contract_name=full_name,
                    method_name=name,
                )
            continue

        if not inspect.isfunction(member):
            raise ContractError(
                f"{full_name}.{name} must be a plain method to carry an HTTP marker",
                contract_name=full_name,
                method_name=name,
            )

        methods.append(plan_method(full_name, name, member, endpoint, info.route))

    if not methods:
        logger.warning(f"Contract {full_name} declares no HTTP methods")

    return ServiceContract(
        service_name=info.name,
        base_route=info.route,
        sealed=sealed,
        methods=tuple(methods),
        contract_type=contract_type,
        full_name=full_name,
    )


__all__ = ["contract_full_name", "describe_contract"]
