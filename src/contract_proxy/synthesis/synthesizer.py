# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Proxy synthesis.

The synthesizer realizes a ServiceContract as a generated class deriving
from ServiceProxyBase and the contract itself. No source code is emitted or
compiled: every generated method interprets its AssemblyPlan at call time.
A text dump of the plans can optionally be written for diagnostics.
"""

import logging
import time
import types
import warnings
from collections.abc import Callable
from pathlib import Path
from typing import Any

from ..config import ProxyConfig
from ..exceptions import ContractProxyError, GenerationError, PersistenceWarning
from ..observability.metrics import ProxyMetrics
from ..types.contract import MethodContract, ParameterRole, ServiceContract
from .base import ServiceProxyBase
from .introspection import contract_full_name, describe_contract
from .planner import AssemblyPlan

logger = logging.getLogger(__name__)


def _type_name(tp: Any) -> str:
    if tp is None:
        return "None"
    if isinstance(tp, type):
        return tp.__qualname__
    return repr(tp).replace("typing.", "")


def _class_name(contract: ServiceContract) -> str:
    return (contract.full_name or contract.service_name).replace(".", "")


def _sealed_init_subclass(cls: type, **kwargs: Any) -> None:
    raise TypeError(f"{cls.__mro__[1].__qualname__} is sealed and cannot be subclassed")


def _make_method(plan: AssemblyPlan, qualname: str) -> Callable[..., Any]:
    method_contract = plan.method

    if method_contract.is_async:

        async def proxy_method(self: ServiceProxyBase, *args: Any, **kwargs: Any) -> Any:
            return await self._invoke_async(plan, args, kwargs)

    else:

        def proxy_method(self: ServiceProxyBase, *args: Any, **kwargs: Any) -> Any:
            return self._invoke(plan, args, kwargs)

    proxy_method.__name__ = method_contract.name
    proxy_method.__qualname__ = f"{qualname}.{method_contract.name}"
    proxy_method.__doc__ = method_contract.doc
    proxy_method.__signature__ = method_contract.signature  # type: ignore[attr-defined]
    return proxy_method


def render_plan(contract: ServiceContract) -> str:
    """Render a human-readable dump of a contract's assembly plans."""
    lines = [
        f"# Generated by contract-proxy for {contract.full_name or contract.service_name}",
        f"service: {contract.service_name}",
        f"route: {contract.base_route or '/'}",
        f"sealed: {str(contract.sealed).lower()}",
    ]
    for method in contract.methods:
        lines.append("")
        lines.extend(_render_method(method))
    return "\n".join(lines) + "\n"


def _render_method(method: MethodContract) -> list[str]:
    mode = "async" if method.is_async else "sync"
    lines = [f"{method.verb} {method.path} -> {method.name} ({mode})"]
    for binding in method.parameters:
        detail = f"{binding.role.value} '{binding.name}'"
        if binding.role is ParameterRole.REQUEST_HEADER and binding.is_content_header:
            detail += " [content]"
        if binding.role is ParameterRole.BODY:
            detail += f" [{binding.body_format.value}]"
        lines.append(
            f"  {binding.parameter_name}: {detail} ({_type_name(binding.type)})"
        )
    if method.response is None:
        lines.append("  returns: nothing")
    elif method.response.header_name is not None:
        lines.append(
            f"  returns: header '{method.response.header_name}' -> "
            f"{_type_name(method.response.target_type)}"
        )
    else:
        lines.append(
            f"  returns: body [{method.response.body_format.value}] -> "
            f"{_type_name(method.response.target_type)}"
        )
    return lines


class ProxySynthesizer:
    """
    Turns contract classes into proxy classes.

    The synthesizer is stateless apart from its configuration and metrics;
    caching and once-only generation are the registry's responsibility.
    """

    def __init__(
        self,
        config: ProxyConfig | None = None,
        metrics: ProxyMetrics | None = None,
    ) -> None:
        self.config = config or ProxyConfig()
        self.metrics = metrics

    def describe(self, contract_type: type) -> ServiceContract:
        """Derive the ServiceContract for a contract class."""
        return describe_contract(contract_type, sealed=self.config.sealed)

    def synthesize(self, contract: ServiceContract) -> type[ServiceProxyBase]:
        """
        Build the proxy class for a contract.

        Raises:
            GenerationError: If class construction fails unexpectedly.
                Contract errors raised earlier pass through untouched.
        """
        name = contract.full_name or contract.service_name
        start = time.perf_counter()

        try:
            proxy_class = self._build_class(contract)
        except ContractProxyError:
            self._record_failure(name)
            raise
        except Exception as e:
            self._record_failure(name)
            raise GenerationError(
                f"Failed to synthesize proxy for {name}: {e}",
                contract_name=name,
            ) from e

        duration = time.perf_counter() - start
        if self.metrics is not None:
            self.metrics.record_generation(name, duration)

        logger.info(
            f"Synthesized {proxy_class.__qualname__} for {name} "
            f"({len(contract.methods)} methods, {duration * 1000:.2f}ms)"
        )

        if self.config.emit_plans:
            self.persist(contract)

        return proxy_class

    def generate(self, contract_type: type) -> type[ServiceProxyBase]:
        """Describe and synthesize a contract class in one step."""
        try:
            contract = self.describe(contract_type)
        except ContractProxyError:
            self._record_failure(contract_full_name(contract_type))
            raise
        return self.synthesize(contract)

    def _record_failure(self, name: str) -> None:
        if self.metrics is not None:
            self.metrics.record_generation_failure(name)

    def _build_class(self, contract: ServiceContract) -> type[ServiceProxyBase]:
        class_name = _class_name(contract)
        plans = {
            method.name: AssemblyPlan(contract_name=contract.full_name, method=method)
            for method in contract.methods
        }

        namespace: dict[str, Any] = {
            "__module__": self.config.root_namespace,
            "__qualname__": class_name,
            "__doc__": f"Generated proxy for {contract.full_name}",
            "__contract__": contract,
            "__plans__": plans,
        }
        for method_name, plan in plans.items():
            namespace[method_name] = _make_method(plan, class_name)
        if contract.sealed:
            namespace["__init_subclass__"] = classmethod(_sealed_init_subclass)

        bases: tuple[type, ...] = (ServiceProxyBase,)
        if contract.contract_type is not None:
            bases += (contract.contract_type,)

        proxy_class = types.new_class(
            class_name, bases, exec_body=lambda ns: ns.update(namespace)
        )

        abstract = getattr(proxy_class, "__abstractmethods__", frozenset())
        if abstract:
            raise GenerationError(
                f"Proxy for {contract.full_name} left abstract members "
                f"unimplemented: {sorted(abstract)}",
                contract_name=contract.full_name,
            )
        return proxy_class

    def plan_path(self, contract: ServiceContract) -> Path:
        return Path(self.config.plan_directory) / f"{_class_name(contract)}.plan.txt"

    def persist(self, contract: ServiceContract) -> Path | None:
        """
        Write the plan dump for a contract.

        Failures are logged and reported as PersistenceWarning; they never
        abort generation.

        Returns:
            The written path, or None if writing failed
        """
        path = self.plan_path(contract)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            if path.exists():
                logger.info(f"Overwriting existing plan dump {path}")
            logger.debug(f"Writing plan dump: {path}")
            path.write_text(render_plan(contract), encoding="utf-8")
        except OSError as e:
            logger.warning(f"Could not write the plan dump for {path}: {e}")
            warnings.warn(
                f"Could not write the plan dump for {path}: {e}",
                PersistenceWarning,
                stacklevel=2,
            )
            return None
        return path


__all__ = ["ProxySynthesizer", "render_plan"]
