# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Runtime base class for synthesized proxies.

Every generated proxy class derives from ServiceProxyBase and from the
contract it realizes. The generated methods are one-line trampolines into
``_invoke``/``_invoke_async``, which run the method's AssemblyPlan against
the instance's transport and serializer.
"""

import logging
from typing import Any, ClassVar

from ..observability.metrics import ProxyMetrics
from ..protocols.serializer import SerializerProtocol
from ..protocols.transport import TransportProtocol
from ..serialization import JsonSerializer
from ..types.contract import ServiceContract
from .planner import AssemblyPlan

logger = logging.getLogger(__name__)


class ServiceProxyBase:
    """
    Base class of every realization.

    Instances hold no mutable per-call state, so one instance can serve
    unlimited concurrent calls; connection pooling is the transport's job.
    """

    __contract__: ClassVar[ServiceContract]
    __plans__: ClassVar[dict[str, AssemblyPlan]]

    def __init__(
        self,
        transport: TransportProtocol,
        serializer: SerializerProtocol | None = None,
        metrics: ProxyMetrics | None = None,
    ) -> None:
        self._transport = transport
        self._serializer: SerializerProtocol = serializer or JsonSerializer()
        self._metrics = metrics

    @property
    def transport(self) -> TransportProtocol:
        return self._transport

    @property
    def contract(self) -> ServiceContract:
        return type(self).__contract__

    @property
    def service_name(self) -> str:
        return self.contract.service_name

    @property
    def base_route(self) -> str:
        return self.contract.base_route

    def _record(self, plan: AssemblyPlan, succeeded: bool) -> None:
        if self._metrics is not None:
            self._metrics.record_invocation(
                plan.contract_name, plan.method.name, succeeded
            )

    def _invoke(
        self, plan: AssemblyPlan, args: tuple[Any, ...], kwargs: dict[str, Any]
    ) -> Any:
        try:
            assembly = plan.assemble(self, args, kwargs)
            request = plan.build_request(
                self._transport, self._serializer, assembly
            )
            response = self._transport.invoke(request)
            result = plan.complete(
                self._transport, self._serializer, response, assembly
            )
        except Exception:
            self._record(plan, succeeded=False)
            raise
        self._record(plan, succeeded=True)
        return result

    async def _invoke_async(
        self, plan: AssemblyPlan, args: tuple[Any, ...], kwargs: dict[str, Any]
    ) -> Any:
        try:
            assembly = plan.assemble(self, args, kwargs)
            request = plan.build_request(
                self._transport, self._serializer, assembly
            )
            response = await self._transport.invoke_async(request)
            result = plan.complete(
                self._transport, self._serializer, response, assembly
            )
        except Exception:
            self._record(plan, succeeded=False)
            raise
        self._record(plan, succeeded=True)
        return result

    def __repr__(self) -> str:
        return (
            f"<{type(self).__qualname__} service={type(self).__contract__.service_name!r} "
            f"transport={type(self._transport).__name__}>"
        )


__all__ = ["ServiceProxyBase"]
