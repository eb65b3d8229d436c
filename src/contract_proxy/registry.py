# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Proxy registry.

The registry memoizes one realization per contract class. The first request
for a contract describes and synthesizes it under a lock; every later request
reuses the cached class (and, for ``get_default``, the cached instance).
Failed generations cache nothing, so a broken contract never leaves a
partial realization behind.

Example:
    >>> weather = contract_proxy.get_default(Weather)
    >>> weather.get_forecast("NYC")
    Forecast(city='NYC', tempC=21)

    >>> # In tests, inject a transport; this is never cached
    >>> weather = contract_proxy.generate(Weather, stub_transport)
"""

import logging
import threading
from collections.abc import Callable
from typing import TypeVar, cast

from .config import ProxyConfig
from .exceptions import ConfigurationError
from .observability.metrics import ProxyMetrics, get_prometheus_proxy_metrics
from .protocols.serializer import SerializerProtocol
from .protocols.transport import TransportProtocol
from .synthesis.base import ServiceProxyBase
from .synthesis.synthesizer import ProxySynthesizer
from .types.contract import ServiceContract

logger = logging.getLogger(__name__)

T = TypeVar("T")

TransportFactory = Callable[[ServiceContract], TransportProtocol]


def http_transport_factory(config: ProxyConfig) -> TransportFactory:
    """Default transport factory: one httpx transport per service."""

    def factory(contract: ServiceContract) -> TransportProtocol:
        from .transports.httpx import HttpxTransport

        return HttpxTransport.for_service(
            contract.service_name, timeout=config.request_timeout
        )

    return factory


class ProxyRegistry:
    """
    Process-wide cache of proxy realizations.

    Thread Safety:
        Generation runs at most once per contract class, even when many
        threads ask for the same uninitialized contract at once. Lookups of
        already generated contracts do not take the lock.
    """

    def __init__(
        self,
        config: ProxyConfig | None = None,
        transport_factory: TransportFactory | None = None,
        serializer: SerializerProtocol | None = None,
        metrics: ProxyMetrics | None = None,
    ) -> None:
        self.config = config or ProxyConfig()
        self.metrics = metrics or ProxyMetrics(
            prometheus=(
                get_prometheus_proxy_metrics() if self.config.metrics_enabled else None
            )
        )
        self._transport_factory = transport_factory or http_transport_factory(
            self.config
        )
        self._serializer = serializer
        self._synthesizer = ProxySynthesizer(self.config, self.metrics)

        self._lock = threading.Lock()
        self._classes: dict[type, type[ServiceProxyBase]] = {}
        self._instances: dict[type, ServiceProxyBase] = {}

    @property
    def synthesizer(self) -> ProxySynthesizer:
        return self._synthesizer

    def _proxy_class(self, contract_type: type) -> type[ServiceProxyBase]:
        proxy_class = self._classes.get(contract_type)
        if proxy_class is None:
            with self._lock:
                proxy_class = self._classes.get(contract_type)
                if proxy_class is None:
                    proxy_class = self._synthesizer.generate(contract_type)
                    self._classes[contract_type] = proxy_class
        return proxy_class

    def describe(self, contract_type: type) -> ServiceContract:
        """Return the cached ServiceContract of a contract class."""
        return self._proxy_class(contract_type).__contract__

    def get_default(self, contract_type: type[T]) -> T:
        """
        Return the shared instance of a contract, bound to the default transport.

        Raises:
            ContractError: If the contract is malformed
            UnsupportedFeatureError: If the contract is generic
            GenerationError: If synthesis fails unexpectedly
        """
        instance = self._instances.get(contract_type)
        if instance is None:
            proxy_class = self._proxy_class(contract_type)
            with self._lock:
                instance = self._instances.get(contract_type)
                if instance is None:
                    transport = self._transport_factory(proxy_class.__contract__)
                    instance = proxy_class(
                        transport, serializer=self._serializer, metrics=self.metrics
                    )
                    self._instances[contract_type] = instance
                    logger.debug(
                        f"Registered default instance for {proxy_class.__contract__.full_name}"
                    )
        return cast(T, instance)

    def generate(
        self,
        contract_type: type[T],
        transport: TransportProtocol,
        serializer: SerializerProtocol | None = None,
    ) -> T:
        """
        Create a fresh, uncached instance bound to ``transport``.

        Usually called by tests. The proxy class is still generated only once.
        """
        proxy_class = self._proxy_class(contract_type)
        instance = proxy_class(
            transport,
            serializer=serializer or self._serializer,
            metrics=self.metrics,
        )
        return cast(T, instance)

    def is_generated(self, contract_type: type) -> bool:
        return contract_type in self._classes

    def clear(self) -> None:
        """Forget every cached realization (mainly for testing)."""
        with self._lock:
            self._classes.clear()
            self._instances.clear()


# Module-level default registry
_default_registry: ProxyRegistry | None = None
_default_config: ProxyConfig | None = None
_registry_lock = threading.Lock()


def configure(config: ProxyConfig) -> None:
    """
    Install the process-wide configuration.

    Must be called at most once, before the default registry is first used.

    Raises:
        ConfigurationError: If configuration was already installed or the
            default registry already exists
    """
    global _default_config

    with _registry_lock:
        if _default_config is not None or _default_registry is not None:
            raise ConfigurationError(
                "contract_proxy is already configured; configure() must be "
                "called once, before the first proxy is requested"
            )
        _default_config = config


def get_registry() -> ProxyRegistry:
    """Get or create the default registry (double-checked locking)."""
    global _default_registry

    if _default_registry is None:
        with _registry_lock:
            if _default_registry is None:
                _default_registry = ProxyRegistry(_default_config)
    return _default_registry


def get_default(contract_type: type[T]) -> T:
    """Shared proxy instance from the default registry."""
    return get_registry().get_default(contract_type)


def generate(
    contract_type: type[T],
    transport: TransportProtocol,
    serializer: SerializerProtocol | None = None,
) -> T:
    """Fresh proxy instance bound to ``transport``, from the default registry."""
    return get_registry().generate(contract_type, transport, serializer)


def reset_default_registry() -> None:
    """Drop the default registry and configuration (mainly for testing)."""
    global _default_registry, _default_config

    with _registry_lock:
        _default_registry = None
        _default_config = None


__all__ = [
    "ProxyRegistry",
    "TransportFactory",
    "configure",
    "generate",
    "get_default",
    "get_registry",
    "http_transport_factory",
    "reset_default_registry",
]
