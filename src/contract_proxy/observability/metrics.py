# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Metrics for proxy generation and invocation.

This module provides:
1. ProxyMetrics - Dataclass of in-process counters, always available
2. PrometheusProxyMetrics - Optional Prometheus metrics for observability

Usage:
    metrics = ProxyMetrics()

    # Record a generation
    metrics.record_generation("weather.Weather", duration_seconds=0.002)

    # Record a call
    metrics.record_invocation("weather.Weather", "get_forecast", succeeded=True)

    # Get stats for JSON serialization
    stats = metrics.get_stats()

Important Notes on Labels:
    Prometheus labels are contract and method names, which are bounded by the
    number of contracts in the program. Never label by call arguments.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

logger = logging.getLogger(__name__)

# Type declarations for optional prometheus_client imports
if TYPE_CHECKING:
    from prometheus_client import Counter as CounterType, Histogram as HistogramType
else:
    CounterType = object
    HistogramType = object

# Try to import prometheus_client for optional Prometheus metrics
try:
    from prometheus_client import Counter as _Counter, Histogram as _Histogram

    Counter: type[CounterType] | None = _Counter
    Histogram: type[HistogramType] | None = _Histogram
    PROMETHEUS_AVAILABLE = True
except ImportError:
    Counter = None
    Histogram = None
    PROMETHEUS_AVAILABLE = False


class PrometheusProxyMetrics:
    """
    Optional Prometheus metrics for proxy observability.

    Only instantiated if prometheus_client is available.

    Metrics:
        - contract_proxy_generations_total: Counter of generation attempts
        - contract_proxy_generation_duration_seconds: Histogram of generation time
        - contract_proxy_invocations_total: Counter of proxy method calls
    """

    def __init__(self, registry: Any | None = None) -> None:
        """
        Initialize Prometheus proxy metrics.

        Args:
            registry: Optional CollectorRegistry. If None, uses the default registry.

        Raises:
            ImportError: If prometheus_client is not available.
        """
        if not PROMETHEUS_AVAILABLE or Counter is None or Histogram is None:
            raise ImportError(
                "prometheus_client is not available. "
                "Install with: pip install prometheus-client"
            )

        self.generations = Counter(
            "contract_proxy_generations_total",
            "Proxy generation attempts",
            ["contract", "outcome"],  # Values: success, failure
            registry=registry,
        )

        self.generation_duration_seconds = Histogram(
            "contract_proxy_generation_duration_seconds",
            "Time spent generating a proxy class",
            ["contract"],
            buckets=[0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0],
            registry=registry,
        )

        self.invocations = Counter(
            "contract_proxy_invocations_total",
            "Proxy method invocations",
            ["contract", "method", "outcome"],  # Values: success, failure
            registry=registry,
        )

        logger.info("Prometheus proxy metrics initialized")

    def observe_generation(
        self, contract: str, succeeded: bool, duration_seconds: float
    ) -> None:
        outcome = "success" if succeeded else "failure"
        self.generations.labels(contract=contract, outcome=outcome).inc()
        if succeeded:
            self.generation_duration_seconds.labels(contract=contract).observe(
                duration_seconds
            )

    def observe_invocation(self, contract: str, method: str, succeeded: bool) -> None:
        outcome = "success" if succeeded else "failure"
        self.invocations.labels(contract=contract, method=method, outcome=outcome).inc()


@dataclass
class ProxyMetrics:
    """
    In-process counters for proxy generation and invocation.

    Thread Safety:
        All updates happen under a threading.Lock, since proxies are called
        from arbitrary threads and event loops.

    Example:
        >>> metrics = ProxyMetrics()
        >>> metrics.record_generation("weather.Weather", 0.001)
        >>> metrics.generations
        1
    """

    generations: int = 0
    generation_failures: int = 0
    invocations: int = 0
    invocation_failures: int = 0

    per_contract_generations: dict[str, int] = field(default_factory=dict, repr=False)
    prometheus: PrometheusProxyMetrics | None = field(default=None, repr=False)
    _lock: threading.Lock = field(
        default_factory=threading.Lock, repr=False, compare=False
    )

    def record_generation(self, contract: str, duration_seconds: float) -> None:
        with self._lock:
            self.generations += 1
            self.per_contract_generations[contract] = (
                self.per_contract_generations.get(contract, 0) + 1
            )
        if self.prometheus is not None:
            self.prometheus.observe_generation(contract, True, duration_seconds)

    def record_generation_failure(self, contract: str) -> None:
        with self._lock:
            self.generation_failures += 1
        if self.prometheus is not None:
            self.prometheus.observe_generation(contract, False, 0.0)

    def record_invocation(self, contract: str, method: str, succeeded: bool) -> None:
        with self._lock:
            self.invocations += 1
            if not succeeded:
                self.invocation_failures += 1
        if self.prometheus is not None:
            self.prometheus.observe_invocation(contract, method, succeeded)

    def get_stats(self) -> dict[str, Any]:
        """Get all metrics as a dictionary suitable for JSON serialization."""
        with self._lock:
            return {
                "generations": self.generations,
                "generation_failures": self.generation_failures,
                "invocations": self.invocations,
                "invocation_failures": self.invocation_failures,
                "per_contract_generations": dict(self.per_contract_generations),
            }

    def reset(self) -> None:
        """Reset all counters to zero."""
        with self._lock:
            self.generations = 0
            self.generation_failures = 0
            self.invocations = 0
            self.invocation_failures = 0
            self.per_contract_generations.clear()


# Module-level singleton for Prometheus metrics (optional)
_prometheus_proxy_metrics: PrometheusProxyMetrics | None = None
_prometheus_lock = threading.Lock()


def get_prometheus_proxy_metrics() -> PrometheusProxyMetrics | None:
    """
    Get or create the Prometheus proxy metrics singleton.

    Thread-safe singleton initialization using double-checked locking pattern
    to prevent race conditions that could cause prometheus_client duplicate
    registration errors.

    Returns:
        PrometheusProxyMetrics instance if prometheus_client is available,
        None otherwise.
    """
    global _prometheus_proxy_metrics

    if not PROMETHEUS_AVAILABLE:
        return None

    if _prometheus_proxy_metrics is None:
        with _prometheus_lock:
            if _prometheus_proxy_metrics is None:
                try:
                    _prometheus_proxy_metrics = PrometheusProxyMetrics()
                except Exception as e:
                    logger.warning(f"Failed to initialize Prometheus proxy metrics: {e}")
                    return None

    return _prometheus_proxy_metrics


def reset_prometheus_proxy_metrics() -> None:
    """Reset the Prometheus proxy metrics singleton (mainly for testing)."""
    global _prometheus_proxy_metrics
    _prometheus_proxy_metrics = None


__all__ = [
    "PROMETHEUS_AVAILABLE",
    "PrometheusProxyMetrics",
    "ProxyMetrics",
    "get_prometheus_proxy_metrics",
    "reset_prometheus_proxy_metrics",
]
