# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Observability for proxy generation and invocation.

Exports:
    ProxyMetrics: In-process counters, always available.
    PrometheusProxyMetrics: Prometheus counters and histogram (optional).
    PROMETHEUS_AVAILABLE: Whether prometheus_client is available.
    get_prometheus_proxy_metrics: Thread-safe singleton accessor.
    reset_prometheus_proxy_metrics: Reset the singleton (testing).
"""

from .metrics import (
    PROMETHEUS_AVAILABLE,
    PrometheusProxyMetrics,
    ProxyMetrics,
    get_prometheus_proxy_metrics,
    reset_prometheus_proxy_metrics,
)

__all__ = [
    "PROMETHEUS_AVAILABLE",
    "PrometheusProxyMetrics",
    "ProxyMetrics",
    "get_prometheus_proxy_metrics",
    "reset_prometheus_proxy_metrics",
]
