# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Configuration for proxy synthesis.

A ProxyConfig is created once at process startup and passed into the
synthesizer and registry. It is frozen: nothing mutates it afterwards.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ProxyConfig:
    """
    Configuration for the proxy synthesizer and registry.
    """

    # === Diagnostics ===

    emit_plans: bool = False
    """Write a text dump of every synthesized contract's plan."""

    plan_directory: str = "./contract-proxy"
    """Directory receiving plan dumps when emit_plans is enabled."""

    # === Generated Classes ===

    root_namespace: str = "contract_proxy.generated"
    """Value used as ``__module__`` for generated proxy classes."""

    sealed: bool = True
    """Generated proxy classes refuse to be subclassed."""

    # === Default Transport ===

    request_timeout: float = 30.0
    """Timeout in seconds for the default HTTP transport."""

    # === Metrics and Monitoring ===

    metrics_enabled: bool = True
    """Export Prometheus metrics when prometheus_client is installed."""

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.request_timeout <= 0:
            raise ValueError("request_timeout must be positive")
        if not self.root_namespace:
            raise ValueError("root_namespace must not be empty")
        if self.emit_plans and not self.plan_directory:
            raise ValueError("plan_directory is required when emit_plans is enabled")


__all__ = ["ProxyConfig"]
