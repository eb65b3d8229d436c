# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Transport implementations.

Available transports:
- BaseTransport: Abstract base class with request construction and header conversion
- HttpxTransport: httpx-based transport (requires the http extra)

Note: HttpxTransport is lazily imported to avoid requiring httpx when a
custom transport is supplied.
"""

from typing import TYPE_CHECKING, cast

from contract_proxy.transports.base import BaseTransport, expand_path

if TYPE_CHECKING:
    from contract_proxy.transports.httpx import HttpxTransport

__all__ = [
    "BaseTransport",
    # httpx transport (lazy loaded)
    "HttpxTransport",
    "expand_path",
]


def __getattr__(name: str) -> type:
    """Lazy import for the optional httpx transport."""
    if name == "HttpxTransport":
        try:
            from contract_proxy.transports import httpx as httpx_module

            return cast(type, getattr(httpx_module, name))
        except ImportError as e:  # pragma: no cover
            raise ImportError(  # pragma: no cover
                f"'{name}' requires the 'http' extra. "
                "Install with: pip install contract-proxy[http]"
            ) from e
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
