# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Protocol definitions for the proxy's external collaborators.

Available protocols:
- TransportProtocol: Interface for the component that issues HTTP requests
- SerializerProtocol: Interface for body and header value conversion
"""

from .serializer import SerializerProtocol
from .transport import TransportProtocol

__all__ = [
    "SerializerProtocol",
    "TransportProtocol",
]
