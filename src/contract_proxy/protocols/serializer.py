# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Protocol for body serialization."""

from typing import Any, Protocol, runtime_checkable

from ..types.contract import BodyFormat
from ..types.http import RequestContent


@runtime_checkable
class SerializerProtocol(Protocol):
    """
    Protocol for turning values into request bodies and back.

    Implementations decide the content format. The returned content carries
    its own Content-Type header.
    """

    def encode(
        self, value: Any, fmt: BodyFormat, value_type: Any = None
    ) -> RequestContent:
        """Serialize a body parameter declared as ``value_type``."""
        ...

    def decode(self, content: bytes, target_type: Any, fmt: BodyFormat) -> Any:
        """Deserialize a response body into ``target_type``."""
        ...

    def convert(self, text: str, target_type: Any) -> Any:
        """Convert a header string into ``target_type``."""
        ...
