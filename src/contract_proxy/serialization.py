# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
JSON serialization backed by pydantic.

``TypeAdapter`` handles pydantic models, dataclasses, TypedDicts, builtin
containers and primitives alike, so contracts can use whichever model style
they prefer for bodies and return values.
"""

from functools import lru_cache
from typing import Any

from pydantic import TypeAdapter

from .types.contract import BodyFormat
from .types.http import RequestContent

JSON_CONTENT_TYPE = "application/json"
OCTET_STREAM_CONTENT_TYPE = "application/octet-stream"
TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"


@lru_cache(maxsize=256)
def _adapter(target_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(target_type)


def get_type_adapter(target_type: Any) -> TypeAdapter[Any]:
    """Return a cached TypeAdapter, building an uncached one for unhashable types."""
    try:
        return _adapter(target_type)
    except TypeError:
        return TypeAdapter(target_type)


class JsonSerializer:
    """
    Default serializer: JSON bodies, raw passthrough, lax header conversion.

    Errors raised by pydantic (``ValidationError``, ``PydanticSerializationError``)
    propagate to the caller as-is.
    """

    def encode(
        self,
        value: Any,
        fmt: BodyFormat = BodyFormat.JSON,
        value_type: Any = None,
    ) -> RequestContent:
        if fmt is BodyFormat.RAW:
            if isinstance(value, (bytes, bytearray, memoryview)):
                return RequestContent(
                    data=bytes(value),
                    headers={"Content-Type": OCTET_STREAM_CONTENT_TYPE},
                )
            if isinstance(value, str):
                return RequestContent(
                    data=value.encode("utf-8"),
                    headers={"Content-Type": TEXT_CONTENT_TYPE},
                )
            raise TypeError(
                f"Raw bodies must be bytes or str, got {type(value).__name__}"
            )

        if value_type is None or value_type is Any:
            data = get_type_adapter(type(value)).dump_json(value)
        else:
            # validate first so a dict passed for a model goes out as that model
            adapter = get_type_adapter(value_type)
            data = adapter.dump_json(adapter.validate_python(value))
        return RequestContent(data=data, headers={"Content-Type": JSON_CONTENT_TYPE})

    def decode(
        self,
        content: bytes,
        target_type: Any,
        fmt: BodyFormat = BodyFormat.JSON,
    ) -> Any:
        if fmt is BodyFormat.RAW:
            if target_type is str:
                return content.decode("utf-8")
            return content

        if not content:
            return None
        return get_type_adapter(target_type).validate_json(content)

    def convert(self, text: str, target_type: Any) -> Any:
        if target_type is str or target_type is Any:
            return text
        return get_type_adapter(target_type).validate_python(text)


__all__ = [
    "JSON_CONTENT_TYPE",
    "OCTET_STREAM_CONTENT_TYPE",
    "TEXT_CONTENT_TYPE",
    "JsonSerializer",
    "get_type_adapter",
]
