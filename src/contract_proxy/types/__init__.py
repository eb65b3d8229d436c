# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Type definitions and constants."""

from .contract import (
    BodyFormat,
    ExtractionMode,
    MethodContract,
    ParameterBinding,
    ParameterRole,
    ResponseBinding,
    ServiceContract,
)
from .http import (
    CONTENT_HEADERS,
    HttpRequest,
    HttpResponse,
    QueryValue,
    RequestContent,
    find_header,
    is_content_header,
)

__all__ = [
    # Contract description
    "BodyFormat",
    "CONTENT_HEADERS",
    "ExtractionMode",
    # HTTP envelopes
    "HttpRequest",
    "HttpResponse",
    "MethodContract",
    "ParameterBinding",
    "ParameterRole",
    "QueryValue",
    "RequestContent",
    "ResponseBinding",
    "ServiceContract",
    "find_header",
    "is_content_header",
]
