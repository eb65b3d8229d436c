# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Exception classes for the contract proxy library.

This module defines the exception hierarchy used throughout the library.
All generation-time exceptions inherit from ContractProxyError, making it easy
to catch every error raised while turning a contract into a proxy with a
single except clause.

Invocation-time failures (network errors, non-success statuses, decoding
failures) are raised by the transport and serializer collaborators and are
never wrapped in these types.
"""


class ContractProxyError(Exception):
    """Base exception for all contract proxy errors.

    Attributes:
        contract_name: Fully qualified name of the contract being generated.
            May be None if the contract context is not available.
        method_name: Name of the contract method at fault.
            May be None if the error is not specific to one method.

    Example:
        try:
            weather = contract_proxy.get_default(Weather)
        except ContractProxyError as e:
            logger.error(f"Cannot build proxy for {e.contract_name}: {e}")
    """

    def __init__(
        self,
        message: str = "",
        contract_name: str | None = None,
        method_name: str | None = None,
    ):
        super().__init__(message)
        self.contract_name = contract_name
        self.method_name = method_name


class ContractError(ContractProxyError):
    """Raised when a contract declaration is malformed.

    Common causes include:
    - More than one Body parameter on a method
    - A return annotation carrying both Body and ResponseHeader markers
    - Path placeholders without a matching PathVariable (or the reverse)
    - A parameter with no role marker, or with several
    - A contract class that is private or not interface-like

    Raised eagerly while the proxy is generated, never while a call is made.
    """

    pass


class UnsupportedFeatureError(ContractProxyError):
    """Raised when a contract uses a feature the generator does not support.

    Currently this means parametric contracts, i.e. classes that still carry
    unbound type parameters such as ``class Repo(Protocol[T])``.
    """

    pass


class GenerationError(ContractProxyError):
    """Raised when proxy synthesis fails for reasons unrelated to the contract.

    This wraps unexpected failures while building the proxy class so that a
    half-built realization is never registered or returned.
    """

    pass


class ConfigurationError(ContractProxyError):
    """Raised when configuration is invalid or installed too late.

    Example:
        contract_proxy.configure(ProxyConfig(emit_plans=True))
        contract_proxy.configure(ProxyConfig())  # raises ConfigurationError
    """

    pass


class PersistenceWarning(UserWarning):
    """Emitted when a diagnostic plan dump could not be written.

    This is a warning, never an error: generation always continues.
    """

    pass


__all__ = [
    "ConfigurationError",
    "ContractError",
    "ContractProxyError",
    "GenerationError",
    "PersistenceWarning",
    "UnsupportedFeatureError",
]
