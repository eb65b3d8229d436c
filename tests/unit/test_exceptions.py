"""Unit tests for the exceptions module.

Tests all exception classes defined in contract_proxy.exceptions.
"""

import warnings

import pytest

from contract_proxy.exceptions import (
    ConfigurationError,
    ContractError,
    ContractProxyError,
    GenerationError,
    PersistenceWarning,
    UnsupportedFeatureError,
)


class TestContractProxyError:
    """Tests for the base ContractProxyError exception."""

    def test_can_be_caught_as_exception(self):
        """ContractProxyError can be caught as a standard Exception."""
        with pytest.raises(Exception):  # noqa: B017
            raise ContractProxyError("test error")

    def test_message_preserved(self):
        """ContractProxyError preserves its message."""
        error = ContractProxyError("test message")
        assert str(error) == "test message"

    def test_can_be_raised_without_message(self):
        """ContractProxyError can be raised without a message."""
        error = ContractProxyError()
        assert str(error) == ""

    def test_context_defaults_to_none(self):
        error = ContractProxyError("boom")
        assert error.contract_name is None
        assert error.method_name is None

    def test_stores_context(self):
        error = ContractProxyError(
            "boom", contract_name="weather.Weather", method_name="get_forecast"
        )
        assert error.contract_name == "weather.Weather"
        assert error.method_name == "get_forecast"


@pytest.mark.parametrize(
    "error_class",
    [ContractError, UnsupportedFeatureError, GenerationError, ConfigurationError],
)
class TestSubclasses:
    def test_can_be_caught_as_contract_proxy_error(self, error_class):
        with pytest.raises(ContractProxyError):
            raise error_class("failure")

    def test_keeps_context(self, error_class):
        error = error_class("failure", contract_name="a.B", method_name="c")
        assert error.contract_name == "a.B"
        assert error.method_name == "c"


class TestPersistenceWarning:
    def test_is_user_warning(self):
        assert issubclass(PersistenceWarning, UserWarning)

    def test_is_not_an_error(self):
        assert not issubclass(PersistenceWarning, ContractProxyError)

    def test_can_be_captured(self):
        with pytest.warns(PersistenceWarning, match="disk full"):
            warnings.warn("disk full", PersistenceWarning, stacklevel=1)
