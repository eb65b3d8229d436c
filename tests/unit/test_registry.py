"""
Unit tests for the proxy registry and the module-level helpers.
"""

import threading
from typing import Annotated, Protocol, TypeVar

import pytest

import contract_proxy
from contract_proxy.config import ProxyConfig
from contract_proxy.exceptions import (
    ConfigurationError,
    ContractError,
    UnsupportedFeatureError,
)
from contract_proxy.markers import Body, PathVariable, get, post, service
from contract_proxy.observability.metrics import ProxyMetrics
from contract_proxy.registry import (
    ProxyRegistry,
    configure,
    generate,
    get_default,
    get_registry,
    http_transport_factory,
)

T = TypeVar("T")


@service("users")
class Users(Protocol):
    @get("/users/{id}")
    def get_user(self, user_id: Annotated[int, PathVariable("id")]) -> dict: ...


@service("uploads")
class Uploads(Protocol):
    @post("/upload")
    def upload(
        self, first: Annotated[bytes, Body()], second: Annotated[bytes, Body()]
    ) -> None: ...


@service("store")
class Store(Protocol[T]):
    @get("/items")
    def items(self) -> list: ...


@pytest.fixture
def metrics():
    return ProxyMetrics()


@pytest.fixture
def registry(stub_transport, metrics):
    return ProxyRegistry(
        ProxyConfig(metrics_enabled=False),
        transport_factory=lambda contract: stub_transport,
        metrics=metrics,
    )


class TestProxyRegistry:
    def test_get_default_returns_the_same_instance(self, registry):
        first = registry.get_default(Users)
        second = registry.get_default(Users)

        assert first is second
        assert registry.is_generated(Users)

    def test_default_instance_uses_factory_transport(self, registry, stub_transport):
        stub_transport.respond("GET", "/users/7", json_body={"id": 7})

        users = registry.get_default(Users)

        assert users.transport is stub_transport
        assert users.get_user(7) == {"id": 7}

    def test_factory_receives_the_contract(self, stub_transport):
        seen = []

        def factory(contract):
            seen.append(contract)
            return stub_transport

        registry = ProxyRegistry(
            ProxyConfig(metrics_enabled=False), transport_factory=factory
        )
        registry.get_default(Users)
        registry.get_default(Users)

        assert [c.service_name for c in seen] == ["users"]

    def test_generate_returns_fresh_instances(self, registry, stub_transport, metrics):
        default = registry.get_default(Users)
        first = registry.generate(Users, stub_transport)
        second = registry.generate(Users, stub_transport)

        assert first is not second
        assert first is not default
        assert type(first) is type(second) is type(default)
        assert metrics.generations == 1

    def test_generate_does_not_populate_default(self, registry, stub_transport):
        fresh = registry.generate(Users, stub_transport)

        assert registry.get_default(Users) is not fresh

    def test_describe(self, registry):
        contract = registry.describe(Users)

        assert contract.service_name == "users"
        assert contract.method("get_user").path == "/users/{id}"

    def test_clear(self, registry, metrics):
        first = registry.get_default(Users)
        registry.clear()

        assert not registry.is_generated(Users)
        assert registry.get_default(Users) is not first
        assert metrics.generations == 2

    def test_invocations_are_recorded(self, registry, stub_transport, metrics):
        stub_transport.respond("GET", "/users/1", json_body={"id": 1})

        registry.get_default(Users).get_user(1)

        assert metrics.invocations == 1
        assert metrics.invocation_failures == 0

    def test_concurrent_first_use_generates_once(self, registry, metrics):
        workers = 16
        barrier = threading.Barrier(workers)
        results = []
        errors = []

        def worker():
            try:
                barrier.wait()
                results.append(registry.get_default(Users))
            except Exception as e:  # pragma: no cover
                errors.append(e)

        threads = [threading.Thread(target=worker) for _ in range(workers)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        assert len(results) == workers
        assert all(result is results[0] for result in results)
        assert metrics.generations == 1


class TestRegistryFailures:
    def test_malformed_contract_caches_nothing(self, registry, metrics):
        with pytest.raises(ContractError, match="more than one Body"):
            registry.get_default(Uploads)

        assert not registry.is_generated(Uploads)
        assert metrics.generation_failures == 1

    def test_failure_is_repeated(self, registry, metrics):
        for _ in range(2):
            with pytest.raises(ContractError):
                registry.get_default(Uploads)

        assert metrics.generation_failures == 2

    def test_generic_contract(self, registry, stub_transport):
        with pytest.raises(UnsupportedFeatureError):
            registry.generate(Store, stub_transport)

        assert not registry.is_generated(Store)


class TestHttpTransportFactory:
    def test_builds_httpx_transport(self, monkeypatch):
        monkeypatch.setenv("USERS_URL", "http://users.internal:8080")
        factory = http_transport_factory(ProxyConfig(request_timeout=5.0))

        registry = ProxyRegistry(ProxyConfig(metrics_enabled=False))
        transport = factory(registry.describe(Users))

        assert type(transport).__name__ == "HttpxTransport"
        assert transport.base_url == "http://users.internal:8080"
        assert transport.timeout == 5.0


class TestModuleLevelHelpers:
    def test_get_registry_is_a_singleton(self):
        assert get_registry() is get_registry()

    def test_configure_applies_to_default_registry(self):
        config = ProxyConfig(sealed=False, metrics_enabled=False)

        configure(config)

        assert get_registry().config is config

    def test_configure_twice(self):
        configure(ProxyConfig(metrics_enabled=False))

        with pytest.raises(ConfigurationError, match="already configured"):
            configure(ProxyConfig(metrics_enabled=False))

    def test_configure_after_first_use(self):
        get_registry()

        with pytest.raises(ConfigurationError):
            configure(ProxyConfig(metrics_enabled=False))

    def test_generate_helper(self, stub_transport):
        configure(ProxyConfig(metrics_enabled=False))
        stub_transport.respond("GET", "/users/3", json_body={"id": 3})

        users = generate(Users, stub_transport)

        assert users.get_user(3) == {"id": 3}
        assert get_registry().is_generated(Users)

    def test_get_default_helper(self, monkeypatch):
        configure(ProxyConfig(metrics_enabled=False))
        monkeypatch.setenv("USERS_URL", "http://localhost:9000")

        users = get_default(Users)

        assert users is get_default(Users)
        assert users.transport.base_url == "http://localhost:9000"

    def test_package_exports(self, stub_transport):
        configure(ProxyConfig(metrics_enabled=False))

        users = contract_proxy.generate(Users, stub_transport)

        assert isinstance(users, contract_proxy.ServiceProxyBase)
        assert contract_proxy.get_registry().is_generated(Users)
