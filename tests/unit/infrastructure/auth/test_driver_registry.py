"""Unit tests for InMemoryDriverRegistry."""

from unittest.mock import MagicMock

import pytest

from ally.domain.auth.port.driver import AuthDriver
from ally.domain.shared.error import ConfigurationError
from ally.infrastructure.auth.driver_registry import InMemoryDriverRegistry


def _make_driver() -> MagicMock:
    return MagicMock(spec=AuthDriver)


class TestInMemoryDriverRegistry:
    def test_unknown_provider_returns_none(self):
        registry = InMemoryDriverRegistry()

        assert registry.get("spotify") is None
        assert registry.is_available("spotify") is False

    def test_driver_is_built_lazily_and_cached(self):
        driver = _make_driver()
        factory = MagicMock(return_value=driver)
        registry = InMemoryDriverRegistry()

        registry.register("spotify", factory)
        factory.assert_not_called()

        assert registry.get("spotify") is driver
        assert registry.get("spotify") is driver
        factory.assert_called_once_with()

    def test_available_drivers(self):
        registry = InMemoryDriverRegistry({"spotify": _make_driver})
        registry.register("github", _make_driver)

        assert registry.available_drivers() == ["spotify", "github"]
        assert registry.is_available("github")

    def test_reregister_replaces_cached_driver(self):
        first, second = _make_driver(), _make_driver()
        registry = InMemoryDriverRegistry({"spotify": lambda: first})
        assert registry.get("spotify") is first

        registry.register("spotify", lambda: second)

        assert registry.get("spotify") is second

    def test_driver_raises_for_unknown_provider(self):
        registry = InMemoryDriverRegistry({"spotify": _make_driver})

        with pytest.raises(ConfigurationError, match="Available: spotify"):
            registry.driver("github")

    def test_factory_errors_propagate(self):
        def broken() -> AuthDriver:
            raise ConfigurationError("Missing config for spotify driver: client_secret")

        registry = InMemoryDriverRegistry({"spotify": broken})

        with pytest.raises(ConfigurationError, match="client_secret"):
            registry.driver("spotify")
