"""Driver registry implementation."""

import logging
from collections.abc import Callable

from ally.domain.auth.port.driver import AuthDriver
from ally.domain.auth.port.driver_registry import DriverRegistry

logger = logging.getLogger(__name__)

DriverFactory = Callable[[], AuthDriver]


class InMemoryDriverRegistry(DriverRegistry):
    """In-memory driver registry.

    Stores a mapping of provider names to driver factories. Factories are
    registered at application startup; each driver is built on first lookup
    and reused afterwards.
    """

    def __init__(self, factories: dict[str, DriverFactory] | None = None) -> None:
        """Initialize registry with optional initial factories.

        Args:
            factories: Optional dict mapping provider names to factories
        """
        self._factories: dict[str, DriverFactory] = dict(factories or {})
        self._drivers: dict[str, AuthDriver] = {}

    def get(self, provider: str) -> AuthDriver | None:
        """Get a driver by provider name, building it on first use."""
        driver = self._drivers.get(provider)
        if driver is not None:
            return driver

        factory = self._factories.get(provider)
        if factory is None:
            return None

        driver = factory()
        self._drivers[provider] = driver
        return driver

    def available_drivers(self) -> list[str]:
        """Get list of available provider names."""
        return list(self._factories.keys())

    def register(self, name: str, factory: DriverFactory) -> None:
        """Register a driver factory, replacing any previous one.

        Args:
            name: The provider name
            factory: Zero-argument callable returning the driver
        """
        if name in self._factories:
            logger.info("Replacing auth driver registration: %s", name)
        self._factories[name] = factory
        self._drivers.pop(name, None)
