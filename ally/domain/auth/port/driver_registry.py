"""Driver registry port for the auth domain."""

from abc import abstractmethod
from typing import Protocol

from ally.domain.auth.port.driver import AuthDriver
from ally.domain.shared.error import ConfigurationError
from ally.domain.shared.port import Port


class DriverRegistry(Port, Protocol):
    """Registry of available auth drivers.

    Allows looking up drivers by provider name and checking
    which providers are configured/available.
    """

    @abstractmethod
    def get(self, provider: str) -> AuthDriver | None:
        """Get a driver by provider name.

        Args:
            provider: The provider name (e.g., "spotify")

        Returns:
            The driver if available, None otherwise
        """
        ...

    @abstractmethod
    def available_drivers(self) -> list[str]:
        """Get list of available provider names."""
        ...

    def is_available(self, provider: str) -> bool:
        """Check if a provider is available."""
        return provider in self.available_drivers()

    def driver(self, provider: str) -> AuthDriver:
        """Get a driver by provider name, failing if it is not registered.

        Raises:
            ConfigurationError: If no driver is registered under the name
        """
        found = self.get(provider)
        if found is None:
            available = ", ".join(self.available_drivers()) or "none"
            raise ConfigurationError(
                f"Unknown auth driver: {provider}. Available: {available}"
            )
        return found
