"""DI provider for auth infrastructure."""

import logging
from collections.abc import AsyncIterator

import httpx
from dishka import provide

from ally.config import Config, HttpConfig
from ally.domain.auth.port.driver_registry import DriverRegistry
from ally.infrastructure.auth.driver_registry import InMemoryDriverRegistry
from ally.infrastructure.auth.spotify import SpotifyDriver
from ally.util.di.base import Provider
from ally.util.di.scope import Scope

logger = logging.getLogger(__name__)


def http_timeout(config: HttpConfig) -> httpx.Timeout:
    return httpx.Timeout(
        connect=config.connect_timeout,
        read=config.read_timeout,
        write=config.write_timeout,
        pool=config.pool_timeout,
    )


def register_builtin_drivers(
    registry: InMemoryDriverRegistry,
    config: Config,
    http_client: httpx.AsyncClient,
) -> None:
    """Register a factory for every built-in driver that has credentials set."""
    spotify = config.services.spotify
    if spotify.client_id:
        registry.register("spotify", lambda: SpotifyDriver(spotify, http_client))
    else:
        logger.debug("Spotify driver not registered: no client_id configured")


class AuthInfraProvider(Provider):
    """DI provider for auth infrastructure adapters."""

    @provide(scope=Scope.APP)
    async def get_auth_http_client(self, config: Config) -> AsyncIterator[httpx.AsyncClient]:
        """Shared HTTP client for provider calls (connection pooling)."""
        async with httpx.AsyncClient(timeout=http_timeout(config.http)) as client:
            yield client

    @provide(scope=Scope.APP)
    def get_driver_registry(
        self, config: Config, http_client: httpx.AsyncClient
    ) -> DriverRegistry:
        """Provide DriverRegistry with configured auth drivers."""
        registry = InMemoryDriverRegistry()
        register_builtin_drivers(registry, config, http_client)
        return registry
