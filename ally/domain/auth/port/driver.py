"""Auth driver port for the auth domain."""

from abc import abstractmethod
from collections.abc import Mapping
from typing import Protocol

from ally.domain.auth.model.value import NormalizedUser
from ally.domain.shared.port import Port


class AuthDriver(Port, Protocol):
    """Port for a single social login provider.

    Implementations are adapters in infrastructure/ (e.g., SpotifyDriver).
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Unique identifier for this provider (e.g., 'spotify')."""
        ...

    @abstractmethod
    def get_redirect_url(self, state: str | None = None) -> str:
        """Generate URL to redirect user for authentication.

        Args:
            state: CSRF protection token (random, stored in session)
        """
        ...

    @abstractmethod
    async def get_user(
        self,
        query_params: Mapping[str, str],
        original_state: str | None = None,
    ) -> NormalizedUser:
        """Complete the redirect callback and return the authenticated user.

        Args:
            query_params: Query parameters the provider redirected back with
            original_state: State issued before the redirect

        Raises:
            RedirectDeniedError: If the callback carries no authorization code
            InvalidStateError: If the returned state does not match
            TokenExchangeError: If the provider request fails
        """
        ...

    @abstractmethod
    async def get_user_by_token(self, access_token: str) -> NormalizedUser:
        """Return the user owning an access token the host already holds."""
        ...
