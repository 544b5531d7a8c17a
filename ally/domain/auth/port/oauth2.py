"""OAuth2 scheme port for the auth domain."""

from abc import abstractmethod
from collections.abc import Mapping
from typing import Protocol

from ally.domain.auth.model.value import AccessTokenResponse
from ally.domain.shared.port import Port


class ProviderRequestError(Exception):
    """Raw failure from a provider HTTP call.

    Raised by adapters and converted by drivers into TokenExchangeError;
    it never reaches the host application.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        data: str | bytes | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.data = data  # Response body, if a response was received


class OAuth2Scheme(Port, Protocol):
    """Generic OAuth2 authorization code mechanics.

    Drivers compose a scheme and supply only provider-specific endpoints,
    scopes and profile normalization.
    """

    @abstractmethod
    def build_authorize_url(
        self,
        redirect_uri: str,
        scope: str,
        options: Mapping[str, str | bool],
    ) -> str:
        """Build the URL the user is redirected to for authorization.

        Args:
            redirect_uri: Where the provider should redirect after auth
            scope: Scopes already joined with the provider's separator
            options: Extra query parameters (response_type, state, ...)

        Returns:
            Full authorization URL
        """
        ...

    @abstractmethod
    async def exchange_code_for_token(
        self,
        code: str,
        redirect_uri: str,
        params: Mapping[str, str],
    ) -> AccessTokenResponse:
        """Exchange an authorization code for tokens.

        Args:
            code: Authorization code from the provider callback
            redirect_uri: Must match the one used in the authorization URL
            params: Extra form parameters (e.g. grant_type)

        Raises:
            ProviderRequestError: If the token endpoint fails or is unreachable
        """
        ...
