"""Spotify auth driver."""

import json
import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

import httpx
import logfire

from ally.config import DriverConfig
from ally.domain.auth.model.value import AccessTokenResponse, NormalizedUser
from ally.domain.auth.port.driver import AuthDriver
from ally.domain.auth.port.oauth2 import OAuth2Scheme, ProviderRequestError
from ally.domain.shared.error import (
    ConfigurationError,
    InvalidStateError,
    RedirectDeniedError,
    TokenExchangeError,
)
from ally.infrastructure.auth.oauth2 import HttpOAuth2Scheme, join_url

logger = logging.getLogger(__name__)

REDIRECT_ERROR_FALLBACK = "Oauth failed during redirect"


class SpotifyDriver(AuthDriver):
    """AuthDriver implementation for Spotify OAuth2.

    Holds only immutable configuration, so one instance can serve
    concurrent logins.
    """

    supports_state = True
    scope_separator = " "

    base_url = "https://accounts.spotify.com"
    api_url = "https://api.spotify.com/v1"
    authorize_path = "authorize"
    access_token_path = "api/token"
    profile_path = "me"

    default_scope: tuple[str, ...] = ("user-read-private", "user-read-email")
    default_fields: tuple[str, ...] = ("name", "email", "gender", "verified", "link")

    def __init__(
        self,
        config: DriverConfig,
        http_client: httpx.AsyncClient,
        scheme: OAuth2Scheme | None = None,
    ) -> None:
        missing = [
            key
            for key in ("client_id", "client_secret", "redirect_uri")
            if not getattr(config, key)
        ]
        if missing:
            raise ConfigurationError(
                f"Missing config for {self.provider_name} driver: {', '.join(missing)}"
            )

        logger.debug(
            "Configured %s driver: client_id=%s, redirect_uri=%s",
            self.provider_name,
            config.client_id,
            config.redirect_uri,
        )

        self._http = http_client
        self._redirect_uri = config.redirect_uri
        self._redirect_uri_options = MappingProxyType(
            {"response_type": "code", **config.options}
        )
        self._scope = config.scope or self.default_scope
        self._fields = config.fields or self.default_fields
        self._scheme = scheme or HttpOAuth2Scheme(
            client_id=config.client_id,
            client_secret=config.client_secret,
            base_url=self.base_url,
            authorize_path=self.authorize_path,
            access_token_path=self.access_token_path,
            http_client=http_client,
        )

    @property
    def provider_name(self) -> str:
        return "spotify"

    @property
    def scope(self) -> tuple[str, ...]:
        return self._scope

    @property
    def fields(self) -> tuple[str, ...]:
        """Profile fields requested by callers; the driver itself does not read them."""
        return self._fields

    @property
    def redirect_uri_options(self) -> Mapping[str, str | bool]:
        return self._redirect_uri_options

    def get_redirect_url(self, state: str | None = None) -> str:
        """Generate Spotify authorization URL."""
        options = dict(self._redirect_uri_options)
        if state:
            options["state"] = state
        return self._scheme.build_authorize_url(
            self._redirect_uri,
            self.scope_separator.join(self._scope),
            options,
        )

    def parse_redirect_error(self, query_params: Mapping[str, str]) -> str:
        """Human readable reason for a redirect that carries no code."""
        return query_params.get("error_message") or REDIRECT_ERROR_FALLBACK

    def parse_provider_error(self, error: ProviderRequestError) -> TokenExchangeError:
        """Convert a raw provider failure, reading the nested error.message."""
        parsed: Any = None
        if isinstance(error.data, (str, bytes)):
            try:
                parsed = json.loads(error.data)
            except ValueError:
                parsed = None

        message = None
        if isinstance(parsed, dict) and isinstance(parsed.get("error"), dict):
            message = parsed["error"].get("message")

        return TokenExchangeError(
            str(message) if message else str(error),
            status_code=error.status_code,
            error_detail=parsed,
        )

    async def get_user(
        self,
        query_params: Mapping[str, str],
        original_state: str | None = None,
    ) -> NormalizedUser:
        with logfire.span("spotify.get_user"):
            code = query_params.get("code")
            state = query_params.get("state")

            if not code:
                message = self.parse_redirect_error(query_params)
                logger.warning("Spotify redirect carried no code: %s", message)
                raise RedirectDeniedError(message)

            if state and state != original_state:
                logger.warning("Spotify callback state mismatch")
                raise InvalidStateError()

            try:
                token = await self._scheme.exchange_code_for_token(
                    code,
                    self._redirect_uri,
                    {"grant_type": "authorization_code"},
                )
            except ProviderRequestError as e:
                raise self.parse_provider_error(e) from e

            if not token.access_token:
                raise TokenExchangeError("Spotify token response is missing access_token")

            profile = await self._get_user_profile(token.access_token)
            return self._build_user(profile, token)

    async def get_user_by_token(self, access_token: str) -> NormalizedUser:
        with logfire.span("spotify.get_user_by_token"):
            if not access_token:
                raise TokenExchangeError("An access token is required")

            profile = await self._get_user_profile(access_token)
            return self._build_user(
                profile, AccessTokenResponse(access_token=access_token, refresh_token=None)
            )

    async def _get_user_profile(self, access_token: str) -> dict[str, Any]:
        """Fetch the raw profile of the token owner."""
        profile_url = join_url(self.api_url, self.profile_path)

        try:
            response = await self._http.get(
                profile_url,
                headers={
                    "Accept": "application/json",
                    "Authorization": f"Bearer {access_token}",
                },
            )
        except httpx.RequestError as e:
            logger.warning("Spotify profile request failed: %s", e)
            raise self.parse_provider_error(
                ProviderRequestError(f"Failed to connect to {profile_url}: {e}")
            ) from e

        if not 200 <= response.status_code < 300:
            logger.warning("Spotify profile fetch failed: status=%d", response.status_code)
            raise self.parse_provider_error(
                ProviderRequestError(
                    f"Profile request failed with status {response.status_code}",
                    status_code=response.status_code,
                    data=response.text,
                )
            )

        try:
            profile = response.json()
        except ValueError as e:
            raise TokenExchangeError(
                "Spotify profile response is not valid JSON",
                status_code=response.status_code,
            ) from e

        if not isinstance(profile, dict):
            raise TokenExchangeError(
                "Spotify profile response is not a JSON object",
                status_code=response.status_code,
            )
        return profile

    def _build_user(
        self, profile: dict[str, Any], token: AccessTokenResponse
    ) -> NormalizedUser:
        user_id = profile.get("id")
        if user_id is None:
            raise TokenExchangeError("Spotify profile is missing id", error_detail=profile)

        # Users without a profile picture get an empty images list
        images = profile.get("images")
        first_image = images[0] if isinstance(images, list) and images else None
        avatar_url = first_image.get("url") if isinstance(first_image, dict) else None

        return NormalizedUser(
            id=str(user_id),
            name=profile.get("display_name"),
            email=profile.get("email"),
            nickname=profile.get("name"),
            country=profile.get("country"),
            avatar_url=avatar_url,
            access_token=token.access_token,
            refresh_token=token.refresh_token,
            expires=token.expires,
            original=profile,
        )
