"""httpx adapter for the OAuth2Scheme port."""

import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import parse_qsl, urlencode

import httpx

from ally.domain.auth.model.value import AccessTokenResponse
from ally.domain.auth.port.oauth2 import OAuth2Scheme, ProviderRequestError

logger = logging.getLogger(__name__)


def join_url(base: str, path: str) -> str:
    """Join a base URL and a relative path with exactly one slash."""
    return f"{base.rstrip('/')}/{path.lstrip('/')}"


def _query_value(value: str | bool) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class HttpOAuth2Scheme(OAuth2Scheme):
    """Authorization code mechanics over httpx.

    Both the authorize path and the token path are relative to base_url.
    """

    def __init__(
        self,
        *,
        client_id: str,
        client_secret: str,
        base_url: str,
        authorize_path: str,
        access_token_path: str,
        http_client: httpx.AsyncClient,
    ) -> None:
        self._client_id = client_id
        self._client_secret = client_secret
        self._authorize_url = join_url(base_url, authorize_path)
        self._access_token_url = join_url(base_url, access_token_path)
        self._http = http_client

    def build_authorize_url(
        self,
        redirect_uri: str,
        scope: str,
        options: Mapping[str, str | bool],
    ) -> str:
        params: dict[str, str | bool] = {"redirect_uri": redirect_uri, "scope": scope}
        params.update(options)
        # client_id always comes from our own credentials
        params["client_id"] = self._client_id
        query = urlencode({key: _query_value(value) for key, value in params.items()})
        return f"{self._authorize_url}?{query}"

    async def exchange_code_for_token(
        self,
        code: str,
        redirect_uri: str,
        params: Mapping[str, str],
    ) -> AccessTokenResponse:
        data = {
            "client_id": self._client_id,
            "client_secret": self._client_secret,
            "code": code,
            "redirect_uri": redirect_uri,
            **params,
        }

        try:
            response = await self._http.post(
                self._access_token_url,
                data=data,
                headers={"Accept": "application/json"},
            )
        except httpx.RequestError as e:
            logger.warning("Token request to %s failed: %s", self._access_token_url, e)
            raise ProviderRequestError(
                f"Failed to connect to {self._access_token_url}: {e}"
            ) from e

        if not 200 <= response.status_code < 300:
            logger.warning(
                "Token exchange failed: url=%s, status=%d",
                self._access_token_url,
                response.status_code,
            )
            raise ProviderRequestError(
                f"Token exchange failed with status {response.status_code}",
                status_code=response.status_code,
                data=response.text,
            )

        payload = self._parse_token_payload(response)
        access_token = payload.get("access_token")
        if not access_token:
            raise ProviderRequestError(
                "Token response is missing access_token",
                status_code=response.status_code,
                data=response.text,
            )

        refresh_token = payload.get("refresh_token")
        return AccessTokenResponse(
            access_token=str(access_token),
            refresh_token=str(refresh_token) if refresh_token else None,
            raw=payload,
        )

    @staticmethod
    def _parse_token_payload(response: httpx.Response) -> dict[str, Any]:
        """Decode a token response as JSON, falling back to form encoding."""
        try:
            payload = response.json()
        except ValueError:
            return dict(parse_qsl(response.text))
        if not isinstance(payload, dict):
            raise ProviderRequestError(
                "Token response is not a JSON object",
                status_code=response.status_code,
                data=response.text,
            )
        return payload
