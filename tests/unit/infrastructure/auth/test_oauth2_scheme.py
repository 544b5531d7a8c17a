"""Unit tests for HttpOAuth2Scheme adapter."""

from unittest.mock import AsyncMock, MagicMock
from urllib.parse import parse_qs, urlparse

import httpx
import pytest

from ally.domain.auth.port.oauth2 import ProviderRequestError
from ally.infrastructure.auth.oauth2 import HttpOAuth2Scheme, join_url


def _make_scheme(client: httpx.AsyncClient | None = None) -> HttpOAuth2Scheme:
    return HttpOAuth2Scheme(
        client_id="cid",
        client_secret="secret",
        base_url="https://accounts.example.com/",
        authorize_path="/authorize",
        access_token_path="api/token",
        http_client=client or AsyncMock(spec=httpx.AsyncClient),
    )


def _make_response(status_code: int = 200, text: str = "", json_body=None) -> MagicMock:
    response = MagicMock(spec=httpx.Response)
    response.status_code = status_code
    response.text = text
    if json_body is None:
        response.json.side_effect = ValueError("not json")
    else:
        response.json.return_value = json_body
    return response


class TestJoinUrl:
    def test_single_slash(self):
        assert join_url("https://a.com/", "/b") == "https://a.com/b"
        assert join_url("https://a.com/v1", "me") == "https://a.com/v1/me"


class TestBuildAuthorizeUrl:
    def test_includes_redirect_scope_options_and_client_id(self):
        scheme = _make_scheme()

        url = scheme.build_authorize_url(
            "https://app/cb", "a b", {"response_type": "code", "state": "s"}
        )

        parsed = urlparse(url)
        assert f"{parsed.scheme}://{parsed.netloc}{parsed.path}" == (
            "https://accounts.example.com/authorize"
        )
        assert parse_qs(parsed.query) == {
            "redirect_uri": ["https://app/cb"],
            "scope": ["a b"],
            "response_type": ["code"],
            "state": ["s"],
            "client_id": ["cid"],
        }

    def test_options_cannot_replace_client_id(self):
        scheme = _make_scheme()

        url = scheme.build_authorize_url("https://app/cb", "a", {"client_id": "evil"})

        assert parse_qs(urlparse(url).query)["client_id"] == ["cid"]


class TestExchangeCodeForToken:
    @pytest.mark.asyncio
    async def test_posts_form_and_parses_json(self):
        client = AsyncMock(spec=httpx.AsyncClient)
        client.post.return_value = _make_response(
            json_body={
                "access_token": "T",
                "refresh_token": "R",
                "expires_in": 3600,
                "token_type": "Bearer",
            }
        )
        scheme = _make_scheme(client)

        token = await scheme.exchange_code_for_token(
            "abc", "https://app/cb", {"grant_type": "authorization_code"}
        )

        assert token.access_token == "T"
        assert token.refresh_token == "R"
        assert token.expires == 3600
        assert token.raw == {
            "access_token": "T",
            "refresh_token": "R",
            "expires_in": 3600,
            "token_type": "Bearer",
        }
        client.post.assert_awaited_once_with(
            "https://accounts.example.com/api/token",
            data={
                "client_id": "cid",
                "client_secret": "secret",
                "code": "abc",
                "redirect_uri": "https://app/cb",
                "grant_type": "authorization_code",
            },
            headers={"Accept": "application/json"},
        )

    @pytest.mark.asyncio
    async def test_raw_keeps_full_token_body(self):
        body = {
            "access_token": "T",
            "refresh_token": "R",
            "expires_in": "3600",
            "scope": "x",
        }
        client = AsyncMock(spec=httpx.AsyncClient)
        client.post.return_value = _make_response(json_body=dict(body))
        scheme = _make_scheme(client)

        token = await scheme.exchange_code_for_token("abc", "https://app/cb", {})

        assert token.refresh_token == "R"
        assert token.raw == body

    @pytest.mark.asyncio
    async def test_falls_back_to_form_encoded_body(self):
        client = AsyncMock(spec=httpx.AsyncClient)
        client.post.return_value = _make_response(text="access_token=T&expires_in=60")
        scheme = _make_scheme(client)

        token = await scheme.exchange_code_for_token("abc", "https://app/cb", {})

        assert token.access_token == "T"
        assert token.refresh_token is None
        assert token.expires == 60

    @pytest.mark.asyncio
    async def test_non_2xx_raises_with_status_and_body(self):
        client = AsyncMock(spec=httpx.AsyncClient)
        client.post.return_value = _make_response(
            status_code=400, text='{"error":"invalid_grant"}'
        )
        scheme = _make_scheme(client)

        with pytest.raises(ProviderRequestError) as exc_info:
            await scheme.exchange_code_for_token("abc", "https://app/cb", {})

        assert exc_info.value.status_code == 400
        assert exc_info.value.data == '{"error":"invalid_grant"}'

    @pytest.mark.asyncio
    async def test_transport_error_raises_without_status(self):
        client = AsyncMock(spec=httpx.AsyncClient)
        client.post.side_effect = httpx.ConnectTimeout("timed out")
        scheme = _make_scheme(client)

        with pytest.raises(ProviderRequestError) as exc_info:
            await scheme.exchange_code_for_token("abc", "https://app/cb", {})

        assert exc_info.value.status_code is None
        assert exc_info.value.data is None
        assert isinstance(exc_info.value.__cause__, httpx.ConnectTimeout)

    @pytest.mark.asyncio
    async def test_missing_access_token_raises(self):
        client = AsyncMock(spec=httpx.AsyncClient)
        client.post.return_value = _make_response(json_body={"token_type": "Bearer"})
        scheme = _make_scheme(client)

        with pytest.raises(ProviderRequestError, match="missing access_token"):
            await scheme.exchange_code_for_token("abc", "https://app/cb", {})
