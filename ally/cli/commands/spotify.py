"""Spotify commands - exercise the Spotify driver from a terminal."""

import asyncio
import sys
from collections.abc import Awaitable, Callable
from typing import Annotated, TypeVar

import cyclopts
import httpx

from ally.cli.console import get_console
from ally.config import Config
from ally.domain.auth.model.value import NormalizedUser
from ally.domain.shared.error import AuthError, ConfigurationError
from ally.infrastructure.auth.di import http_timeout
from ally.infrastructure.auth.spotify import SpotifyDriver

app = cyclopts.App(name="spotify", help="Spotify OAuth driver")

T = TypeVar("T")

CONFIG_HINT = "Set ALLY_SERVICES__SPOTIFY__CLIENT_ID, __CLIENT_SECRET and __REDIRECT_URI"


def run_with_driver(call: Callable[[SpotifyDriver], Awaitable[T]]) -> T:
    """Build a driver from settings, run one call, then close the HTTP client.

    Auth errors are reported on stderr and exit with status 1.
    """
    console = get_console()

    async def main() -> T:
        config = Config()  # type: ignore[call-arg]
        async with httpx.AsyncClient(timeout=http_timeout(config.http)) as client:
            driver = SpotifyDriver(config.services.spotify, client)
            return await call(driver)

    try:
        return asyncio.run(main())
    except ConfigurationError as e:
        console.error(e.message, hint=CONFIG_HINT)
        sys.exit(1)
    except AuthError as e:
        status = getattr(e, "status_code", None)
        suffix = f" (HTTP {status})" if status else ""
        console.error(f"{e.code}: {e.message}{suffix}")
        sys.exit(1)


def show_user(user: NormalizedUser, as_json: bool) -> None:
    console = get_console()
    if as_json:
        console.json(user.to_dict())
    else:
        console.user(user)


@app.command
def url(
    *,
    state: Annotated[str | None, cyclopts.Parameter(help="Anti-forgery state")] = None,
) -> None:
    """Print the Spotify authorization URL."""

    async def build(driver: SpotifyDriver) -> str:
        return driver.get_redirect_url(state)

    get_console().plain(run_with_driver(build))


@app.command
def me(
    token: str,
    *,
    json: Annotated[bool, cyclopts.Parameter(help="Print raw JSON")] = False,
) -> None:
    """Show the user owning an access token."""
    user = run_with_driver(lambda driver: driver.get_user_by_token(token))
    show_user(user, json)


@app.command
def callback(
    code: str,
    *,
    state: Annotated[str | None, cyclopts.Parameter(help="State from the callback")] = None,
    expected_state: Annotated[
        str | None, cyclopts.Parameter(help="State issued before the redirect")
    ] = None,
    json: Annotated[bool, cyclopts.Parameter(help="Print raw JSON")] = False,
) -> None:
    """Exchange an authorization code and show the user."""
    query_params = {"code": code}
    if state:
        query_params["state"] = state

    user = run_with_driver(lambda driver: driver.get_user(query_params, expected_state))
    show_user(user, json)
