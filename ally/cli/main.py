"""Main CLI application using Cyclopts."""

import cyclopts
import logfire

from ally.cli.commands import spotify
from ally.config import Config, configure_logging

app = cyclopts.App(
    name="ally",
    help="ally - OAuth2 social login drivers",
)

app.command(spotify.app, name="spotify")


def main() -> None:
    configure_logging(Config().logging)  # type: ignore[call-arg]
    logfire.configure(send_to_logfire="if-token-present", console=False)
    app()


if __name__ == "__main__":
    main()
