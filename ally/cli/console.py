"""Console output for the CLI.

Provides a Console class that wraps rich for consistent output.
All CLI output should go through this module.
"""

from typing import Any

from rich.console import Console as RichConsole
from rich.table import Table

from ally.domain.auth.model.value import NormalizedUser


class Console:
    """CLI output manager wrapping rich."""

    def __init__(
        self,
        *,
        force_terminal: bool | None = None,
    ) -> None:
        self._console = RichConsole(force_terminal=force_terminal, stderr=False)
        self._err_console = RichConsole(force_terminal=force_terminal, stderr=True)

    def error(self, message: str, *, hint: str | None = None) -> None:
        """Print an error message to stderr."""
        self._err_console.print(f"[red]✗[/red] {message}")
        if hint:
            self._err_console.print(f"  [dim]{hint}[/dim]")

    def plain(self, text: str) -> None:
        """Print text verbatim: no markup, highlighting or wrapping."""
        self._console.print(text, markup=False, highlight=False, soft_wrap=True)

    def json(self, data: Any) -> None:
        """Print data as pretty JSON."""
        self._console.print_json(data=data)

    def user(self, user: NormalizedUser) -> None:
        """Print a normalized user as a two-column table."""
        table = Table(show_header=False, box=None)
        table.add_column(style="cyan")
        table.add_column()

        rows = [
            ("id", user.id),
            ("name", user.name),
            ("email", user.email),
            ("country", user.country),
            ("avatar", user.avatar_url),
            ("expires", user.expires),
            ("refresh token", "yes" if user.refresh_token else "no"),
        ]
        for label, value in rows:
            table.add_row(label, "" if value is None else str(value))

        self._console.print(table)


_console: Console | None = None


def get_console() -> Console:
    """Get the global console instance."""
    global _console
    if _console is None:
        _console = Console()
    return _console
