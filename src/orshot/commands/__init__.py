"""Built-in CLI sub-commands for orshot.

This package groups the Typer sub-command modules that form the CLI's
command tree:

* :mod:`~orshot.commands.auth` -- log in, log out, show the current user.
* :mod:`~orshot.commands.templates` -- list templates and their modifications.
* :mod:`~orshot.commands.generate` -- render library and studio templates.
* :mod:`~orshot.commands.config` -- view and modify HTTP settings.
* :mod:`~orshot.commands.ping` -- the ``test`` connectivity check.

Commands catch :class:`~orshot.exceptions.OrshotError` themselves and hand
it to :func:`fail`, which prints the message plus any troubleshooting hints
and exits with the error's code.
"""

from __future__ import annotations

from typing import NoReturn

import typer

from orshot.exceptions import (
    AuthenticationError,
    ForbiddenError,
    NetworkError,
    OrshotError,
    UnauthorizedError,
)
from orshot.output import error, info, suggest


def troubleshoot(exc: OrshotError, domain: str | None = None) -> None:
    """Print category-specific hints for authentication and network failures."""
    if isinstance(exc, NetworkError):
        info("Troubleshooting tips:")
        suggest("Check your internet connection")
        if domain:
            suggest(f"Verify the domain is correct: {domain}")
        suggest("Try again in a few moments")
    elif isinstance(exc, UnauthorizedError):
        info("Troubleshooting tips:")
        suggest("Double-check your API key from https://orshot.com/dashboard/developers")
        suggest("Make sure there are no extra spaces or characters")
        suggest("Verify your account has API access")
    elif isinstance(exc, ForbiddenError):
        suggest("Your API key may not have access to this resource")
    elif isinstance(exc, AuthenticationError):
        suggest("Log in first: orshot auth login <your-api-key>")


def fail(
    action: str,
    exc: OrshotError,
    domain: str | None = None,
    hint: str | None = None,
) -> NoReturn:
    """Report *exc* as the failure of *action* and exit with its code.

    *hint* is printed after the category-specific tips.

    Raises:
        typer.Exit: Always, with ``exc.exit_code``.
    """
    error(f"{action}: {exc}")
    troubleshoot(exc, domain)
    if hint:
        suggest(hint)
    raise typer.Exit(code=exc.exit_code)
