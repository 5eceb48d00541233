"""Credential storage and the authentication precondition for commands.

Public API:
    - :class:`CredentialStore` -- reads and writes ``credentials.json``.
    - :func:`require_auth` -- aborts a command when no API key is available.
"""

from __future__ import annotations

import typer

from orshot.auth.credential_store import CredentialStore
from orshot.exit_codes import EXIT_AUTH_FAILURE
from orshot.output import error, suggest

__all__ = ["CredentialStore", "require_auth"]


def require_auth(store: CredentialStore) -> None:
    """Exit with :data:`~orshot.exit_codes.EXIT_AUTH_FAILURE` unless a key is stored.

    Prints guidance on how to log in before exiting.

    Raises:
        typer.Exit: When no API key is stored and ``ORSHOT_API_KEY`` is unset.
    """
    if store.is_authenticated():
        return
    error("Not authenticated.")
    suggest("Log in first: orshot auth login <your-api-key>")
    raise typer.Exit(code=EXIT_AUTH_FAILURE)
