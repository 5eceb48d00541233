"""Auth commands -- manage the stored API key.

Provides the ``orshot auth`` sub-command group. ``login`` stores a key and
verifies it against the service, ``whoami`` shows the account behind the
stored key, and ``logout`` forgets everything.

Typical workflow::

    orshot auth login          # prompts for the key
    orshot auth whoami
    orshot auth logout
"""

from __future__ import annotations

import os
from typing import Optional

import typer

from orshot.config import ENV_API_KEY
from orshot.models import DEFAULT_DOMAIN, UserProfile
from orshot.output import debug, error, info, print_table, success, warning


auth_app = typer.Typer(no_args_is_help=True)


@auth_app.command("login")
def auth_login(
    api_key: Optional[str] = typer.Argument(
        None, help="Your Orshot API key. Prompted for when omitted."
    ),
    domain: str = typer.Option(DEFAULT_DOMAIN, "--domain", "-d", help="API domain."),
) -> None:
    """Log in with your Orshot API key.

    The key and domain are saved first and then verified by fetching the
    current user. On any failure the stored credentials are erased again so
    that a bad key is never left behind.

    Example::

        orshot auth login sk-1234
        orshot auth login --domain https://staging.orshot.com
    """
    from orshot.auth import CredentialStore
    from orshot.client import create_client
    from orshot.commands import fail
    from orshot.exceptions import OrshotError
    from orshot.models import Credentials

    if not api_key:
        api_key = typer.prompt("Enter your Orshot API key", hide_input=True)
    api_key = api_key.strip()
    if not api_key:
        error("API key is required.")
        raise typer.Exit(code=2)

    # Verify the key given here, not one supplied through the environment.
    store = CredentialStore(env_overrides=False)
    store.save(Credentials(api_key=api_key, domain=domain))
    debug(f"Domain: {store.get_domain()}")
    debug(f"API key: {api_key[:8]}...")

    info("Verifying API key...")
    try:
        with create_client(store) as client:
            user = client.get_current_user()
    except OrshotError as exc:
        resolved_domain = store.get_domain()
        store.clear()
        fail(
            "Login failed",
            exc,
            domain=resolved_domain,
            hint="For debugging, run with: orshot --verbose auth login <api-key>",
        )

    store.set_user(user)
    success("Successfully logged in!")
    _print_user(user, store.get_domain())
    if os.environ.get(ENV_API_KEY):
        warning(f"{ENV_API_KEY} is set and takes precedence over the saved key in other commands")


@auth_app.command("logout")
def auth_logout() -> None:
    """Log out and clear stored credentials."""
    from orshot.auth import CredentialStore

    CredentialStore().clear()
    success("Successfully logged out")


@auth_app.command("whoami")
def auth_whoami() -> None:
    """Show the account behind the stored API key.

    Example::

        orshot auth whoami
    """
    from orshot.auth import CredentialStore, require_auth
    from orshot.client import create_client
    from orshot.commands import fail
    from orshot.exceptions import OrshotError

    store = CredentialStore()
    require_auth(store)

    info("Fetching user information...")
    try:
        with create_client(store) as client:
            user = client.get_current_user()
    except OrshotError as exc:
        fail(
            "Failed to get user info",
            exc,
            domain=store.get_domain(),
            hint="Try logging in again: orshot auth login <your-api-key>",
        )

    api_key = store.get_api_key() or ""
    _print_user(user, store.get_domain(), api_key_prefix=f"{api_key[:8]}...")


def _print_user(user: UserProfile, domain: str, api_key_prefix: Optional[str] = None) -> None:
    rows = [
        ["User ID", user.user_id or "Unknown"],
        ["Name", user.name or "Not available"],
        ["Email", user.email or "Not available"],
        ["Domain", domain],
    ]
    if api_key_prefix is not None:
        rows.append(["API Key", api_key_prefix])
    print_table(["Field", "Value"], rows, title="Current User")
