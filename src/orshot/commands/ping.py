"""The ``orshot test`` command -- check connectivity to the API.

Sends one authenticated GET to an endpoint (``/v1/templates`` by default)
with verbose diagnostics forced on, then prints a short preview of the
response. Useful when ``auth login`` fails and it is unclear whether the
key, the domain or the network is at fault.
"""

from __future__ import annotations

import json

import typer

from orshot.output import get_output, info, print_data, success

_PREVIEW_CHARS = 500


def connectivity_test(
    endpoint: str = typer.Option("/v1/templates", "--endpoint", "-e", help="API endpoint to test."),
) -> None:
    """Test API connectivity (debug command).

    Example::

        orshot test
        orshot test --endpoint /v1/studio/templates
    """
    from orshot.auth import CredentialStore, require_auth
    from orshot.client import create_client
    from orshot.commands import fail
    from orshot.exceptions import OrshotError
    from orshot.output import OutputManager, set_output

    store = CredentialStore()
    require_auth(store)

    if not endpoint.startswith("/"):
        endpoint = f"/{endpoint}"

    current = get_output()
    if not current.is_verbose:
        set_output(
            OutputManager(
                format=current.format,
                no_color=current.no_color,
                quiet=current.is_quiet,
                verbose=True,
            )
        )

    api_key = store.get_api_key() or ""
    info("Testing API connectivity...")
    info(f"Domain: {store.get_domain()}")
    info(f"Endpoint: {endpoint}")
    info(f"API Key: {api_key[:8]}...")

    try:
        with create_client(store) as client:
            result = client.request("GET", endpoint, show_spinner=True)
    except OrshotError as exc:
        fail("API test failed", exc, domain=store.get_domain())

    success("API test successful!")
    if isinstance(result, bytes):
        preview = f"<{len(result)} bytes of binary content>"
    else:
        preview = json.dumps(result, indent=2, ensure_ascii=False, default=str)
        if len(preview) > _PREVIEW_CHARS:
            preview = preview[:_PREVIEW_CHARS] + "..."
    print_data(preview)
