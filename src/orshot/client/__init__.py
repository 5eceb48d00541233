"""HTTP client module for orshot.

Classes:
    :class:`OrshotClient` -- blocking client backed by :class:`httpx.Client`.

Functions:
    :func:`create_client` -- build a client from the on-disk credential store
    and the resolved settings. Commands obtain their client through this
    factory so tests can substitute one wired to an
    :class:`httpx.MockTransport`.

Example::

    from orshot.client import create_client

    with create_client() as client:
        user = client.get_current_user()
"""

from __future__ import annotations

from typing import Optional

from orshot.auth.credential_store import CredentialStore
from orshot.client.api_client import OrshotClient

__all__ = ["OrshotClient", "create_client"]


def create_client(store: Optional[CredentialStore] = None) -> OrshotClient:
    """Return an :class:`OrshotClient` for *store* and the effective settings."""
    from orshot.config import resolve_settings

    return OrshotClient(store or CredentialStore(), settings=resolve_settings())
