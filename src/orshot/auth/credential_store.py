"""Persistent credential store.

Stores the API key, the API domain and the last known
:class:`~orshot.models.UserProfile` in ``<config_dir>/credentials.json``.
The file is written atomically with ``0o600`` permissions so that the key is
never world-readable, even momentarily.

Two environment variables take precedence over the stored values without
touching the file:

* ``ORSHOT_API_KEY`` -- API key (useful in CI).
* ``ORSHOT_DOMAIN`` -- API base URL.

See Also:
    :class:`~orshot.client.OrshotClient` -- receives a store instance and
    reads the key and domain from it on every request.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Optional

from orshot.config import ENV_API_KEY, ENV_DOMAIN, atomic_write, get_config_dir
from orshot.models import DEFAULT_DOMAIN, Credentials, UserProfile

_CREDENTIALS_FILENAME = "credentials.json"


class CredentialStore:
    """Read/write the CLI's credentials.

    The file is read at most once per store instance; later reads are
    served from memory and every :meth:`save` or :meth:`clear` refreshes
    that copy. Commands build one store per invocation.

    Args:
        path: Location of the credentials file. Defaults to
            ``<config_dir>/credentials.json``.
        env_overrides: Let ``ORSHOT_API_KEY`` / ``ORSHOT_DOMAIN`` take
            precedence over the stored values. ``auth login`` turns this
            off so that it verifies the key it was given.

    Example::

        store = CredentialStore()
        store.set_api_key("sk-123")
        assert store.get_api_key() == "sk-123"
    """

    def __init__(self, path: Optional[Path] = None, env_overrides: bool = True) -> None:
        self._path = path or get_config_dir() / _CREDENTIALS_FILENAME
        self._env_overrides = env_overrides
        self._cached: Optional[Credentials] = None

    @property
    def path(self) -> Path:
        """The filesystem path to the credentials file."""
        return self._path

    def _read_file(self) -> Credentials:
        if not self._path.is_file():
            return Credentials()
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
            return Credentials.model_validate(data)
        except (json.JSONDecodeError, ValueError, OSError):
            return Credentials()

    def load(self) -> Credentials:
        """Load stored credentials.

        Returns:
            A copy of the stored :class:`~orshot.models.Credentials`, or an
            empty instance if the file does not exist or cannot be parsed.
        """
        if self._cached is None:
            self._cached = self._read_file()
        return self._cached.model_copy(deep=True)

    def save(self, credentials: Credentials) -> None:
        """Persist credentials atomically with ``0o600`` permissions.

        Raises:
            OSError: If the file cannot be written.
        """
        text = json.dumps(credentials.model_dump(mode="json"), indent=2) + "\n"
        atomic_write(self._path, text, mode=0o600)
        self._cached = credentials.model_copy(deep=True)

    # --- API key ---

    def get_api_key(self) -> Optional[str]:
        env_key = os.environ.get(ENV_API_KEY) if self._env_overrides else None
        if env_key:
            return env_key
        return self.load().api_key

    def set_api_key(self, api_key: str) -> None:
        credentials = self.load()
        credentials.api_key = api_key
        self.save(credentials)

    # --- Domain ---

    def get_domain(self) -> str:
        env_domain = os.environ.get(ENV_DOMAIN) if self._env_overrides else None
        if env_domain:
            return env_domain
        return self.load().domain or DEFAULT_DOMAIN

    def set_domain(self, domain: str) -> None:
        credentials = self.load()
        credentials.domain = domain
        self.save(credentials)

    # --- User ---

    def get_user(self) -> Optional[UserProfile]:
        return self.load().user

    def set_user(self, user: UserProfile) -> None:
        credentials = self.load()
        credentials.user = user
        self.save(credentials)

    def clear(self) -> None:
        """Delete the credentials file. No-op when it does not exist."""
        if self._path.is_file():
            self._path.unlink()
        self._cached = Credentials()

    def is_authenticated(self) -> bool:
        return bool(self.get_api_key())
