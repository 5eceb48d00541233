"""Shared test fixtures for orshot.

Provides reusable fixtures for isolated config environments, a credential
store holding a test key, API clients wired to :class:`httpx.MockTransport`,
and running CLI commands. These fixtures are automatically discovered by
pytest and available to all test modules without explicit imports.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import httpx
import pytest

from orshot.auth.credential_store import CredentialStore
from orshot.client import OrshotClient
from orshot.models import Credentials
from orshot.output import reset_output


TEST_API_KEY = "sk-test-1234567890"
TEST_DOMAIN = "https://api.orshot.test"

Handler = Callable[[httpx.Request], httpx.Response]


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time. When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale.
    Resetting forces a fresh manager to be created on next use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Sets XDG_CONFIG_HOME and XDG_DATA_HOME to subdirectories of tmp_path so
    that tests never touch real user config, clears all ORSHOT_* environment
    variables, and changes the working directory to tmp_path.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setattr("orshot.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.setenv("NO_COLOR", "1")

    for var in ["ORSHOT_API_KEY", "ORSHOT_DOMAIN", "ORSHOT_TIMEOUT", "ORSHOT_DEBUG"]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def store(isolated_config: Path) -> CredentialStore:
    """A credential store in the isolated config dir, holding a test key."""
    store = CredentialStore()
    store.save(Credentials(api_key=TEST_API_KEY, domain=TEST_DOMAIN))
    return store


@pytest.fixture
def empty_store(isolated_config: Path) -> CredentialStore:
    """A credential store with nothing saved."""
    return CredentialStore()


# ---------------------------------------------------------------------------
# Client fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_api(monkeypatch: pytest.MonkeyPatch):
    """Route every command's API client through a handler function.

    Usage::

        def test_x(store, mock_api):
            requests = mock_api(lambda req: httpx.Response(200, json=[]))

    Returns a callable that installs *handler* and returns the list that
    collects every request the handler receives.
    """

    def install(handler: Handler) -> list[httpx.Request]:
        seen: list[httpx.Request] = []

        def recording(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return handler(request)

        def factory(store: CredentialStore | None = None) -> OrshotClient:
            return OrshotClient(
                store or CredentialStore(),
                transport=httpx.MockTransport(recording),
            )

        monkeypatch.setattr("orshot.client.create_client", factory)
        return seen

    return install


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
