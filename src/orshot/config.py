"""Where orshot keeps its files, and the HTTP settings stored there.

Two JSON documents live in the config directory:

* ``config.json`` -- :class:`~orshot.models.Settings` (timeout, SSL
  verification), managed by :func:`load_settings` / :func:`save_settings`
  and the ``orshot config`` commands.
* ``credentials.json`` -- owned by :mod:`orshot.auth.credential_store`.

Linux and the BSDs follow the XDG base-directory layout
(``$XDG_CONFIG_HOME/orshot``, ``$XDG_DATA_HOME/orshot``); macOS and Windows
use ``~/.orshot``. Crash logs go to the data directory.

Both documents are replaced through :func:`atomic_write`, so a crash
mid-write leaves the previous version in place.
"""

from __future__ import annotations

import contextlib
import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Optional

from orshot.exceptions import ConfigError
from orshot.models import Settings

_APP_DIR = "orshot"
_SETTINGS_FILE = "config.json"

ENV_API_KEY = "ORSHOT_API_KEY"
ENV_DOMAIN = "ORSHOT_DOMAIN"
ENV_TIMEOUT = "ORSHOT_TIMEOUT"
ENV_DEBUG = "ORSHOT_DEBUG"


# --- Directories ---


def _is_xdg_platform() -> bool:
    system = platform.system()
    return system == "Linux" or system.endswith("BSD")


def _ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def _xdg_dir(env_var: str, default_relative: str) -> Path:
    root = os.environ.get(env_var) or Path.home() / default_relative
    return Path(root) / _APP_DIR


def get_config_dir() -> Path:
    """Return (and create) the directory holding ``config.json`` and credentials."""
    if _is_xdg_platform():
        return _ensure_dir(_xdg_dir("XDG_CONFIG_HOME", ".config"))
    return _ensure_dir(Path.home() / f".{_APP_DIR}")


def get_data_dir() -> Path:
    """Return (and create) the data directory. Crash logs go under its ``logs/``."""
    if _is_xdg_platform():
        return _ensure_dir(_xdg_dir("XDG_DATA_HOME", ".local/share"))
    return _ensure_dir(Path.home() / f".{_APP_DIR}")


# --- Writing ---


def atomic_write(path: Path, data: str, mode: Optional[int] = None) -> None:
    """Replace *path* with *data* in one rename.

    The content goes to a sibling temp file first, which gets *mode* before
    a single byte is written, so secrets are never readable by others.

    Raises:
        OSError: If the directory or file cannot be written. The temp file
            is removed and *path* is left untouched.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            if mode is not None:
                os.chmod(tmp_name, mode)
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(tmp_name)
        raise


# --- Settings ---


def settings_path() -> Path:
    return get_config_dir() / _SETTINGS_FILE


def load_settings() -> Settings:
    """Read ``config.json``, or return defaults when it does not exist.

    Raises:
        ConfigError: If the file is not valid JSON or holds invalid values.
    """
    path = settings_path()
    if not path.is_file():
        return Settings()
    try:
        return Settings.model_validate_json(path.read_text(encoding="utf-8"))
    except ValueError as exc:
        raise ConfigError(f"Invalid config at {path}: {exc}") from exc


def save_settings(settings: Settings) -> None:
    atomic_write(settings_path(), json.dumps(settings.model_dump(mode="json"), indent=2) + "\n")


def resolve_settings() -> Settings:
    """Return the settings in effect for this run.

    ``ORSHOT_TIMEOUT`` wins over ``config.json``, which wins over the
    defaults.

    Raises:
        ConfigError: If the saved file is invalid, or ``ORSHOT_TIMEOUT`` is
            not a positive number of seconds.
    """
    settings = load_settings()

    raw_timeout = os.environ.get(ENV_TIMEOUT)
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError:
            timeout = 0.0
        if timeout <= 0:
            raise ConfigError(f"{ENV_TIMEOUT} must be a positive number of seconds, got {raw_timeout!r}")
        settings.timeout = timeout

    return settings


def debug_enabled() -> bool:
    """True when ``ORSHOT_DEBUG`` is set to a non-empty value."""
    return bool(os.environ.get(ENV_DEBUG))
