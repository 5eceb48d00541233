"""Tests for orshot.config -- XDG paths, atomic writes, settings precedence."""

from __future__ import annotations

import json
import os
import stat
from pathlib import Path
from unittest.mock import patch

import pytest

from orshot.config import (
    atomic_write,
    debug_enabled,
    get_config_dir,
    get_data_dir,
    load_settings,
    resolve_settings,
    save_settings,
    settings_path,
)
from orshot.exceptions import ConfigError
from orshot.models import Settings


# ---------------------------------------------------------------------------
# XDG path resolution
# ---------------------------------------------------------------------------


class TestXDGPathsLinux:
    def test_config_dir_xdg_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("orshot.config._is_xdg_platform", lambda: True)
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setattr(Path, "home", lambda: tmp_path)

        assert get_config_dir() == tmp_path / ".config" / "orshot"
        assert get_config_dir().is_dir()

    def test_config_dir_xdg_custom(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("orshot.config._is_xdg_platform", lambda: True)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "cfg"))

        assert get_config_dir() == tmp_path / "cfg" / "orshot"

    def test_data_dir_xdg_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("orshot.config._is_xdg_platform", lambda: True)
        monkeypatch.delenv("XDG_DATA_HOME", raising=False)
        monkeypatch.setattr(Path, "home", lambda: tmp_path)

        assert get_data_dir() == tmp_path / ".local" / "share" / "orshot"


class TestFallbackPaths:
    def test_config_dir_non_xdg(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("orshot.config._is_xdg_platform", lambda: False)
        monkeypatch.setattr(Path, "home", lambda: tmp_path)

        assert get_config_dir() == tmp_path / ".orshot"

    def test_data_dir_non_xdg(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("orshot.config._is_xdg_platform", lambda: False)
        monkeypatch.setattr(Path, "home", lambda: tmp_path)

        assert get_data_dir() == tmp_path / ".orshot"


# ---------------------------------------------------------------------------
# Atomic writes
# ---------------------------------------------------------------------------


class TestAtomicWrite:
    def test_writes_content(self, tmp_path: Path) -> None:
        target = tmp_path / "nested" / "file.json"
        atomic_write(target, '{"a": 1}')
        assert target.read_text(encoding="utf-8") == '{"a": 1}'

    def test_overwrites(self, tmp_path: Path) -> None:
        target = tmp_path / "file.json"
        target.write_text("old")
        atomic_write(target, "new")
        assert target.read_text() == "new"

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
    def test_mode_applied(self, tmp_path: Path) -> None:
        target = tmp_path / "secret.json"
        atomic_write(target, "{}", mode=0o600)
        assert stat.S_IMODE(target.stat().st_mode) == 0o600

    def test_no_temp_file_left_on_failure(self, tmp_path: Path) -> None:
        target = tmp_path / "file.json"
        with patch("orshot.config.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(OSError):
                atomic_write(target, "data")
        assert list(tmp_path.iterdir()) == []


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


class TestSettings:
    def test_defaults_without_file(self, isolated_config: Path) -> None:
        settings = load_settings()
        assert settings.timeout == 300.0
        assert settings.verify_ssl is True

    def test_save_and_load(self, isolated_config: Path) -> None:
        save_settings(Settings(timeout=60, verify_ssl=False))
        assert json.loads(settings_path().read_text()) == {"timeout": 60.0, "verify_ssl": False}
        assert load_settings() == Settings(timeout=60, verify_ssl=False)

    def test_invalid_json_raises(self, isolated_config: Path) -> None:
        settings_path().write_text("{not json")
        with pytest.raises(ConfigError):
            load_settings()

    def test_invalid_value_raises(self, isolated_config: Path) -> None:
        settings_path().write_text(json.dumps({"timeout": "soon"}))
        with pytest.raises(ConfigError):
            load_settings()


class TestResolveSettings:
    def test_env_timeout_overrides_file(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        save_settings(Settings(timeout=60))
        monkeypatch.setenv("ORSHOT_TIMEOUT", "15.5")
        assert resolve_settings().timeout == 15.5

    def test_file_overrides_default(self, isolated_config: Path) -> None:
        save_settings(Settings(timeout=60))
        assert resolve_settings().timeout == 60

    @pytest.mark.parametrize("value", ["abc", "0", "-5"])
    def test_invalid_env_timeout(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch, value: str) -> None:
        monkeypatch.setenv("ORSHOT_TIMEOUT", value)
        with pytest.raises(ConfigError):
            resolve_settings()


class TestDebugEnabled:
    def test_off_by_default(self, isolated_config: Path) -> None:
        assert debug_enabled() is False

    def test_on(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ORSHOT_DEBUG", "1")
        assert debug_enabled() is True
