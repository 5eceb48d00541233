"""Tests for ``orshot config`` commands."""

from __future__ import annotations

import json
from pathlib import Path

from orshot.app import app
from orshot.config import load_settings


class TestConfigShow:
    def test_defaults(self, isolated_config: Path, cli_runner) -> None:
        result = cli_runner.invoke(app, ["--quiet", "config", "show"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == {"timeout": 300.0, "verify_ssl": True}

    def test_env_override_applied(self, isolated_config: Path, cli_runner, monkeypatch) -> None:
        monkeypatch.setenv("ORSHOT_TIMEOUT", "30")

        result = cli_runner.invoke(app, ["--quiet", "config", "show"])

        assert json.loads(result.stdout)["timeout"] == 30.0

    def test_invalid_env_timeout(self, isolated_config: Path, cli_runner, monkeypatch) -> None:
        monkeypatch.setenv("ORSHOT_TIMEOUT", "never")

        result = cli_runner.invoke(app, ["config", "show"])

        assert result.exit_code == 1
        assert "ORSHOT_TIMEOUT" in result.output


class TestConfigSet:
    def test_set_timeout(self, isolated_config: Path, cli_runner) -> None:
        result = cli_runner.invoke(app, ["config", "set", "timeout", "600"])

        assert result.exit_code == 0, result.output
        assert load_settings().timeout == 600.0

    def test_set_verify_ssl(self, isolated_config: Path, cli_runner) -> None:
        result = cli_runner.invoke(app, ["config", "set", "verify_ssl", "false"])

        assert result.exit_code == 0, result.output
        assert load_settings().verify_ssl is False

    def test_unknown_key(self, isolated_config: Path, cli_runner) -> None:
        result = cli_runner.invoke(app, ["config", "set", "colour", "blue"])

        assert result.exit_code == 2
        assert "Unknown config key" in result.output

    def test_non_numeric_timeout(self, isolated_config: Path, cli_runner) -> None:
        result = cli_runner.invoke(app, ["config", "set", "timeout", "soon"])
        assert result.exit_code == 2

    def test_non_positive_timeout(self, isolated_config: Path, cli_runner) -> None:
        result = cli_runner.invoke(app, ["config", "set", "timeout", "0"])

        assert result.exit_code == 2
        assert load_settings().timeout == 300.0


def test_config_path(isolated_config: Path, cli_runner) -> None:
    result = cli_runner.invoke(app, ["config", "path"])

    assert result.exit_code == 0
    assert result.stdout.strip() == str(isolated_config / "config" / "orshot")
