"""Tests for the ``orshot test`` connectivity check and top-level app."""

from __future__ import annotations

import httpx

from orshot import __version__
from orshot.app import app


class TestConnectivity:
    def test_default_endpoint(self, store, mock_api, cli_runner) -> None:
        requests = mock_api(lambda req: httpx.Response(200, json=[{"id": 1}]))

        result = cli_runner.invoke(app, ["test"])

        assert result.exit_code == 0, result.output
        assert requests[0].method == "GET"
        assert requests[0].url.path == "/v1/templates"
        assert "API test successful!" in result.output
        assert "https://api.orshot.test" in result.output
        assert "sk-test-..." in result.output

    def test_verbose_forced(self, store, mock_api, cli_runner) -> None:
        mock_api(lambda req: httpx.Response(200, json=[]))

        result = cli_runner.invoke(app, ["test"])

        assert "[debug] GET https://api.orshot.test/v1/templates" in result.output

    def test_endpoint_gets_leading_slash(self, store, mock_api, cli_runner) -> None:
        requests = mock_api(lambda req: httpx.Response(200, json={}))

        result = cli_runner.invoke(app, ["test", "--endpoint", "v1/studio/templates"])

        assert result.exit_code == 0, result.output
        assert requests[0].url.path == "/v1/studio/templates"

    def test_preview_truncated(self, store, mock_api, cli_runner) -> None:
        mock_api(lambda req: httpx.Response(200, json=[{"id": i, "title": "x" * 50} for i in range(50)]))

        result = cli_runner.invoke(app, ["test"])

        assert result.exit_code == 0, result.output
        assert result.output.rstrip().endswith("...")

    def test_failure(self, store, mock_api, cli_runner) -> None:
        mock_api(lambda req: httpx.Response(401))

        result = cli_runner.invoke(app, ["test"])

        assert result.exit_code == 3
        assert "API test failed" in result.output

    def test_requires_auth(self, empty_store, mock_api, cli_runner) -> None:
        requests = mock_api(lambda req: httpx.Response(200, json=[]))

        result = cli_runner.invoke(app, ["test"])

        assert result.exit_code == 3
        assert requests == []


class TestApp:
    def test_version(self, cli_runner) -> None:
        result = cli_runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert result.output.strip() == f"orshot {__version__}"

    def test_no_args_shows_help(self, cli_runner) -> None:
        result = cli_runner.invoke(app, [])

        assert "auth" in result.output
        assert "generate" in result.output

    def test_debug_env_enables_verbose(self, store, mock_api, cli_runner, monkeypatch) -> None:
        monkeypatch.setenv("ORSHOT_DEBUG", "1")
        mock_api(lambda req: httpx.Response(200, json=[]))

        result = cli_runner.invoke(app, ["templates", "library"])

        assert "[debug] GET" in result.output

    def test_crash_log_lands_in_data_logs_dir(self, tmp_path, monkeypatch) -> None:
        from orshot.app import _write_crash_log

        monkeypatch.setattr("orshot.config._is_xdg_platform", lambda: False)
        monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path)

        try:
            raise RuntimeError("kaboom")
        except RuntimeError as exc:
            log_path = _write_crash_log(exc)

        assert log_path.parent == tmp_path / ".orshot" / "logs"
        assert log_path.name.startswith("crash-")
        assert "RuntimeError: kaboom" in log_path.read_text(encoding="utf-8")
