"""Tests for wren.server.runner: pounce configuration and bootstrap."""

import logging
from unittest.mock import MagicMock, patch

import pytest

from wren.app import App
from wren.config import AppConfig
from wren.errors import ConfigurationError
from wren.server.runner import KEEP_ALIVE_TIMEOUT, serve, server_config


class TestServerConfig:
    def test_production_defaults(self) -> None:
        config = server_config(AppConfig())
        assert (config.host, config.port) == ("0.0.0.0", 5000)
        assert config.workers == 0
        assert config.reload is False
        assert config.keep_alive_timeout == KEEP_ALIVE_TIMEOUT

    def test_debug_is_single_worker_with_reload(self) -> None:
        config = server_config(AppConfig(debug=True, workers=8, reload_dirs=("src",)))
        assert config.workers == 1
        assert config.reload is True
        assert config.reload_dirs == ("src",)

    def test_production_flag_wins_over_debug(self) -> None:
        config = server_config(AppConfig(debug=True), production=True, workers=4)
        assert config.reload is False
        assert config.workers == 4

    def test_overrides(self) -> None:
        config = server_config(AppConfig(workers=2), "127.0.0.1", 8080)
        assert (config.host, config.port, config.workers) == ("127.0.0.1", 8080, 2)


class TestServe:
    @patch("pounce.server.Server")
    def test_runs_pounce_with_the_app(self, mock_server: MagicMock) -> None:
        app = App(AppConfig(docs_enabled=False))
        serve(app, port=8000)
        config, served = mock_server.call_args[0]
        assert served is app
        assert config.port == 8000
        assert mock_server.call_args[1]["app_path"] is None
        mock_server.return_value.run.assert_called_once()

    @patch("pounce.server.Server")
    def test_app_path_only_used_for_reload(self, mock_server: MagicMock) -> None:
        serve(App(AppConfig(debug=True)), app_path="pkg:app")
        assert mock_server.call_args[1]["app_path"] == "pkg:app"

    @patch("pounce.server.Server")
    def test_logs_listening_address(
        self, mock_server: MagicMock, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.INFO, logger="wren.server"):
            serve(App(), host="127.0.0.1", port=5001)
        messages = [r.getMessage() for r in caplog.records]
        assert "wren production server listening on http://127.0.0.1:5001" in messages
        assert "API docs at http://127.0.0.1:5001/swagger-ui" in messages

    @patch("pounce.server.Server")
    def test_unservable_app_never_binds(self, mock_server: MagicMock) -> None:
        app = App()

        @app.route("/items/:id")
        def broken():
            return "missing id"

        with pytest.raises(ConfigurationError):
            serve(app)
        mock_server.assert_not_called()
