"""Tests for the uvicorn runner."""

from uvicorn.config import LOGGING_CONFIG

from pingate.app import App
from pingate.web import runner


def test_run_server_leaves_uvicorn_logging_config_untouched(config, monkeypatch):
    """Test that custom log formats are applied to a copy of uvicorn's defaults."""
    access_fmt_before = LOGGING_CONFIG["formatters"]["access"]["fmt"]
    captured = {}

    def fake_run(app, **kwargs):
        captured.update(kwargs)

    monkeypatch.setattr(runner.uvicorn, "run", fake_run)

    runner.run_server(App(config), config)

    assert LOGGING_CONFIG["formatters"]["access"]["fmt"] == access_fmt_before
    assert "asctime" in captured["log_config"]["formatters"]["access"]["fmt"]
    assert captured["proxy_headers"] is False
