"""Tests for configuration loading."""

import pytest

from idform import config as config_module
from idform.config import IdFormConfig


class TestFromEnv:
    def test_defaults(self, monkeypatch):
        for name in ("IDFORM_USERS_URL", "IDFORM_SUBMIT_URL", "IDFORM_NOTIFICATION_MS", "IDFORM_PORT"):
            monkeypatch.delenv(name, raising=False)
        cfg = IdFormConfig.from_env()
        assert cfg.users_url == "https://jsonplaceholder.typicode.com/users"
        assert cfg.submit_url == "http://httpbin.org/post"
        assert cfg.notification_duration_ms == 3000
        assert cfg.server_port == 9110

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("IDFORM_SUBMIT_URL", "http://sink.local/post")
        monkeypatch.setenv("IDFORM_NOTIFICATION_MS", "1500")
        monkeypatch.setenv("IDFORM_HTTP_TIMEOUT", "2.5")
        monkeypatch.setenv("IDFORM_LOG_LEVEL", "debug")
        cfg = IdFormConfig.from_env()
        assert cfg.submit_url == "http://sink.local/post"
        assert cfg.notification_duration_ms == 1500
        assert cfg.http_timeout == 2.5
        assert cfg.log_level == "DEBUG"

    def test_bad_number(self, monkeypatch):
        monkeypatch.setenv("IDFORM_PORT", "not-a-port")
        with pytest.raises(ValueError):
            IdFormConfig.from_env()


def test_update_config(monkeypatch):
    monkeypatch.setattr(config_module, "config", IdFormConfig())
    updated = config_module.update_config(notification_duration_ms=10, unknown_key=1)
    assert updated.notification_duration_ms == 10
    assert not hasattr(updated, "unknown_key")
    assert config_module.get_config() is updated


def test_command_line_overrides_reach_config(monkeypatch):
    """Flags passed to run_server.py are applied through update_config."""
    import run_server as cli

    monkeypatch.setattr(config_module, "config", IdFormConfig())
    served = []

    async def fake_run_server(host=None, port=None):
        served.append((host, port))

    monkeypatch.setattr(cli, "run_server", fake_run_server)
    cli.main(["--port", "9999", "--submit-url", "http://localhost:8080/post"])

    current = config_module.get_config()
    assert current.server_port == 9999
    assert current.submit_url == "http://localhost:8080/post"
    assert current.users_url == IdFormConfig.users_url
    assert served == [("0.0.0.0", 9999)]
