"""
Tests for SetupSettings.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from agent_setup.config.settings import DEFAULT_TIGER_CMD, SetupSettings


class TestSetupSettings:

    def test_defaults(self, monkeypatch, temp_dir):
        monkeypatch.delenv("TIGER_CMD", raising=False)
        monkeypatch.delenv("TIGER_READY_TIMEOUT", raising=False)
        monkeypatch.delenv("TIGER_POLL_INTERVAL", raising=False)

        settings = SetupSettings.from_env(temp_dir)

        assert settings.tiger_cmd == DEFAULT_TIGER_CMD
        assert settings.env_path == Path(temp_dir) / ".env"
        assert settings.mcp_config_path == Path(temp_dir) / "mcp_config.json"
        assert settings.tiger_poll_interval == 30

    def test_environment_overrides(self, monkeypatch, temp_dir):
        monkeypatch.setenv("TIGER_CMD", "/usr/local/bin/tiger")
        monkeypatch.setenv("TIGER_READY_TIMEOUT", "60")

        settings = SetupSettings.from_env(temp_dir)

        assert settings.tiger_cmd == "/usr/local/bin/tiger"
        assert settings.tiger_ready_timeout == 60.0

    def test_rejects_non_positive_timeout(self, monkeypatch):
        monkeypatch.setenv("TIGER_READY_TIMEOUT", "0")
        with pytest.raises(ValidationError):
            SetupSettings.from_env()
