"""Tests for GateConfig: env-driven policy settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from plugingate.config import GateConfig


class TestGateConfig:
    def test_defaults(self):
        config = GateConfig()
        assert config.environment == "production"
        assert config.plugins_allow_unsigned == ()
        assert config.log_level == "INFO"

    def test_is_development(self):
        assert GateConfig(environment="development").is_development is True
        assert GateConfig(environment="production").is_development is False

    def test_allow_list_from_comma_string(self):
        config = GateConfig(plugins_allow_unsigned=" a ,b,, c ")
        assert config.plugins_allow_unsigned == ("a", "b", "c")

    def test_allow_list_from_sequence(self):
        config = GateConfig(plugins_allow_unsigned=["a", "b"])
        assert config.plugins_allow_unsigned == ("a", "b")

    def test_env_variables(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("PLUGINGATE_ENVIRONMENT", "development")
        monkeypatch.setenv("PLUGINGATE_PLUGINS_ALLOW_UNSIGNED", "acme-panel,acme-datasource")
        config = GateConfig()
        assert config.is_development is True
        assert config.plugins_allow_unsigned == ("acme-panel", "acme-datasource")

    def test_dotenv_file(self, tmp_path):
        (tmp_path / ".env").write_text("PLUGINGATE_PLUGINS_ALLOW_UNSIGNED=from-dotenv\n")
        config = GateConfig()
        assert config.plugins_allow_unsigned == ("from-dotenv",)

    def test_frozen(self):
        config = GateConfig()
        with pytest.raises(Exception):
            config.environment = "development"

    def test_log_level_normalized(self):
        assert GateConfig(log_level=" debug ").log_level == "DEBUG"
        assert GateConfig(log_level="warning").log_level == "WARNING"

    def test_unknown_log_level_rejected(self):
        with pytest.raises(ValidationError, match="Unknown log level"):
            GateConfig(log_level="verbose")

    def test_unknown_log_level_from_env_rejected(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("PLUGINGATE_LOG_LEVEL", "verbose")
        with pytest.raises(ValidationError):
            GateConfig()
