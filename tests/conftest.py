"""Shared test fixtures for plugingate."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from plugingate.config import GateConfig
from plugingate.models.plugin import PluginClass, PluginDescriptor, SignatureStatus
from plugingate.signature.validator import SignatureValidator


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Keep PLUGINGATE_* variables and stray .env files out of every test."""
    for name in ("PLUGINGATE_ENVIRONMENT", "PLUGINGATE_PLUGINS_ALLOW_UNSIGNED", "PLUGINGATE_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def production_config() -> GateConfig:
    """Production policy with an empty allow-list."""
    return GateConfig(environment="production")


@pytest.fixture
def validator(production_config: GateConfig) -> SignatureValidator:
    """A validator with the strictest configuration and no condition."""
    return SignatureValidator(production_config)


@pytest.fixture
def make_plugin() -> Callable[..., PluginDescriptor]:
    """Factory fixture: build a PluginDescriptor with sensible defaults."""

    def _factory(
        plugin_id: str = "test-plugin",
        signature: SignatureStatus | str = SignatureStatus.UNSIGNED,
        **overrides: Any,
    ) -> PluginDescriptor:
        defaults: dict[str, Any] = {
            "plugin_class": PluginClass.EXTERNAL,
            "plugin_dir": f"/var/lib/plugins/{plugin_id}",
        }
        defaults.update(overrides)
        return PluginDescriptor(plugin_id, signature, **defaults)

    return _factory
