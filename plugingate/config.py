"""Policy configuration: env-driven, read once at startup.

Reads from a .env file and PLUGINGATE_* environment variables::

    export PLUGINGATE_ENVIRONMENT=development
    export PLUGINGATE_PLUGINS_ALLOW_UNSIGNED=acme-panel,acme-datasource
    export PLUGINGATE_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

import logging
from typing import Annotated, Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEVELOPMENT = "development"
PRODUCTION = "production"


class GateConfig(BaseSettings):
    """Signature policy configuration.

    Frozen once constructed: a validator keeps the instance it was built with
    for its whole lifetime.

    Examples
    --------
    >>> cfg = GateConfig(environment="production", plugins_allow_unsigned="a, b")
    >>> cfg.plugins_allow_unsigned
    ('a', 'b')
    >>> cfg.is_development
    False
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="PLUGINGATE_",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    environment: str = PRODUCTION
    # IDs of plugins permitted to run without a signature.
    # Accepts a comma-separated string from the environment.
    plugins_allow_unsigned: Annotated[tuple[str, ...], NoDecode] = ()
    log_level: str = "INFO"

    @field_validator("plugins_allow_unsigned", mode="before")
    @classmethod
    def _split_plugin_ids(cls, value: Any) -> Any:
        if isinstance(value, str):
            return tuple(part.strip() for part in value.split(",") if part.strip())
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _check_log_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip().upper()
            if not isinstance(logging.getLevelName(value), int):
                raise ValueError(f"Unknown log level: {value!r}")
        return value

    @property
    def is_development(self) -> bool:
        """Whether unsigned plugins are allowed across the board."""
        return self.environment == DEVELOPMENT
