"""Signature validator: decides whether a discovered plugin may be loaded.

The decision is a short-circuiting sequence:

1. A valid signature is accepted outright.
2. A nested plugin takes over its parent's signature details, unless it is a
   core plugin or internal.  Inheriting a valid signature is accepted.
3. Core and bundled plugins are accepted whatever their status.
4. Otherwise the status decides: unsigned plugins go through the unsigned
   policy, invalid and modified signatures are rejected, and anything else is
   rejected as unrecognized.

Inheritance writes the parent's values into the child descriptor so every
later consumer sees the inherited state.  Parents must therefore be validated
before their children; ``plugingate.signature.tree.validate_tree`` does this.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from plugingate.config import GateConfig
from plugingate.models.errors import PluginSignatureError
from plugingate.models.plugin import PluginDescriptor, SignatureStatus, enum_value

logger = logging.getLogger(__name__)

# Replaces the configured unsigned policy when supplied.  Validation only runs
# when plugins start, so plugins already running are not re-checked if the
# condition later changes its answer.
UnsignedPluginCondition = Callable[[PluginDescriptor], bool]


class SignatureValidator:
    """Applies the signature policy to plugin descriptors.

    Parameters
    ----------
    config:
        Policy configuration (environment and unsigned allow-list).
    allow_unsigned:
        Optional condition deciding whether an unsigned plugin may run.  When
        given, its answer is final and the configuration is not consulted.

    Examples
    --------
    >>> validator = SignatureValidator(GateConfig(plugins_allow_unsigned="p1"))
    >>> validator.validate(PluginDescriptor("p1", SignatureStatus.UNSIGNED)) is None
    True
    >>> validator.validate(PluginDescriptor("p2", SignatureStatus.UNSIGNED))
    PluginSignatureError(plugin_id='p2', signature_status='unsigned')
    """

    def __init__(
        self,
        config: GateConfig,
        allow_unsigned: UnsignedPluginCondition | None = None,
    ) -> None:
        self._config = config
        self._allow_unsigned_condition = allow_unsigned

    @property
    def config(self) -> GateConfig:
        return self._config

    def validate(self, plugin: PluginDescriptor) -> PluginSignatureError | None:
        """Return ``None`` if *plugin* may load, else the reason it may not.

        May overwrite the signature fields of a nested plugin with its
        parent's.
        """
        if plugin.signature == SignatureStatus.VALID:
            logger.debug("Plugin '%s' has a valid signature.", plugin.id)
            return None

        parent = plugin.parent
        if parent is not None:
            if plugin.is_core_plugin or plugin.signature == SignatureStatus.INTERNAL:
                logger.debug(
                    "Not inheriting signature of '%s' for nested plugin '%s' "
                    "(signature=%s, core=%s).",
                    parent.id, plugin.id, enum_value(plugin.signature), plugin.is_core_plugin,
                )
            else:
                logger.debug(
                    "Nested plugin '%s' inherits signature %s from '%s' (was %s).",
                    plugin.id, enum_value(parent.signature), parent.id, enum_value(plugin.signature),
                )
                plugin.signature = parent.signature
                plugin.signature_type = parent.signature_type
                plugin.signature_org = parent.signature_org
                if plugin.signature == SignatureStatus.VALID:
                    logger.debug("Plugin '%s' has a valid signature (inherited).", plugin.id)
                    return None

        if plugin.is_core_plugin or plugin.is_bundled_plugin:
            return None

        if plugin.signature == SignatureStatus.UNSIGNED:
            if not self.allow_unsigned(plugin):
                logger.debug("Plugin '%s' is unsigned.", plugin.id)
                return PluginSignatureError(plugin.id, SignatureStatus.UNSIGNED)
            logger.warning(
                "Running an unsigned plugin '%s' from %s.",
                plugin.id, plugin.plugin_dir or "<unknown dir>",
            )
            return None
        elif plugin.signature == SignatureStatus.INVALID:
            logger.debug("Plugin '%s' has an invalid signature.", plugin.id)
            return PluginSignatureError(plugin.id, SignatureStatus.INVALID)
        elif plugin.signature == SignatureStatus.MODIFIED:
            logger.debug("Plugin '%s' has a modified signature.", plugin.id)
            return PluginSignatureError(plugin.id, SignatureStatus.MODIFIED)
        else:
            # Fail closed on anything else, including statuses added later.
            logger.debug(
                "Plugin '%s' has an unrecognized signature state: %r.",
                plugin.id, enum_value(plugin.signature),
            )
            return PluginSignatureError(plugin.id)

    def allow_unsigned(self, plugin: PluginDescriptor) -> bool:
        """Whether the unsigned *plugin* may run anyway."""
        if self._allow_unsigned_condition is not None:
            return self._allow_unsigned_condition(plugin)

        if self._config.is_development:
            return True

        return plugin.id in self._config.plugins_allow_unsigned
