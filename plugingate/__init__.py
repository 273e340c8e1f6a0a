"""plugingate: signature trust gate for discovered plugins.

Decides, per plugin, whether an already-computed signature status is good
enough to load it:
  - Valid signatures pass; invalid, modified and unrecognized ones fail closed
  - Nested plugins inherit signature details from their parent
  - Core and bundled plugins are trusted implicitly
  - Unsigned plugins run only in development, when allow-listed, or when a
    caller-supplied condition says so
"""

__version__ = "0.1.0"
__description__ = "Signature validation policy for plugin loading"

from plugingate.config import GateConfig
from plugingate.models.errors import ErrorCode, PluginSignatureError
from plugingate.models.plugin import (
    PluginClass,
    PluginDescriptor,
    SignatureStatus,
    SignatureType,
)
from plugingate.signature.tree import validate_tree
from plugingate.signature.validator import SignatureValidator

__all__ = [
    "GateConfig",
    "ErrorCode",
    "PluginSignatureError",
    "PluginClass",
    "PluginDescriptor",
    "SignatureStatus",
    "SignatureType",
    "SignatureValidator",
    "validate_tree",
    "__version__",
]
