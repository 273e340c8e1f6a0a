"""Plugin descriptors, signature errors and validation reports."""

from plugingate.models.errors import ErrorCode, PluginSignatureError
from plugingate.models.plugin import (
    PluginClass,
    PluginDescriptor,
    SignatureStatus,
    SignatureType,
)
from plugingate.models.reports import PluginDecision, ValidationReport

__all__ = [
    "ErrorCode",
    "PluginSignatureError",
    "PluginClass",
    "PluginDescriptor",
    "SignatureStatus",
    "SignatureType",
    "PluginDecision",
    "ValidationReport",
]
