"""Signature policy: the per-plugin decision and the top-down tree walk."""

from plugingate.signature.tree import iter_top_down, validate_tree
from plugingate.signature.validator import SignatureValidator, UnsignedPluginCondition

__all__ = ["SignatureValidator", "UnsignedPluginCondition", "iter_top_down", "validate_tree"]
