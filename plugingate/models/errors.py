"""Signature rejection error.

``SignatureValidator.validate`` *returns* a ``PluginSignatureError`` instead of
raising it, so a loader can collect one per rejected plugin and keep going.
Callers that prefer exceptions can simply ``raise`` the returned value.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from plugingate.models.plugin import SignatureStatus


class ErrorCode(str, Enum):
    """Stable codes for surfacing rejections to operators and APIs."""

    SIGNATURE_MISSING = "signatureMissing"
    SIGNATURE_MODIFIED = "signatureModified"
    SIGNATURE_INVALID = "signatureInvalid"


class PluginSignatureError(Exception):
    """A plugin was refused because of its signature status.

    Parameters
    ----------
    plugin_id:
        ID of the rejected plugin.
    signature_status:
        The status that caused the rejection.  ``None`` when the status was
        not one the policy recognizes.

    Examples
    --------
    >>> err = PluginSignatureError("acme-panel", SignatureStatus.MODIFIED)
    >>> str(err)
    "plugin 'acme-panel' has a modified signature"
    >>> err.error_code
    <ErrorCode.SIGNATURE_MODIFIED: 'signatureModified'>
    """

    def __init__(
        self,
        plugin_id: str,
        signature_status: SignatureStatus | None = None,
    ) -> None:
        super().__init__(plugin_id, signature_status)
        self.plugin_id = plugin_id
        self.signature_status = signature_status

    def __str__(self) -> str:
        if self.signature_status == SignatureStatus.INVALID:
            return f"plugin '{self.plugin_id}' has an invalid signature"
        if self.signature_status == SignatureStatus.MODIFIED:
            return f"plugin '{self.plugin_id}' has a modified signature"
        if self.signature_status == SignatureStatus.UNSIGNED:
            return f"plugin '{self.plugin_id}' has no signature"
        return f"plugin '{self.plugin_id}' has an unknown signature state"

    def __repr__(self) -> str:
        status = self.signature_status.value if self.signature_status else None
        return f"PluginSignatureError(plugin_id={self.plugin_id!r}, signature_status={status!r})"

    @property
    def error_code(self) -> ErrorCode | None:
        """Operator-facing code, or ``None`` for an unrecognized status."""
        if self.signature_status == SignatureStatus.INVALID:
            return ErrorCode.SIGNATURE_INVALID
        if self.signature_status == SignatureStatus.MODIFIED:
            return ErrorCode.SIGNATURE_MODIFIED
        if self.signature_status == SignatureStatus.UNSIGNED:
            return ErrorCode.SIGNATURE_MISSING
        return None

    def to_dict(self) -> dict[str, Any]:
        """Serializable form for logs and API responses."""
        return {
            "plugin_id": self.plugin_id,
            "signature_status": self.signature_status.value if self.signature_status else "",
            "error_code": self.error_code.value if self.error_code else "",
            "message": str(self),
        }
