"""Per-plugin decisions collected over a whole plugin tree."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class PluginDecision(BaseModel):
    """Immutable record of the gate's decision for one plugin.

    ``signature`` is the status *after* inheritance, as a plain string so that
    unrecognized values survive serialization unchanged.
    """

    model_config = ConfigDict(frozen=True)

    plugin_id: str
    parent_id: str | None = None
    plugin_class: str
    signature: str
    signature_type: str = ""
    signature_org: str = ""
    allowed: bool
    error_code: str = ""
    message: str = ""


class ValidationReport(BaseModel):
    """Decisions for every plugin in one or more trees, in validation order.

    Examples
    --------
    >>> report = ValidationReport(decisions=[
    ...     PluginDecision(plugin_id="a", plugin_class="external", signature="valid", allowed=True),
    ...     PluginDecision(plugin_id="b", plugin_class="external", signature="unsigned",
    ...                    allowed=False, error_code="signatureMissing"),
    ... ])
    >>> report.allowed_ids
    ['a']
    >>> report.ok
    False
    """

    decisions: list[PluginDecision] = Field(default_factory=list)

    @property
    def allowed_ids(self) -> list[str]:
        return [d.plugin_id for d in self.decisions if d.allowed]

    @property
    def rejected(self) -> list[PluginDecision]:
        return [d for d in self.decisions if not d.allowed]

    @property
    def ok(self) -> bool:
        """Whether every plugin passed the gate."""
        return not self.rejected

    def get(self, plugin_id: str) -> PluginDecision | None:
        for decision in self.decisions:
            if decision.plugin_id == plugin_id:
                return decision
        return None
