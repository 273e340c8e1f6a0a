"""Top-down validation of plugin trees.

Nested plugins inherit their parent's signature during validation, so a
parent has to be settled before any of its children is looked at.  Walking
each tree in pre-order guarantees that.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from plugingate.models.plugin import PluginDescriptor, enum_value
from plugingate.models.reports import PluginDecision, ValidationReport
from plugingate.signature.validator import SignatureValidator

logger = logging.getLogger(__name__)


def iter_top_down(roots: Iterable[PluginDescriptor]) -> Iterator[PluginDescriptor]:
    """Yield every plugin in *roots*, each parent before its descendants."""
    for root in roots:
        yield from root.walk()


def validate_tree(
    validator: SignatureValidator,
    roots: Iterable[PluginDescriptor],
) -> ValidationReport:
    """Validate all plugins under *roots* and collect the decisions.

    A rejected parent does not stop its children from being validated; they
    inherit its status and are judged on it.

    Examples
    --------
    >>> from plugingate.config import GateConfig
    >>> root = PluginDescriptor("app", "valid")
    >>> _ = root.add_child(PluginDescriptor("app-panel", "unsigned"))
    >>> validate_tree(SignatureValidator(GateConfig()), [root]).allowed_ids
    ['app', 'app-panel']
    """
    decisions: list[PluginDecision] = []
    for plugin in iter_top_down(roots):
        err = validator.validate(plugin)
        parent = plugin.parent
        decisions.append(
            PluginDecision(
                plugin_id=plugin.id,
                parent_id=parent.id if parent is not None else None,
                plugin_class=enum_value(plugin.plugin_class),
                signature=enum_value(plugin.signature),
                signature_type=enum_value(plugin.signature_type),
                signature_org=plugin.signature_org,
                allowed=err is None,
                error_code=enum_value(err.error_code) if err is not None else "",
                message=str(err) if err is not None else "",
            )
        )
        if err is not None:
            logger.info("Rejected plugin '%s': %s", plugin.id, err)

    report = ValidationReport(decisions=decisions)
    logger.debug(
        "Validated %d plugin(s): %d allowed, %d rejected.",
        len(report.decisions), len(report.allowed_ids), len(report.rejected),
    )
    return report
