"""Plugin inventory: reads pre-computed signature results from JSON.

Signature computation happens elsewhere; its results are handed over as a
document like::

    {
      "plugins": [
        {
          "id": "acme-app",
          "signature": "valid",
          "signature_type": "commercial",
          "signature_org": "Acme",
          "class": "external",
          "plugin_dir": "/var/lib/plugins/acme-app",
          "children": [
            {"id": "acme-panel", "signature": "unsigned"}
          ]
        }
      ]
    }

A missing ``signature`` is read as an empty, unrecognized status.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from plugingate.models.plugin import PluginClass, PluginDescriptor

logger = logging.getLogger(__name__)


class InventoryEntry(BaseModel):
    """One plugin as it appears in an inventory document."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(min_length=1)
    signature: str = ""
    signature_type: str | None = None
    signature_org: str = ""
    plugin_class: PluginClass = Field(default=PluginClass.EXTERNAL, alias="class")
    plugin_dir: str = ""
    children: list[InventoryEntry] = Field(default_factory=list)


class InventoryDocument(BaseModel):
    model_config = ConfigDict(frozen=True)

    plugins: list[InventoryEntry] = Field(default_factory=list)


def _build(entry: InventoryEntry, seen: set[str]) -> PluginDescriptor:
    if entry.id in seen:
        raise ValueError(f"Duplicate plugin id '{entry.id}' in inventory.")
    seen.add(entry.id)
    descriptor = PluginDescriptor(
        id=entry.id,
        signature=entry.signature,
        signature_type=entry.signature_type,
        signature_org=entry.signature_org,
        plugin_class=entry.plugin_class,
        plugin_dir=entry.plugin_dir,
    )
    for child in entry.children:
        descriptor.add_child(_build(child, seen))
    return descriptor


def parse_inventory(data: dict[str, Any]) -> list[PluginDescriptor]:
    """Build descriptor trees from an already-decoded inventory document.

    Returns
    -------
    list[PluginDescriptor]
        The root plugins, with children attached.

    Raises
    ------
    ValueError
        If the document does not match the inventory schema or repeats a
        plugin id.
    """
    try:
        document = InventoryDocument.model_validate(data)
    except ValidationError as exc:
        raise ValueError(f"Malformed plugin inventory: {exc}") from exc

    seen: set[str] = set()
    roots = [_build(entry, seen) for entry in document.plugins]
    logger.debug("Parsed inventory: %d root(s), %d plugin(s).", len(roots), len(seen))
    return roots


def load_inventory(path: Path) -> list[PluginDescriptor]:
    """Read an inventory JSON file and build its descriptor trees.

    Raises
    ------
    FileNotFoundError
        If *path* does not exist.
    ValueError
        If the file is not valid JSON or not a valid inventory.
    """
    if not path.exists():
        raise FileNotFoundError(f"Plugin inventory not found: {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Plugin inventory {path} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Plugin inventory {path} must be a JSON object.")
    return parse_inventory(data)
