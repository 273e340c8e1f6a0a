"""Plugin descriptor: the node the signature gate decides on.

Descriptors are produced by plugin discovery with their signature fields
already computed.  The discovery side owns the tree: a parent holds its
``children`` list, while each child only keeps a weak reference back to its
parent.  The signature gate may rewrite a child's signature fields once, when
it inherits them from the parent.
"""

from __future__ import annotations

import weakref
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import TypeVar

_E = TypeVar("_E", bound=Enum)


class SignatureStatus(str, Enum):
    """Outcome of signature verification, computed before the gate runs.

    Descriptors may also carry a raw string outside this set; the gate treats
    any such value as unrecognized and rejects the plugin.
    """

    VALID = "valid"
    INVALID = "invalid"  # signature present but does not verify
    MODIFIED = "modified"  # files changed after signing
    UNSIGNED = "unsigned"
    INTERNAL = "internal"  # shipped inside the host, never signed


class SignatureType(str, Enum):
    """Who issued the signature.  Carried as metadata; not validated here."""

    GRAFANA = "grafana"
    COMMERCIAL = "commercial"
    COMMUNITY = "community"
    PRIVATE = "private"
    PRIVATE_GLOB = "private-glob"


class PluginClass(str, Enum):
    """How the host classifies a plugin.

    * ``core``: part of the host application, trusted implicitly.
    * ``bundled``: shipped alongside the host, also trusted implicitly.
    * ``external``: installed by an operator; subject to signature policy.
    """

    CORE = "core"
    BUNDLED = "bundled"
    EXTERNAL = "external"


def enum_value(value: object) -> str:
    """Raw string form of an enum member or unrecognized value; ``""`` for ``None``."""
    if value is None:
        return ""
    return str(getattr(value, "value", value))


def _coerce(enum_cls: type[_E], value: _E | str | None) -> _E | str | None:
    """Map *value* onto *enum_cls* when it is a known member, else keep it raw."""
    if value is None or isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        return value


@dataclass(eq=False)
class PluginDescriptor:
    """A discovered plugin and its signature state.

    Examples
    --------
    >>> app = PluginDescriptor("acme-app", SignatureStatus.VALID)
    >>> panel = app.add_child(PluginDescriptor("acme-panel", "unsigned"))
    >>> panel.parent is app
    True
    >>> panel.signature is SignatureStatus.UNSIGNED
    True
    """

    id: str
    signature: SignatureStatus | str
    signature_type: SignatureType | str | None = None
    signature_org: str = ""
    plugin_class: PluginClass = PluginClass.EXTERNAL
    plugin_dir: str = ""  # diagnostics only
    children: list[PluginDescriptor] = field(default_factory=list)
    _parent_ref: weakref.ReferenceType[PluginDescriptor] | None = field(
        default=None, init=False, repr=False
    )

    def __post_init__(self) -> None:
        self.signature = _coerce(SignatureStatus, self.signature)
        self.signature_type = _coerce(SignatureType, self.signature_type)
        # Classification drives hard overrides, so it must be a known value.
        self.plugin_class = PluginClass(self.plugin_class)
        children, self.children = self.children, []
        for child in children:
            self.add_child(child)

    # -- Tree ----------------------------------------------------------------

    @property
    def parent(self) -> PluginDescriptor | None:
        """The plugin this one is nested in, or ``None`` for a root."""
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    def add_child(self, child: PluginDescriptor) -> PluginDescriptor:
        """Nest *child* under this plugin and return it.

        Raises
        ------
        ValueError
            If *child* already has a parent, or nesting it would create a cycle.
        """
        if child.parent is not None:
            raise ValueError(
                f"Plugin '{child.id}' is already nested under '{child.parent.id}'."
            )
        node: PluginDescriptor | None = self
        while node is not None:
            if node is child:
                raise ValueError(f"Nesting plugin '{child.id}' under '{self.id}' creates a cycle.")
            node = node.parent
        child._parent_ref = weakref.ref(self)
        self.children.append(child)
        return child

    def walk(self) -> Iterator[PluginDescriptor]:
        """Yield this plugin, then its descendants, parents before children."""
        yield self
        for child in self.children:
            yield from child.walk()

    # -- Classification ------------------------------------------------------

    @property
    def is_core_plugin(self) -> bool:
        return self.plugin_class == PluginClass.CORE

    @property
    def is_bundled_plugin(self) -> bool:
        return self.plugin_class == PluginClass.BUNDLED
