"""In-memory metadata store.

Holds plugin and port descriptions as plain Python data. Useful for
embedding portlint in tools that already parsed their metadata, and for
tests that should not depend on RDF parsing.

Example:
    store = MemoryStore()
    port = store.add_port(
        "urn:example:amp",
        index=0,
        symbol="gain",
        classes=[LV2_INPUT_PORT, LV2_CONTROL_PORT],
        literals={LV2_DEFAULT: TypedLiteral.float_(0.5)},
    )
    report = validate_port(store, port)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from portlint.constants import BUILTIN_PORT_CLASSES, BUILTIN_PORT_PROPERTIES
from portlint.errors import PluginNotFoundError
from portlint.store.protocol import PortRef, TypedLiteral

logger = logging.getLogger(__name__)


@dataclass
class _PortRecord:
    classes: list[str] = field(default_factory=list)
    properties: list[str] = field(default_factory=list)
    literals: dict[str, TypedLiteral] = field(default_factory=dict)


class MemoryStore:
    """MetadataStore and PortSource backed by dictionaries.

    Args:
        port_classes: Valid lv2:Port subclasses. Defaults to the built-in
            LV2 vocabulary.
        port_properties: Valid lv2:PortProperty instances. Defaults to the
            built-in LV2 vocabulary.
    """

    def __init__(
        self,
        *,
        port_classes: Iterable[str] | None = None,
        port_properties: Iterable[str] | None = None,
    ) -> None:
        self._port_classes = frozenset(
            BUILTIN_PORT_CLASSES if port_classes is None else port_classes
        )
        self._port_properties = frozenset(
            BUILTIN_PORT_PROPERTIES if port_properties is None else port_properties
        )
        self._plugins: dict[str, list[PortRef]] = {}
        self._ports: dict[object, _PortRecord] = {}

    def add_plugin(self, plugin_uri: str) -> None:
        """Register a plugin with no ports (no-op if already known)."""
        self._plugins.setdefault(plugin_uri, [])

    def add_port(
        self,
        plugin_uri: str,
        *,
        index: int,
        symbol: str,
        classes: Iterable[str] = (),
        properties: Iterable[str] = (),
        literals: Mapping[str, TypedLiteral] | None = None,
    ) -> PortRef:
        """Describe a port and return its reference.

        Classes and properties keep their insertion order, which is the
        order the membership rules scan them in.

        Raises:
            ValueError: If the plugin already has a port with this index.
        """
        port = PortRef(index=index, symbol=symbol, node=(plugin_uri, index))
        if port.node in self._ports:
            raise ValueError(f"<{plugin_uri}> already has a port with index {index}")
        self._plugins.setdefault(plugin_uri, []).append(port)
        self._ports[port.node] = _PortRecord(
            classes=list(dict.fromkeys(classes)),
            properties=list(dict.fromkeys(properties)),
            literals=dict(literals or {}),
        )
        logger.debug("Added port %d (%s) to %s", index, symbol, plugin_uri)
        return port

    def _record(self, port: PortRef) -> _PortRecord:
        return self._ports.get(port.node, _PortRecord())

    # PortSource

    def get_plugins(self) -> list[str]:
        return sorted(self._plugins)

    def get_ports(self, plugin_uri: str) -> list[PortRef]:
        if plugin_uri not in self._plugins:
            raise PluginNotFoundError(plugin_uri)
        return sorted(self._plugins[plugin_uri], key=lambda p: p.index)

    # MetadataStore

    def has_class(self, port: PortRef, class_uri: str) -> bool:
        return class_uri in self._record(port).classes

    def get_classes(self, port: PortRef) -> list[str]:
        return list(self._record(port).classes)

    def valid_port_classes(self) -> frozenset[str]:
        return self._port_classes

    def has_property(self, port: PortRef, prop_uri: str) -> bool:
        return prop_uri in self._record(port).properties

    def allowed_port_properties(self) -> frozenset[str]:
        return self._port_properties

    def get_port_properties(self, port: PortRef) -> list[str]:
        return list(self._record(port).properties)

    def get_literal(self, port: PortRef, predicate: str) -> TypedLiteral | None:
        return self._record(port).literals.get(predicate)
