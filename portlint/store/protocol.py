"""Metadata store protocol consumed by the validation engine.

The engine never parses RDF itself. It asks a MetadataStore typed questions
about a single port ("is it an lv2:ControlPort", "what is its lv2:default")
and gets back plain Python values or TypedLiteral instances.

Two implementations ship with portlint:
- RdfMetadataStore: backed by an rdflib Graph loaded from Turtle files
- MemoryStore: plain Python data, for embedding and tests

Any object implementing these methods can be passed to the engine.
"""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass
from enum import Enum
from typing import Protocol, runtime_checkable


class LiteralKind(Enum):
    """Tag of a TypedLiteral."""

    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    STRING = "string"
    URI = "uri"
    BLANK = "blank"


@dataclass(frozen=True)
class TypedLiteral:
    """A tagged value fetched from the metadata store.

    Attributes:
        kind: What the value was declared as.
        value: The Python value (int, float, bool or str).
    """

    kind: LiteralKind
    value: int | float | bool | str

    @classmethod
    def int_(cls, value: int) -> TypedLiteral:
        return cls(LiteralKind.INT, int(value))

    @classmethod
    def float_(cls, value: float) -> TypedLiteral:
        return cls(LiteralKind.FLOAT, float(value))

    @classmethod
    def bool_(cls, value: bool) -> TypedLiteral:
        return cls(LiteralKind.BOOL, bool(value))

    @classmethod
    def string(cls, value: str) -> TypedLiteral:
        return cls(LiteralKind.STRING, str(value))

    @classmethod
    def uri(cls, value: str) -> TypedLiteral:
        return cls(LiteralKind.URI, str(value))

    @classmethod
    def blank(cls, value: str) -> TypedLiteral:
        return cls(LiteralKind.BLANK, str(value))

    @property
    def is_int(self) -> bool:
        return self.kind is LiteralKind.INT

    @property
    def is_float(self) -> bool:
        return self.kind is LiteralKind.FLOAT

    @property
    def is_bool(self) -> bool:
        return self.kind is LiteralKind.BOOL

    @property
    def is_string(self) -> bool:
        return self.kind is LiteralKind.STRING

    @property
    def is_uri(self) -> bool:
        return self.kind is LiteralKind.URI

    def as_int(self) -> int:
        return int(self.value)

    def as_float(self) -> float:
        return float(self.value)

    def as_bool(self) -> bool:
        return bool(self.value)

    def as_string(self) -> str:
        return str(self.value)

    def as_uri(self) -> str:
        return str(self.value)

    def numeric(self) -> float | None:
        """Numeric reading of the literal regardless of its tag.

        Returns:
            The value as float for INT and FLOAT, 1.0/0.0 for BOOL,
            None for every other kind.
        """
        if self.kind in (LiteralKind.INT, LiteralKind.FLOAT):
            return float(self.value)
        if self.kind is LiteralKind.BOOL:
            return 1.0 if self.value else 0.0
        return None


@dataclass(frozen=True)
class PortRef:
    """Identifies one port of one plugin.

    Attributes:
        index: The port's lv2:index.
        symbol: The port's lv2:symbol.
        node: Store-specific key used to look the port up (an rdflib node
            for RdfMetadataStore, any hashable for MemoryStore).
    """

    index: int
    symbol: str
    node: Hashable


@runtime_checkable
class MetadataStore(Protocol):
    """Typed lookups about a port, as required by the validation rules."""

    def has_class(self, port: PortRef, class_uri: str) -> bool:
        """True if the port is declared an instance of class_uri."""
        ...

    def get_classes(self, port: PortRef) -> list[str]:
        """All classes asserted on the port, in a deterministic order."""
        ...

    def valid_port_classes(self) -> frozenset[str]:
        """Every known subclass of lv2:Port. Computed once per store."""
        ...

    def has_property(self, port: PortRef, prop_uri: str) -> bool:
        """True if the port carries the given lv2:portProperty."""
        ...

    def allowed_port_properties(self) -> frozenset[str]:
        """Every known lv2:PortProperty instance. Computed once per store."""
        ...

    def get_port_properties(self, port: PortRef) -> list[str]:
        """All lv2:portProperty values of the port, in a deterministic order."""
        ...

    def get_literal(self, port: PortRef, predicate: str) -> TypedLiteral | None:
        """Value of predicate on the port, or None if absent."""
        ...


@runtime_checkable
class PortSource(Protocol):
    """Plugin and port enumeration used by the plugin-level orchestrator."""

    def get_plugins(self) -> list[str]:
        """URIs of every plugin described by the store, sorted."""
        ...

    def get_ports(self, plugin_uri: str) -> list[PortRef]:
        """Ports of a plugin sorted by index.

        Raises:
            PluginNotFoundError: If the plugin is unknown to the store.
        """
        ...


@runtime_checkable
class PortStore(MetadataStore, PortSource, Protocol):
    """A store that can both enumerate ports and answer port queries."""
