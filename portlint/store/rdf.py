"""RDF metadata store backed by rdflib.

Loads one or more Turtle files (a plugin's manifest.ttl, its description,
optionally the LV2 specification bundles) into a single rdflib Graph and
answers the typed port queries of the validation engine.

Vocabulary (valid port classes and port properties) is the union of the
built-in LV2 terms and whatever the loaded graphs declare. It is computed
once per store, on first use.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from decimal import Decimal
from functools import cached_property
from pathlib import Path

from rdflib import XSD, BNode, Graph, Literal, URIRef
from rdflib.term import Node
from rdflib.util import guess_format

from portlint.constants import (
    BUILTIN_PORT_CLASSES,
    BUILTIN_PORT_PROPERTIES,
    LV2_INDEX,
    LV2_PLUGIN,
    LV2_PORT,
    LV2_PORT_PREDICATE,
    LV2_PORT_PROPERTY,
    LV2_PORT_PROPERTY_CLASS,
    LV2_SYMBOL,
    RDF_TYPE,
    RDFS_SUBCLASS_OF,
)
from portlint.errors import PluginNotFoundError, StoreLoadError
from portlint.store.protocol import PortRef, TypedLiteral

logger = logging.getLogger(__name__)

# Plain URIRefs: Namespace attribute access collides with str methods (index)
TYPE = URIRef(RDF_TYPE)
SUBCLASS_OF = URIRef(RDFS_SUBCLASS_OF)
PLUGIN = URIRef(LV2_PLUGIN)
PORT = URIRef(LV2_PORT)
PORT_PROPERTY_CLASS = URIRef(LV2_PORT_PROPERTY_CLASS)
PORT_PREDICATE = URIRef(LV2_PORT_PREDICATE)
PORT_PROPERTY = URIRef(LV2_PORT_PROPERTY)
INDEX = URIRef(LV2_INDEX)
SYMBOL = URIRef(LV2_SYMBOL)

_INT_DATATYPES = frozenset(
    {
        XSD.integer,
        XSD.int,
        XSD.long,
        XSD.short,
        XSD.byte,
        XSD.nonNegativeInteger,
        XSD.nonPositiveInteger,
        XSD.positiveInteger,
        XSD.negativeInteger,
        XSD.unsignedLong,
        XSD.unsignedInt,
        XSD.unsignedShort,
        XSD.unsignedByte,
    }
)
_FLOAT_DATATYPES = frozenset({XSD.decimal, XSD.double, XSD.float})
# rdflib reads any other lexical form as False
_BOOL_LEXICAL = frozenset({"true", "false", "1", "0"})


def to_typed_literal(node: Node) -> TypedLiteral:
    """Convert an rdflib term to a TypedLiteral.

    Ill-typed literals (e.g. "abc"^^xsd:integer) fall back to STRING so that
    the coercion rules report them as type mismatches.
    """
    if isinstance(node, URIRef):
        return TypedLiteral.uri(str(node))
    if isinstance(node, BNode):
        return TypedLiteral.blank(str(node))
    if isinstance(node, Literal):
        datatype = node.datatype
        value = node.toPython()
        try:
            if datatype in _INT_DATATYPES:
                return TypedLiteral.int_(int(value))
            if datatype in _FLOAT_DATATYPES:
                if isinstance(value, Decimal | int | float):
                    return TypedLiteral.float_(float(value))
            elif datatype == XSD.boolean and str(node).strip() in _BOOL_LEXICAL:
                return TypedLiteral.bool_(str(node).strip() in ("true", "1"))
        except (TypeError, ValueError):
            pass
        return TypedLiteral.string(str(node))
    return TypedLiteral.string(str(node))


class RdfMetadataStore:
    """MetadataStore and PortSource over an rdflib Graph.

    Args:
        graph: Graph holding plugin descriptions (and optionally vocabulary).
    """

    def __init__(self, graph: Graph) -> None:
        self.graph = graph

    @classmethod
    def from_paths(cls, paths: Iterable[Path]) -> RdfMetadataStore:
        """Parse metadata files into a single graph.

        The serialization is guessed from each file suffix, Turtle otherwise.

        Raises:
            StoreLoadError: If a file cannot be read or parsed.
        """
        graph = Graph()
        for path in paths:
            fmt = guess_format(str(path)) or "turtle"
            logger.debug("Parsing %s as %s", path, fmt)
            try:
                graph.parse(str(path), format=fmt)
            except FileNotFoundError as e:
                raise StoreLoadError(str(path), "file not found") from e
            except Exception as e:
                # rdflib parsers raise a mix of SyntaxError, ValueError and
                # plugin-specific exceptions with no common base
                raise StoreLoadError(str(path), str(e)) from e
        logger.info("Loaded %d triples", len(graph))
        return cls(graph)

    @classmethod
    def from_turtle(cls, data: str) -> RdfMetadataStore:
        """Build a store from Turtle text.

        Raises:
            StoreLoadError: If the text cannot be parsed.
        """
        graph = Graph()
        try:
            graph.parse(data=data, format="turtle")
        except Exception as e:
            raise StoreLoadError("<string>", str(e)) from e
        return cls(graph)

    # Vocabulary

    @cached_property
    def _port_classes(self) -> frozenset[str]:
        roots = {PORT} | {URIRef(c) for c in BUILTIN_PORT_CLASSES}
        found: set[str] = set(BUILTIN_PORT_CLASSES)
        for root in roots:
            for sub in self.graph.transitive_subjects(SUBCLASS_OF, root):
                if isinstance(sub, URIRef) and sub != PORT:
                    found.add(str(sub))
        logger.debug("Resolved %d valid port classes", len(found))
        return frozenset(found)

    @cached_property
    def _port_properties(self) -> frozenset[str]:
        declared = {
            str(p)
            for p in self.graph.subjects(TYPE, PORT_PROPERTY_CLASS)
            if isinstance(p, URIRef)
        }
        return frozenset(BUILTIN_PORT_PROPERTIES | declared)

    def valid_port_classes(self) -> frozenset[str]:
        return self._port_classes

    def allowed_port_properties(self) -> frozenset[str]:
        return self._port_properties

    # PortSource

    def get_plugins(self) -> list[str]:
        return sorted(
            str(p) for p in self.graph.subjects(TYPE, PLUGIN) if isinstance(p, URIRef)
        )

    def get_ports(self, plugin_uri: str) -> list[PortRef]:
        plugin = URIRef(plugin_uri)
        if (plugin, TYPE, PLUGIN) not in self.graph:
            raise PluginNotFoundError(plugin_uri)

        ports: list[PortRef] = []
        for node in self.graph.objects(plugin, PORT_PREDICATE):
            index = self.graph.value(node, INDEX)
            symbol = self.graph.value(node, SYMBOL)
            try:
                port_index = int(index.toPython()) if isinstance(index, Literal) else -1
            except (TypeError, ValueError):
                port_index = -1
            if port_index < 0:
                logger.warning("Port %s of <%s> has no usable lv2:index", node, plugin_uri)
            ports.append(
                PortRef(
                    index=port_index,
                    symbol=str(symbol) if symbol is not None else "",
                    node=node,
                )
            )
        return sorted(ports, key=lambda p: (p.index, p.symbol))

    # MetadataStore

    def has_class(self, port: PortRef, class_uri: str) -> bool:
        return (port.node, TYPE, URIRef(class_uri)) in self.graph

    def get_classes(self, port: PortRef) -> list[str]:
        return sorted(str(c) for c in self.graph.objects(port.node, TYPE))

    def has_property(self, port: PortRef, prop_uri: str) -> bool:
        return (port.node, PORT_PROPERTY, URIRef(prop_uri)) in self.graph

    def get_port_properties(self, port: PortRef) -> list[str]:
        return sorted(str(p) for p in self.graph.objects(port.node, PORT_PROPERTY))

    def get_literal(self, port: PortRef, predicate: str) -> TypedLiteral | None:
        node = self.graph.value(port.node, URIRef(predicate))
        if node is None:
            return None
        return to_typed_literal(node)
