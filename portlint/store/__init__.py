"""Metadata stores for portlint.

The validation engine depends only on the MetadataStore protocol. This
package provides the protocol and two implementations.

Usage:
    from portlint.store import RdfMetadataStore

    store = RdfMetadataStore.from_paths([Path("manifest.ttl"), Path("amp.ttl")])
    for plugin in store.get_plugins():
        ports = store.get_ports(plugin)
"""

from __future__ import annotations

from portlint.store.memory import MemoryStore
from portlint.store.protocol import (
    LiteralKind,
    MetadataStore,
    PortRef,
    PortSource,
    PortStore,
    TypedLiteral,
)
from portlint.store.rdf import RdfMetadataStore

__all__ = [
    "LiteralKind",
    "MemoryStore",
    "MetadataStore",
    "PortRef",
    "PortSource",
    "PortStore",
    "RdfMetadataStore",
    "TypedLiteral",
]
