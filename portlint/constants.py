"""Shared constants for portlint.

Vocabulary URIs used by the rules and the RDF store, plus the built-in
vocabulary that is always considered valid even when the loaded graphs do
not ship the LV2 specification bundles.
"""

from __future__ import annotations

# Namespaces
LV2_CORE = "http://lv2plug.in/ns/lv2core#"
LV2_ATOM = "http://lv2plug.in/ns/ext/atom#"
LV2_EVENT = "http://lv2plug.in/ns/ext/event#"
LV2_MORPH = "http://lv2plug.in/ns/ext/morph#"
LV2_PORT_GROUPS = "http://lv2plug.in/ns/ext/port-groups#"
LV2_PORT_PROPS = "http://lv2plug.in/ns/ext/port-props#"
RDF = "http://www.w3.org/1999/02/22-rdf-syntax-ns#"
RDFS = "http://www.w3.org/2000/01/rdf-schema#"

# Core terms
LV2_PLUGIN = LV2_CORE + "Plugin"
LV2_PORT = LV2_CORE + "Port"
LV2_PORT_PROPERTY_CLASS = LV2_CORE + "PortProperty"
LV2_PORT_PREDICATE = LV2_CORE + "port"
LV2_PORT_PROPERTY = LV2_CORE + "portProperty"
LV2_INDEX = LV2_CORE + "index"
LV2_SYMBOL = LV2_CORE + "symbol"
LV2_DEFAULT = LV2_CORE + "default"
LV2_MINIMUM = LV2_CORE + "minimum"
LV2_MAXIMUM = LV2_CORE + "maximum"
LV2_INTEGER = LV2_CORE + "integer"
LV2_TOGGLED = LV2_CORE + "toggled"

LV2_INPUT_PORT = LV2_CORE + "InputPort"
LV2_OUTPUT_PORT = LV2_CORE + "OutputPort"
LV2_AUDIO_PORT = LV2_CORE + "AudioPort"
LV2_CONTROL_PORT = LV2_CORE + "ControlPort"
LV2_CV_PORT = LV2_CORE + "CVPort"
ATOM_PORT = LV2_ATOM + "AtomPort"
EVENT_PORT = LV2_EVENT + "EventPort"
MORPH_PORT = LV2_MORPH + "MorphPort"

RDF_TYPE = RDF + "type"
RDFS_COMMENT = RDFS + "comment"
RDFS_SUBCLASS_OF = RDFS + "subClassOf"
PG_GROUP = LV2_PORT_GROUPS + "group"

# Subclasses of lv2:Port defined by the LV2 specification bundles
BUILTIN_PORT_CLASSES: frozenset[str] = frozenset(
    {
        LV2_INPUT_PORT,
        LV2_OUTPUT_PORT,
        LV2_AUDIO_PORT,
        LV2_CONTROL_PORT,
        LV2_CV_PORT,
        ATOM_PORT,
        EVENT_PORT,
        MORPH_PORT,
    }
)

# Instances of lv2:PortProperty defined by lv2core and port-props
BUILTIN_PORT_PROPERTIES: frozenset[str] = frozenset(
    {
        LV2_CORE + "connectionOptional",
        LV2_CORE + "enumeration",
        LV2_INTEGER,
        LV2_CORE + "isSideChain",
        LV2_CORE + "reportsLatency",
        LV2_CORE + "sampleRate",
        LV2_TOGGLED,
        LV2_PORT_PROPS + "causesArtifacts",
        LV2_PORT_PROPS + "continuousCV",
        LV2_PORT_PROPS + "discreteCV",
        LV2_PORT_PROPS + "expensive",
        LV2_PORT_PROPS + "hasStrictBounds",
        LV2_PORT_PROPS + "logarithmic",
        LV2_PORT_PROPS + "notAutomatic",
        LV2_PORT_PROPS + "notOnGUI",
        LV2_PORT_PROPS + "trigger",
    }
)

# Width of the rule identifier column in text reports
RULE_ID_WIDTH: int = 16

# Config file name (looked up in the working directory)
CONFIG_FILENAME = ".portlint.yaml"
