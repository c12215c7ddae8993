"""Validation rule base class and built-in port rules.

Each rule checks one aspect of a port description and returns at most one
Finding: the first violation it detects. Rules never raise. A rule may
write derived values into the ValidationContext for later rules; the
registry order in runner.DEFAULT_RULES honours those dependencies:

    Default, Minimum, Maximum  -> write default/minimum/maximum_value
    Range                      -> reads them
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from portlint.constants import (
    EVENT_PORT,
    LV2_CONTROL_PORT,
    LV2_CV_PORT,
    LV2_DEFAULT,
    LV2_INPUT_PORT,
    LV2_INTEGER,
    LV2_MAXIMUM,
    LV2_MINIMUM,
    LV2_PORT,
    LV2_PORT_PROPERTY,
    LV2_TOGGLED,
    PG_GROUP,
    RDFS_COMMENT,
)
from portlint.store.protocol import MetadataStore, PortRef, TypedLiteral
from portlint.validation.context import (
    DEFAULT_FALLBACK,
    MAXIMUM_FALLBACK,
    MINIMUM_FALLBACK,
    ValidationContext,
)
from portlint.validation.results import Finding, Severity


class ValidationRule(ABC):
    """Base class for all port rules.

    Subclasses must define:
        name: Identifier shown in reports (e.g. "Class", "Default")
        description: Human-readable explanation for ``portlint rules``

    Subclasses must implement:
        check(): Run the rule against one port and return a finding or None
    """

    name: str
    description: str

    @abstractmethod
    def check(self, store: MetadataStore, context: ValidationContext) -> Finding | None:
        """Run this rule against the port in context.

        Args:
            store: Metadata store to query.
            context: Per-port state; context.port is the port under test.

        Returns:
            A Finding for the first violation, or None if the port passes.
        """
        ...

    def _fail(self, message: str, reference: str) -> Finding:
        return Finding(severity=Severity.FAIL, message=message, reference=reference)

    def _warn(self, message: str, reference: str) -> Finding:
        return Finding(severity=Severity.WARN, message=message, reference=reference)

    def _note(self, message: str, reference: str) -> Finding:
        return Finding(severity=Severity.NOTE, message=message, reference=reference)


def _is_control_or_cv(store: MetadataStore, port: PortRef) -> bool:
    return store.has_class(port, LV2_CONTROL_PORT) or store.has_class(port, LV2_CV_PORT)


class PortClassRule(ValidationRule):
    """Every rdf:type of the port must be a known lv2:Port subclass.

    Only the first unknown class is reported.
    """

    name = "Class"
    description = "Port classes are subclasses of lv2:Port"

    def check(self, store: MetadataStore, context: ValidationContext) -> Finding | None:
        valid = store.valid_port_classes()
        for class_uri in store.get_classes(context.port):
            if class_uri not in valid:
                context.last_urn = class_uri
                return self._fail("lv2:Port class <{urn}> not valid", LV2_PORT)
        return None


class PortPropertiesRule(ValidationRule):
    """Every lv2:portProperty of the port must be a known lv2:PortProperty.

    Only the first unknown property is reported.
    """

    name = "PortProperties"
    description = "Port properties are instances of lv2:PortProperty"

    def check(self, store: MetadataStore, context: ValidationContext) -> Finding | None:
        allowed = store.allowed_port_properties()
        for prop_uri in store.get_port_properties(context.port):
            if prop_uri not in allowed:
                context.last_urn = prop_uri
                return self._fail("lv2:portProperty <{urn}> not valid", LV2_PORT_PROPERTY)
        return None


NOT_AN_INTEGER = "not an integer"
NOT_A_BOOL = "not a bool"
NOT_A_FLOAT = "not a float"


def coerce_numeric(
    literal: TypedLiteral, *, is_integer: bool, is_toggled: bool
) -> tuple[float | None, str | None]:
    """Read a literal as a port value and check it against the port's type.

    The integer flag wins over the toggled flag.

    Args:
        literal: Value fetched from the store.
        is_integer: Port carries lv2:integer.
        is_toggled: Port carries lv2:toggled.

    Returns:
        (numeric value or None, problem or None), where problem is one of
        NOT_AN_INTEGER, NOT_A_BOOL, NOT_A_FLOAT.
    """
    value = literal.numeric()

    if is_integer:
        ok = literal.is_int or (literal.is_float and literal.as_float().is_integer())
        problem = NOT_AN_INTEGER
    elif is_toggled:
        ok = (
            literal.is_bool
            or (literal.is_int and literal.as_int() in (0, 1))
            or (literal.is_float and literal.as_float() in (0.0, 1.0))
        )
        problem = NOT_A_BOOL
    else:
        ok = literal.is_int or literal.is_float
        problem = NOT_A_FLOAT

    return value, None if ok else problem


@dataclass(frozen=True)
class NumericSpec:
    """Parameters of one numeric rule instance.

    Attributes:
        name: Rule identifier.
        label: Term name used in messages (e.g. "lv2:default").
        predicate: Predicate URI of the literal to fetch.
        field: ValidationContext attribute receiving the value.
        fallback: Value of that attribute when the literal is unusable.
        skip_toggled: Skip ports flagged lv2:toggled.
    """

    name: str
    label: str
    predicate: str
    field: str
    fallback: float
    skip_toggled: bool


DEFAULT_SPEC = NumericSpec(
    "Default", "lv2:default", LV2_DEFAULT, "default_value", DEFAULT_FALLBACK, False
)
MINIMUM_SPEC = NumericSpec(
    "Minimum", "lv2:minimum", LV2_MINIMUM, "minimum_value", MINIMUM_FALLBACK, True
)
MAXIMUM_SPEC = NumericSpec(
    "Maximum", "lv2:maximum", LV2_MAXIMUM, "maximum_value", MAXIMUM_FALLBACK, True
)


class NumericRule(ValidationRule):
    """Resolve a numeric literal of an input control/CV port.

    One class backs the Default, Minimum and Maximum rules; the NumericSpec
    decides which literal is read and which context field is written.
    """

    def __init__(self, spec: NumericSpec) -> None:
        self.spec = spec
        self.name = spec.name
        self.description = f"{spec.label} is present and matches the port type"

    def check(self, store: MetadataStore, context: ValidationContext) -> Finding | None:
        spec = self.spec
        port = context.port
        setattr(context, spec.field, spec.fallback)

        is_integer = store.has_property(port, LV2_INTEGER)
        is_toggled = store.has_property(port, LV2_TOGGLED)

        if not (_is_control_or_cv(store, port) and store.has_class(port, LV2_INPUT_PORT)):
            return None
        if spec.skip_toggled and is_toggled:
            return None

        literal = store.get_literal(port, spec.predicate)
        if literal is None:
            return self._warn(f"{spec.label} not found", LV2_PORT)

        value, problem = coerce_numeric(literal, is_integer=is_integer, is_toggled=is_toggled)
        if problem is not None:
            return self._warn(f"{spec.label} {problem}", spec.predicate)

        if value is not None:
            setattr(context, spec.field, value)
        return None


class RangeRule(ValidationRule):
    """minimum <= default <= maximum for control and CV ports.

    Reads the values left in the context by the numeric rules, fallbacks
    included. A missing bound is not reported again here.
    """

    name = "Range"
    description = "lv2:minimum <= lv2:default <= lv2:maximum"

    def check(self, store: MetadataStore, context: ValidationContext) -> Finding | None:
        if not _is_control_or_cv(store, context.port):
            return None
        if not (context.minimum_value <= context.default_value <= context.maximum_value):
            return self._fail("range invalid (min <= default <= max)", LV2_PORT)
        return None


class EventPortRule(ValidationRule):
    name = "Event Port"
    description = "Port is not a deprecated event:EventPort"

    def check(self, store: MetadataStore, context: ValidationContext) -> Finding | None:
        if store.has_class(context.port, EVENT_PORT):
            return self._fail("lv2:EventPort is deprecated, use atom:AtomPort instead", EVENT_PORT)
        return None


class CommentRule(ValidationRule):
    name = "Comment"
    description = "Port has an rdfs:comment string"

    def check(self, store: MetadataStore, context: ValidationContext) -> Finding | None:
        comment = store.get_literal(context.port, RDFS_COMMENT)
        if comment is None:
            return self._note("rdfs:comment not found", RDFS_COMMENT)
        if not comment.is_string:
            return self._fail("rdfs:comment not a string", RDFS_COMMENT)
        return None


class GroupRule(ValidationRule):
    name = "Group"
    description = "Port belongs to a pg:group given by URI"

    def check(self, store: MetadataStore, context: ValidationContext) -> Finding | None:
        group = store.get_literal(context.port, PG_GROUP)
        if group is None:
            return self._note("pg:group not found", PG_GROUP)
        if not group.is_uri:
            return self._fail("pg:group not a URI", PG_GROUP)
        return None
