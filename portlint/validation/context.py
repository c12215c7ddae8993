"""Per-port scratch state shared by the rules of one validation pass."""

from __future__ import annotations

from dataclasses import dataclass

from portlint.store.protocol import PortRef

DEFAULT_FALLBACK = 0.0
MINIMUM_FALLBACK = 0.0
MAXIMUM_FALLBACK = 1.0


@dataclass
class ValidationContext:
    """Mutable state for validating a single port.

    The numeric rules write the resolved lv2:default, lv2:minimum and
    lv2:maximum here; the range rule reads them afterwards. Each field holds
    its fallback until the rule that computes it has run and succeeded.

    ``last_urn`` is cleared by the runner before every rule. A rule that
    discovers an offending URI stores it there, and the runner attaches it
    to the rule's finding as the message substitution.

    Attributes:
        port: The port under validation.
        default_value: Resolved lv2:default (fallback 0.0).
        minimum_value: Resolved lv2:minimum (fallback 0.0).
        maximum_value: Resolved lv2:maximum (fallback 1.0).
        last_urn: Transient substitution slot.
    """

    port: PortRef
    default_value: float = DEFAULT_FALLBACK
    minimum_value: float = MINIMUM_FALLBACK
    maximum_value: float = MAXIMUM_FALLBACK
    last_urn: str | None = None
