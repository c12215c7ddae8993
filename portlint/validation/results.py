"""Validation result data structures.

These classes capture the output of validation rules and aggregate
them into per-port and per-plugin reports for text display and JSON export.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import IntFlag
from typing import Any

from portlint.errors import InvalidSeverityError

# The single placeholder a finding message may carry
PLACEHOLDER = "{urn}"


class Severity(IntFlag):
    """Severity level of a finding.

    Members are ordered NOTE < WARN < FAIL and combine bitwise into masks:
    ``Severity.WARN | Severity.FAIL`` is the set {WARN, FAIL}.

    FAIL: Violates the LV2 specification
    WARN: Likely mistake, tolerated by hosts
    NOTE: Suggestion for better metadata
    """

    NOTE = 1
    WARN = 2
    FAIL = 4

    @property
    def label(self) -> str:
        """Upper-case display label (FAIL, WARN, NOTE)."""
        return self.name or ""


ALL_SEVERITIES = Severity.NOTE | Severity.WARN | Severity.FAIL
NO_SEVERITIES = Severity(0)


def parse_mask(value: str | Iterable[str] | Severity) -> Severity:
    """Parse a severity mask.

    Accepts an existing Severity, a comma separated string ("warn,fail"),
    or an iterable of tokens. "all" and "none" are recognized; tokens are
    case-insensitive.

    Raises:
        InvalidSeverityError: If a token is unknown.
    """
    if isinstance(value, Severity):
        return value
    tokens = value.split(",") if isinstance(value, str) else list(value)

    mask = NO_SEVERITIES
    for raw in tokens:
        token = raw.strip().lower()
        if not token:
            continue
        if token == "all":
            mask |= ALL_SEVERITIES
        elif token == "none":
            continue
        else:
            try:
                mask |= Severity[token.upper()]
            except KeyError as e:
                raise InvalidSeverityError(raw.strip()) from e
    return mask


def format_mask(mask: Severity) -> str:
    """Inverse of parse_mask: "note,warn,fail" style string."""
    names = [s.name.lower() for s in Severity if s & mask and s.name]
    return ",".join(names) if names else "none"


@dataclass(frozen=True)
class Finding:
    """Outcome of one rule that did not pass.

    Attributes:
        severity: How serious the finding is.
        message: Message template, may contain the ``{urn}`` placeholder.
        reference: Documentation URI for the violated term.
        substitution: Value discovered during the check (e.g. an offending
            class URI), substituted into the message at render time.
    """

    severity: Severity
    message: str
    reference: str
    substitution: str | None = None

    def render_message(self) -> str:
        """Message with the placeholder filled in.

        The template is returned verbatim when there is no substitution or
        the template carries no placeholder.
        """
        if self.substitution is not None and PLACEHOLDER in self.message:
            return self.message.replace(PLACEHOLDER, self.substitution)
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        d: dict[str, Any] = {
            "severity": self.severity.label.lower(),
            "message": self.render_message(),
            "reference": self.reference,
        }
        if self.substitution is not None:
            d["substitution"] = self.substitution
        return d


@dataclass(frozen=True)
class Report:
    """Validation report for a single port.

    Attributes:
        port_index: lv2:index of the port.
        port_symbol: lv2:symbol of the port.
        findings: (rule name, finding or None) for every rule, in registry order.
        overall_pass: False iff a finding's severity is in the failure mask.
    """

    port_index: int
    port_symbol: str
    findings: tuple[tuple[str, Finding | None], ...]
    overall_pass: bool

    @property
    def issues(self) -> list[tuple[str, Finding]]:
        """Only the rules that produced a finding."""
        return [(name, f) for name, f in self.findings if f is not None]

    def visible(self, display_mask: Severity) -> list[tuple[str, Finding]]:
        """Findings whose severity intersects the display mask."""
        return [(name, f) for name, f in self.issues if f.severity & display_mask]

    def count(self, severity: Severity) -> int:
        """Number of findings with exactly this severity."""
        return sum(1 for _, f in self.issues if f.severity == severity)

    def to_dict(self, display_mask: Severity = ALL_SEVERITIES) -> dict[str, Any]:
        """Convert to JSON-serializable dict, keeping only visible findings."""
        return {
            "index": self.port_index,
            "symbol": self.port_symbol,
            "passed": self.overall_pass,
            "findings": [
                {"rule": name, **finding.to_dict()}
                for name, finding in self.visible(display_mask)
            ],
        }


@dataclass(frozen=True)
class PluginReport:
    """Aggregate of the port reports of one plugin.

    Attributes:
        plugin_uri: URI of the plugin.
        ports: One report per port, ordered by port index.
    """

    plugin_uri: str
    ports: tuple[Report, ...]

    @property
    def passed(self) -> bool:
        """True if every port passed (vacuously true without ports)."""
        return all(r.overall_pass for r in self.ports)

    @property
    def failed_ports(self) -> list[Report]:
        return [r for r in self.ports if not r.overall_pass]

    def count(self, severity: Severity) -> int:
        return sum(r.count(severity) for r in self.ports)

    def to_dict(self, display_mask: Severity = ALL_SEVERITIES) -> dict[str, Any]:
        """Convert to JSON-serializable dict for --format json output."""
        return {
            "plugin": self.plugin_uri,
            "passed": self.passed,
            "fail_count": self.count(Severity.FAIL),
            "warn_count": self.count(Severity.WARN),
            "note_count": self.count(Severity.NOTE),
            "ports": [r.to_dict(display_mask) for r in self.ports],
        }
