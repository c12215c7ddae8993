"""Validation runner that executes all rules against a port."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Sequence

from portlint.store.protocol import MetadataStore, PortRef
from portlint.validation.context import ValidationContext
from portlint.validation.results import Finding, Report, Severity
from portlint.validation.rules import (
    DEFAULT_SPEC,
    MAXIMUM_SPEC,
    MINIMUM_SPEC,
    CommentRule,
    EventPortRule,
    GroupRule,
    NumericRule,
    PortClassRule,
    PortPropertiesRule,
    RangeRule,
    ValidationRule,
)

logger = logging.getLogger(__name__)

# Order matters: the numeric rules fill the context read by RangeRule.
DEFAULT_RULES: tuple[ValidationRule, ...] = (
    PortClassRule(),
    PortPropertiesRule(),
    NumericRule(DEFAULT_SPEC),
    NumericRule(MINIMUM_SPEC),
    NumericRule(MAXIMUM_SPEC),
    RangeRule(),
    EventPortRule(),
    CommentRule(),
    GroupRule(),
)


def validate_port(
    store: MetadataStore,
    port: PortRef,
    *,
    failure_mask: Severity = Severity.FAIL,
    rules: Sequence[ValidationRule] | None = None,
) -> Report:
    """Run validation rules against one port.

    Every rule runs, in order, against a fresh ValidationContext; a failing
    rule does not stop the ones after it.

    Args:
        store: Metadata store describing the port.
        port: The port to validate.
        failure_mask: Severities that make the port fail.
        rules: Optional sequence of rules to run. Defaults to DEFAULT_RULES.

    Returns:
        Report with one entry per rule.
    """
    if rules is None:
        rules = DEFAULT_RULES

    context = ValidationContext(port=port)
    findings: list[tuple[str, Finding | None]] = []

    for rule in rules:
        context.last_urn = None
        finding = rule.check(store, context)
        if finding is not None and context.last_urn is not None:
            finding = dataclasses.replace(finding, substitution=context.last_urn)
        logger.debug(
            "Port %d (%s) rule %s: %s",
            port.index,
            port.symbol,
            rule.name,
            finding.severity.label if finding else "pass",
        )
        findings.append((rule.name, finding))

    overall_pass = not any(f is not None and f.severity & failure_mask for _, f in findings)

    return Report(
        port_index=port.index,
        port_symbol=port.symbol,
        findings=tuple(findings),
        overall_pass=overall_pass,
    )
