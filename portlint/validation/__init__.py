"""Port validation engine.

This module provides the public API for validating port descriptions:
- validate_port(): Run the rule registry against one port
- Report / PluginReport: Aggregate validation results
- ValidationRule: Base class for custom rules
- Severity: Finding levels, combinable into masks
"""

from portlint.validation.context import ValidationContext
from portlint.validation.results import (
    ALL_SEVERITIES,
    Finding,
    PluginReport,
    Report,
    Severity,
    format_mask,
    parse_mask,
)
from portlint.validation.rules import NumericRule, NumericSpec, ValidationRule
from portlint.validation.runner import DEFAULT_RULES, validate_port

__all__ = [
    "ALL_SEVERITIES",
    "DEFAULT_RULES",
    "Finding",
    "NumericRule",
    "NumericSpec",
    "PluginReport",
    "Report",
    "Severity",
    "ValidationContext",
    "ValidationRule",
    "format_mask",
    "parse_mask",
    "validate_port",
]
