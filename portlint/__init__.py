"""portlint - Validate the port metadata of LV2 plugins."""

from portlint.cli import cli
from portlint.lint import lint_plugin, lint_port
from portlint.store import MemoryStore, RdfMetadataStore
from portlint.validation import Report, Severity, validate_port

__all__ = [
    "MemoryStore",
    "RdfMetadataStore",
    "Report",
    "Severity",
    "cli",
    "lint_plugin",
    "lint_port",
    "validate_port",
]
