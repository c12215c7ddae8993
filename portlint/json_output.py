"""JSON output envelope for machine-readable CLI output.

Every command run with ``--format json`` prints exactly one envelope:

    {
        "success": true|false,
        "command": "check",
        "data": { ... },
        "errors": [ ... ]  # Only present when success=false
    }

Usage:
    from portlint.json_output import lint_envelope

    envelope = lint_envelope(plugin_reports, display_mask=settings.show)
    click.echo(envelope.to_json())
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from portlint.errors import PortlintError
from portlint.validation.results import ALL_SEVERITIES, PluginReport, Severity


@dataclass
class ErrorDetail:
    """One entry of the errors array.

    Attributes:
        type: Error class name (e.g., "StoreLoadError", "PortFailed")
        message: Human-readable error description
        code: Structured error code, when the error carries one
    """

    type: str
    message: str
    code: str | None = None

    @classmethod
    def from_exception(cls, err: PortlintError) -> ErrorDetail:
        return cls(type=type(err).__name__, message=err.message, code=err.code)

    def to_dict(self) -> dict[str, str]:
        d = {"type": self.type, "message": self.message}
        if self.code is not None:
            d["code"] = self.code
        return d


@dataclass
class OutputEnvelope:
    """Wrapper structure for all JSON command output.

    Attributes:
        success: True if command completed without errors
        command: Name of the command that produced this output
        data: Command-specific payload
        errors: Error objects; present only when success=False
    """

    success: bool
    command: str
    data: dict[str, Any] | None
    errors: list[ErrorDetail] | None = field(default=None)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary, omitting errors when None."""
        result: dict[str, Any] = {
            "success": self.success,
            "command": self.command,
            "data": self.data,
        }
        if self.errors is not None:
            result["errors"] = [e.to_dict() for e in self.errors]
        return result

    def to_json(self, *, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)


def success_envelope(command: str, data: dict[str, Any]) -> OutputEnvelope:
    return OutputEnvelope(success=True, command=command, data=data)


def error_envelope(
    command: str,
    errors: list[ErrorDetail],
    *,
    data: dict[str, Any] | None = None,
) -> OutputEnvelope:
    return OutputEnvelope(
        success=False,
        command=command,
        data=data if data is not None else {},
        errors=errors,
    )


def lint_envelope(
    reports: Sequence[PluginReport],
    *,
    display_mask: Severity = ALL_SEVERITIES,
) -> OutputEnvelope:
    """Envelope for the check command.

    Fails when any plugin fails; every failed port becomes one error entry.
    """
    data = {
        "passed": all(r.passed for r in reports),
        "plugins": [r.to_dict(display_mask) for r in reports],
    }
    if data["passed"]:
        return success_envelope("check", data)

    errors = [
        ErrorDetail(
            type="PortFailed",
            message=f"<{r.plugin_uri}> port {port.port_index} ({port.port_symbol}) failed",
        )
        for r in reports
        for port in r.failed_ports
    ]
    return error_envelope("check", errors, data=data)
