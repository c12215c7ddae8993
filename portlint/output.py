"""Terminal output: port report rendering and CLI status messages.

Port reports:
    formatter = ReportFormatter(color=None)
    formatter.render_report(report, Severity.WARN | Severity.FAIL)

    # Output:
    #   {3 : gain}
    #     [WARN]  Default         => lv2:default not found <http://lv2plug.in/ns/lv2core#Port>

Colour is a formatter setting, never global state: color=False emits plain
text, color=True always emits ANSI codes, color=None lets click strip them
when the stream is not a terminal.

Status messages (used by the CLI around the reports):
    success("All ports of <urn:example:amp> passed")
    info("Linting <urn:example:amp> (4 ports)")
    warn("<urn:example:amp> declares no lv2:port")
    error("Plugin <urn:example:nope> not found")
"""

from __future__ import annotations

import sys
from collections.abc import Mapping
from typing import Any, TextIO

import click

from portlint.constants import RULE_ID_WIDTH
from portlint.validation.results import Report, Severity

# Severity label styles (click.style keyword arguments)
SEVERITY_STYLES: dict[Severity, dict[str, Any]] = {
    Severity.FAIL: {"fg": "red"},
    Severity.WARN: {"fg": "yellow"},
    Severity.NOTE: {"fg": "cyan"},
}

HEADER_STYLE: dict[str, Any] = {"bold": True}


class ReportFormatter:
    """Renders port reports as text.

    Args:
        color: True to force ANSI styling, False to disable it, None to let
            click decide from the output stream.
        styles: Per-severity click.style arguments. Defaults to
            SEVERITY_STYLES.
    """

    def __init__(
        self,
        *,
        color: bool | None = None,
        styles: Mapping[Severity, Mapping[str, Any]] | None = None,
    ) -> None:
        self.color = color
        self.styles = dict(SEVERITY_STYLES if styles is None else styles)

    def _style(self, text: str, style: Mapping[str, Any]) -> str:
        if self.color is False:
            return text
        return click.style(text, **style)

    def format_report(self, report: Report, display_mask: Severity) -> list[str]:
        """Format the visible findings of a report.

        Args:
            report: Report to format.
            display_mask: Severities to show.

        Returns:
            Header line plus one line per visible finding, or an empty list
            when no finding is visible.
        """
        visible = report.visible(display_mask)
        if not visible:
            return []

        lines = [
            "  " + self._style(f"{{{report.port_index} : {report.port_symbol}}}", HEADER_STYLE)
        ]
        for name, finding in visible:
            label = self._style(finding.severity.label, self.styles.get(finding.severity, {}))
            lines.append(
                f"    [{label}]  {name:<{RULE_ID_WIDTH}}=> "
                f"{finding.render_message()} <{finding.reference}>"
            )
        return lines

    def render_report(
        self, report: Report, display_mask: Severity, *, file: TextIO | None = None
    ) -> bool:
        """Echo a formatted report.

        Returns:
            True if anything was written.
        """
        lines = self.format_report(report, display_mask)
        for line in lines:
            click.echo(line, file=file, color=self.color)
        return bool(lines)


# Status message styles and prefixes
_STYLES = {
    "success": {"fg": "green"},
    "info": {"fg": "blue"},
    "warn": {"fg": "yellow"},
    "error": {"fg": "red"},
}

_PREFIXES = {
    "success": "✓",  # checkmark
    "info": "→",  # arrow
    "warn": "⚠",  # warning
    "error": "✗",  # X
}


def _output(message: str, style: str, *, file: TextIO | None = None, nl: bool = True) -> None:
    fg_color = _STYLES[style]["fg"]
    styled_prefix = click.style(_PREFIXES[style], fg=fg_color)
    styled_message = click.style(message, fg=fg_color)
    click.echo(f"{styled_prefix} {styled_message}", file=file, nl=nl)


def success(message: str, *, file: TextIO | None = None, nl: bool = True) -> None:
    """Print a success message with green checkmark (default: stdout)."""
    _output(message, "success", file=file, nl=nl)


def info(message: str, *, file: TextIO | None = None, nl: bool = True) -> None:
    """Print an info message with blue arrow (default: stdout)."""
    _output(message, "info", file=file, nl=nl)


def warn(message: str, *, file: TextIO | None = None, nl: bool = True) -> None:
    """Print a warning message with yellow warning symbol (default: stderr)."""
    _output(message, "warn", file=file or sys.stderr, nl=nl)


def error(message: str, *, file: TextIO | None = None, nl: bool = True) -> None:
    """Print an error message with red X (default: stderr)."""
    _output(message, "error", file=file or sys.stderr, nl=nl)
