"""Plugin-level linting.

Runs the port validation engine once per port of a plugin, renders each
port report and aggregates the verdicts. Every port is validated
independently with a fresh context.

This module contains the logic; CLI commands are thin wrappers.
"""

from __future__ import annotations

import logging
from typing import TextIO

from portlint.config import LintSettings
from portlint.output import ReportFormatter
from portlint.store.protocol import MetadataStore, PortRef, PortStore
from portlint.validation.results import PluginReport, Report
from portlint.validation.runner import validate_port

logger = logging.getLogger(__name__)


def lint_port(
    store: MetadataStore,
    port: PortRef,
    settings: LintSettings,
    *,
    file: TextIO | None = None,
    formatter: ReportFormatter | None = None,
) -> bool:
    """Validate one port, print its visible findings, return whether it passed."""
    return _lint_port(store, port, settings, file=file, formatter=formatter).overall_pass


def _lint_port(
    store: MetadataStore,
    port: PortRef,
    settings: LintSettings,
    *,
    file: TextIO | None,
    formatter: ReportFormatter | None,
) -> Report:
    report = validate_port(store, port, failure_mask=settings.mask)
    formatter = formatter or ReportFormatter(color=settings.color)
    formatter.render_report(report, settings.show, file=file)
    return report


def lint_plugin(
    store: PortStore,
    plugin_uri: str,
    settings: LintSettings,
    *,
    file: TextIO | None = None,
    formatter: ReportFormatter | None = None,
    render: bool = True,
) -> PluginReport:
    """Validate every port of a plugin.

    Args:
        store: Store describing the plugin.
        plugin_uri: Plugin to lint.
        settings: Display/failure masks and colour mode.
        file: Stream for the rendered reports (default: stdout).
        formatter: Report formatter. Defaults to one built from settings.
        render: If False, only build the reports (used for JSON output).

    Returns:
        PluginReport with one report per port, ordered by index.

    Raises:
        PluginNotFoundError: If the store does not describe the plugin.
    """
    ports = store.get_ports(plugin_uri)
    logger.debug("Linting <%s> (%d ports)", plugin_uri, len(ports))
    formatter = formatter or ReportFormatter(color=settings.color)

    reports: list[Report] = []
    for port in ports:
        if render:
            report = _lint_port(store, port, settings, file=file, formatter=formatter)
        else:
            report = validate_port(store, port, failure_mask=settings.mask)
        logger.debug(
            "Port %d (%s): %s", port.index, port.symbol, "pass" if report.overall_pass else "fail"
        )
        reports.append(report)

    return PluginReport(plugin_uri=plugin_uri, ports=tuple(reports))
