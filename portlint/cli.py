"""portlint CLI - lint the port descriptions of LV2 plugins.

The CLI is a thin wrapper around the Python API (see lint.py).
All validation logic lives in the library; the CLI handles user interaction.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import click

from portlint.config import list_settings, resolve_settings
from portlint.errors import NoPluginsFoundError, PortlintError
from portlint.json_output import (
    ErrorDetail,
    error_envelope,
    lint_envelope,
    success_envelope,
)
from portlint.lint import lint_plugin
from portlint.output import ReportFormatter, error, info, success, warn
from portlint.store import RdfMetadataStore
from portlint.validation import DEFAULT_RULES, PluginReport, Severity

SEVERITY_HELP = "Comma separated severities: note, warn, fail, all or none."


def should_output_json(ctx: click.Context, json_flag: bool = False) -> bool:
    """Determine if JSON output should be used.

    The global --format option and the per-command --json flag both select
    JSON output.
    """
    obj = ctx.find_root().obj or {}
    return obj.get("format", "text") == "json" or json_flag


def output_json_envelope(envelope: Any) -> None:
    """Output a JSON envelope to stdout."""
    click.echo(envelope.to_json())


@click.group()
@click.version_option(package_name="portlint")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "text"]),
    default="text",
    help="Output format (json for machine parsing, text for humans).",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, output_format: str, verbose: bool) -> None:
    """portlint - Validate the port metadata of LV2 plugins."""
    ctx.ensure_object(dict)
    ctx.obj["format"] = output_format
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def _print_plugin_summary(report: PluginReport) -> None:
    total = len(report.ports)
    counts = (
        f"{report.count(Severity.FAIL)} fail, "
        f"{report.count(Severity.WARN)} warn, "
        f"{report.count(Severity.NOTE)} note"
    )
    if report.passed:
        success(f"<{report.plugin_uri}> passed ({total} ports; {counts})")
    else:
        error(
            f"<{report.plugin_uri}> failed: {len(report.failed_ports)} of {total} ports ({counts})"
        )


@cli.command()
@click.argument(
    "files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--plugin",
    "plugins",
    multiple=True,
    help="Plugin URI to lint (repeatable). Default: every lv2:Plugin in FILES.",
)
@click.option("--show", default=None, help=f"Severities to display. {SEVERITY_HELP}")
@click.option("--mask", default=None, help=f"Severities that fail a port. {SEVERITY_HELP}")
@click.option("--color/--no-color", default=None, help="Force or disable coloured output.")
@click.option("--json", "json_flag", is_flag=True, default=False, help="Output as JSON.")
@click.pass_context
def check(
    ctx: click.Context,
    files: tuple[Path, ...],
    plugins: tuple[str, ...],
    show: str | None,
    mask: str | None,
    color: bool | None,
    json_flag: bool,
) -> None:
    """Lint the ports of the plugins described in FILES.

    All FILES (Turtle) are loaded into one graph, so a plugin's manifest.ttl
    and description file can be passed together, along with any extension
    vocabulary the plugin relies on.

    Exits with status 1 if any port fails.
    """
    use_json = should_output_json(ctx, json_flag)
    reports: list[PluginReport] = []

    try:
        settings = resolve_settings(show=show, mask=mask, color=color, config_dir=Path.cwd())
        store = RdfMetadataStore.from_paths(files)
        plugin_uris = list(plugins) or store.get_plugins()
        if not plugin_uris:
            raise NoPluginsFoundError([str(f) for f in files])

        formatter = ReportFormatter(color=settings.color)
        for plugin_uri in plugin_uris:
            if not use_json:
                info(f"<{plugin_uri}>")
            report = lint_plugin(
                store, plugin_uri, settings, formatter=formatter, render=not use_json
            )
            reports.append(report)
            if not use_json:
                if not report.ports:
                    warn(f"<{plugin_uri}> declares no lv2:port")
                _print_plugin_summary(report)

    except PortlintError as err:
        if use_json:
            output_json_envelope(error_envelope("check", [ErrorDetail.from_exception(err)]))
        else:
            error(err.message)
        raise SystemExit(1) from err

    if use_json:
        output_json_envelope(lint_envelope(reports, display_mask=settings.show))

    if not all(r.passed for r in reports):
        raise SystemExit(1)


@cli.command()
@click.option("--json", "json_flag", is_flag=True, default=False, help="Output as JSON.")
@click.pass_context
def rules(ctx: click.Context, json_flag: bool) -> None:
    """List the port rules in the order they run."""
    if should_output_json(ctx, json_flag):
        data = {"rules": [{"name": r.name, "description": r.description} for r in DEFAULT_RULES]}
        output_json_envelope(success_envelope("rules", data))
        return

    for position, rule in enumerate(DEFAULT_RULES, start=1):
        click.echo(f"{position:>2}. {rule.name:<16}{rule.description}")


@cli.command("config")
@click.option("--json", "json_flag", is_flag=True, default=False, help="Output as JSON.")
@click.pass_context
def config_cmd(ctx: click.Context, json_flag: bool) -> None:
    """Show the resolved settings and where each one comes from."""
    use_json = should_output_json(ctx, json_flag)
    try:
        settings = list_settings(Path.cwd())
    except PortlintError as err:
        if use_json:
            output_json_envelope(error_envelope("config", [ErrorDetail.from_exception(err)]))
        else:
            error(err.message)
        raise SystemExit(1) from err

    if use_json:
        output_json_envelope(success_envelope("config", {"settings": settings}))
        return

    for key, entry in settings.items():
        click.echo(f"{key} = {entry['value']} ({entry['source']})")
