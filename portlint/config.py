"""Configuration management for portlint.

Settings are resolved with the following precedence (highest to lowest):
1. CLI argument
2. Environment variable (PORTLINT_<KEY>)
3. Config file (.portlint.yaml in the working directory)
4. Built-in default

Known settings:
    show:  severities to display (default "warn,fail")
    mask:  severities that fail a port (default "fail")
    color: true, false or auto (default auto)

Usage:
    from portlint.config import resolve_settings

    settings = resolve_settings(show=cli_show, config_dir=Path.cwd())
    report = validate_port(store, port, failure_mask=settings.mask)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from portlint.constants import CONFIG_FILENAME
from portlint.errors import InvalidConfigError
from portlint.validation.results import Severity, format_mask, parse_mask

logger = logging.getLogger(__name__)

DEFAULTS: dict[str, Any] = {
    "show": "warn,fail",
    "mask": "fail",
    "color": "auto",
}

KNOWN_SETTINGS: frozenset[str] = frozenset(DEFAULTS)

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off"})


@dataclass(frozen=True)
class LintSettings:
    """Resolved settings for one lint run.

    Attributes:
        show: Display mask.
        mask: Failure mask.
        color: Colour mode for the report formatter (None = auto).
    """

    show: Severity
    mask: Severity
    color: bool | None = None


def get_config_path(config_dir: Path) -> Path:
    """Path of the config file inside config_dir."""
    return config_dir / CONFIG_FILENAME


def load_config(config_dir: Path) -> dict[str, Any]:
    """Load configuration from .portlint.yaml.

    Args:
        config_dir: Directory holding the config file.

    Returns:
        Config dictionary. Returns empty dict if the file doesn't exist.

    Raises:
        InvalidConfigError: If the file is not UTF-8 YAML or not a mapping.
    """
    config_file = get_config_path(config_dir)

    if not config_file.exists():
        return {}

    try:
        content = config_file.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise InvalidConfigError(str(config_file), f"not valid UTF-8 ({e.reason})") from e
    if not content.strip():
        return {}

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise InvalidConfigError(str(config_file), str(e)) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidConfigError(str(config_file), "top level must be a mapping")

    for key in sorted(set(data) - KNOWN_SETTINGS):
        logger.warning("Ignoring unknown setting '%s' in %s", key, config_file)
    return data


def _get_env_var_name(key: str) -> str:
    """Convert a setting key to environment variable name (show -> PORTLINT_SHOW)."""
    return f"PORTLINT_{key.upper()}"


def get_setting(
    key: str,
    cli_value: Any | None = None,
    config_dir: Path | None = None,
) -> Any | None:
    """Resolve a raw setting value with full precedence.

    Args:
        key: Setting key (e.g., "show", "mask")
        cli_value: Value passed via CLI argument (highest precedence)
        config_dir: Directory to look for the config file in

    Returns:
        Resolved value, or the built-in default (None for unknown keys).
    """
    if cli_value is not None:
        return cli_value

    env_value = os.environ.get(_get_env_var_name(key))
    if env_value is not None:
        return env_value

    if config_dir is not None:
        config = load_config(config_dir)
        if key in config:
            return config[key]

    return DEFAULTS.get(key)


def get_setting_source(key: str, cli_value: Any | None, config_dir: Path | None) -> str:
    """Where a setting comes from: "cli", "env", "config" or "default"."""
    if cli_value is not None:
        return "cli"
    if _get_env_var_name(key) in os.environ:
        return "env"
    if config_dir is not None and key in load_config(config_dir):
        return "config"
    return "default"


def parse_color(value: Any, *, source: str = "color") -> bool | None:
    """Parse a colour setting: bool, None, or one of true/false/auto strings.

    Raises:
        InvalidConfigError: If the value is not recognized.
    """
    if value is None or isinstance(value, bool):
        return value
    token = str(value).strip().lower()
    if token == "auto":
        return None
    if token in _TRUE:
        return True
    if token in _FALSE:
        return False
    raise InvalidConfigError(source, f"invalid color value '{value}'")


def _parse_mask_setting(key: str, value: Any) -> Severity:
    if isinstance(value, list | tuple):
        for item in value:
            if not isinstance(item, str):
                raise InvalidConfigError(
                    key, f"expected severity names, got {type(item).__name__} {item!r}"
                )
    if isinstance(value, str | list | tuple | Severity):
        return parse_mask(value)
    raise InvalidConfigError(key, f"expected a list of severities, got {type(value).__name__}")


def resolve_settings(
    *,
    show: str | Severity | None = None,
    mask: str | Severity | None = None,
    color: bool | None = None,
    config_dir: Path | None = None,
) -> LintSettings:
    """Resolve every setting into a LintSettings.

    Args:
        show: CLI display mask.
        mask: CLI failure mask.
        color: CLI colour flag.
        config_dir: Directory holding .portlint.yaml.

    Raises:
        InvalidSeverityError: If a mask holds an unknown severity.
        InvalidConfigError: If the config file or a colour value is invalid.
    """
    settings = LintSettings(
        show=_parse_mask_setting("show", get_setting("show", show, config_dir)),
        mask=_parse_mask_setting("mask", get_setting("mask", mask, config_dir)),
        color=parse_color(get_setting("color", color, config_dir)),
    )
    logger.debug(
        "Resolved settings: show=%s mask=%s color=%s",
        format_mask(settings.show),
        format_mask(settings.mask),
        settings.color,
    )
    return settings


def list_settings(
    config_dir: Path | None = None,
    *,
    cli_values: dict[str, Any] | None = None,
) -> dict[str, dict[str, Any]]:
    """List known settings with their resolved raw values and sources.

    Returns:
        Dict mapping setting keys to {"value": ..., "source": ...}
    """
    cli_values = cli_values or {}
    return {
        key: {
            "value": get_setting(key, cli_values.get(key), config_dir),
            "source": get_setting_source(key, cli_values.get(key), config_dir),
        }
        for key in sorted(KNOWN_SETTINGS)
    }
