"""Structured error codes for portlint.

All errors follow the format PLINT-{category}{number}:
- PLINT-STO*: Metadata store errors
- PLINT-PLG*: Plugin lookup errors
- PLINT-CFG*: Configuration errors

The validation engine itself never raises: rule outcomes are findings.
These errors cover everything around it (loading, lookup, configuration).
"""

from __future__ import annotations

from typing import Any


class PortlintError(Exception):
    """Base class for all portlint errors.

    All errors have:
    - code: Structured error code (e.g., PLINT-STO001)
    - message: Human-readable error message
    """

    code: str = "PLINT-000"

    # Reserved attribute names that cannot be overwritten by context
    _RESERVED_ATTRS = frozenset({"code", "message", "context", "args"})

    def __init__(self, message: str, **context: Any) -> None:
        """Initialize a portlint error.

        Args:
            message: Human-readable error message.
            **context: Additional context stored as error attributes.
                Reserved keys (code, message, context, args) are ignored.
        """
        self.message = message
        self.context = context
        for key, value in context.items():
            if key not in self._RESERVED_ATTRS:
                setattr(self, key, value)
        super().__init__(f"[{self.code}] {message}")

    def to_dict(self) -> dict[str, Any]:
        """Convert error to JSON-serializable dict."""
        return {
            "code": self.code,
            "message": self.message,
            "context": self.context,
        }


# Store Errors (PLINT-STO*)
class StoreError(PortlintError):
    """Base class for metadata store errors."""

    code = "PLINT-STO000"


class StoreLoadError(StoreError):
    """Raised when a metadata file cannot be read or parsed.

    Error code: PLINT-STO001
    """

    code = "PLINT-STO001"

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot load metadata from {path}: {reason}", path=path, reason=reason)


# Plugin Errors (PLINT-PLG*)
class PluginError(PortlintError):
    """Base class for plugin lookup errors."""

    code = "PLINT-PLG000"


class PluginNotFoundError(PluginError):
    """Raised when a requested plugin URI is not described by the store.

    Error code: PLINT-PLG001
    """

    code = "PLINT-PLG001"

    def __init__(self, plugin_uri: str) -> None:
        super().__init__(f"Plugin <{plugin_uri}> not found", plugin_uri=plugin_uri)


class NoPluginsFoundError(PluginError):
    """Raised when the loaded metadata describes no plugin at all.

    Error code: PLINT-PLG002
    """

    code = "PLINT-PLG002"

    def __init__(self, sources: list[str]) -> None:
        super().__init__(
            f"No lv2:Plugin found in {', '.join(sources) or 'empty input'}",
            sources=sources,
        )


# Configuration Errors (PLINT-CFG*)
class ConfigError(PortlintError):
    """Base class for configuration errors."""

    code = "PLINT-CFG000"


class InvalidSeverityError(ConfigError):
    """Raised when a severity mask contains an unknown token.

    Error code: PLINT-CFG001
    """

    code = "PLINT-CFG001"

    def __init__(self, token: str) -> None:
        super().__init__(
            f"Unknown severity '{token}' (expected note, warn, fail, all or none)",
            token=token,
        )


class InvalidConfigError(ConfigError):
    """Raised when the config file is malformed or holds a value of the wrong type.

    Error code: PLINT-CFG002
    """

    code = "PLINT-CFG002"

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Invalid config {path}: {reason}", path=path, reason=reason)
