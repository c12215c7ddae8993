"""Shared pytest fixtures for portlint tests."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from pathlib import Path

import pytest

from portlint.config import LintSettings
from portlint.constants import LV2_CONTROL_PORT, LV2_INPUT_PORT, PG_GROUP, RDFS_COMMENT
from portlint.store import MemoryStore, PortRef, TypedLiteral
from portlint.validation import ALL_SEVERITIES, Severity

PLUGIN_URI = "urn:example:plugin"

# =============================================================================
# Fixture Files
# =============================================================================


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def amp_ttl(fixtures_dir: Path) -> Path:
    """Plugin that passes with the default failure mask (WARN and NOTE only)."""
    return fixtures_dir / "amp.ttl"


@pytest.fixture
def broken_ttl(fixtures_dir: Path) -> Path:
    """Plugin where every port has at least one FAIL finding."""
    return fixtures_dir / "broken.ttl"


@pytest.fixture
def vocab_ttl(fixtures_dir: Path) -> Path:
    """Vocabulary declaring the custom class and property of broken.ttl."""
    return fixtures_dir / "vocab.ttl"


@pytest.fixture
def malformed_ttl(fixtures_dir: Path) -> Path:
    """Truncated Turtle file."""
    return fixtures_dir / "malformed.ttl"


# =============================================================================
# In-memory Stores
# =============================================================================


@pytest.fixture
def store() -> MemoryStore:
    """Empty MemoryStore with the built-in LV2 vocabulary."""
    return MemoryStore()


AddPort = Callable[..., PortRef]


@pytest.fixture
def add_port(store: MemoryStore) -> AddPort:
    """Factory adding a port to the shared store.

    Defaults to an input control port with a comment and a group, so tests
    only spell out what they are about.
    """
    counter = {"index": 0}

    def _add(
        *,
        classes: Iterable[str] = (LV2_INPUT_PORT, LV2_CONTROL_PORT),
        properties: Iterable[str] = (),
        literals: Mapping[str, TypedLiteral] | None = None,
        symbol: str | None = None,
        with_docs: bool = True,
    ) -> PortRef:
        index = counter["index"]
        counter["index"] += 1
        all_literals: dict[str, TypedLiteral] = {}
        if with_docs:
            all_literals[RDFS_COMMENT] = TypedLiteral.string("A port")
            all_literals[PG_GROUP] = TypedLiteral.uri("urn:example:group")
        all_literals.update(literals or {})
        return store.add_port(
            PLUGIN_URI,
            index=index,
            symbol=symbol or f"port{index}",
            classes=classes,
            properties=properties,
            literals=all_literals,
        )

    return _add


# =============================================================================
# Settings
# =============================================================================


@pytest.fixture
def show_all_settings() -> LintSettings:
    """Display every severity, fail on FAIL, no colour."""
    return LintSettings(show=ALL_SEVERITIES, mask=Severity.FAIL, color=False)
