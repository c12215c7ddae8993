"""Tests for validation runner."""

from __future__ import annotations

from collections.abc import Callable

import pytest
from hypothesis import given
from hypothesis import strategies as st

from portlint.constants import (
    LV2_CONTROL_PORT,
    LV2_DEFAULT,
    LV2_INPUT_PORT,
    LV2_MAXIMUM,
    LV2_MINIMUM,
    LV2_OUTPUT_PORT,
    PG_GROUP,
    RDFS_COMMENT,
)
from portlint.output import ReportFormatter
from portlint.store import MemoryStore, PortRef, TypedLiteral
from portlint.validation import (
    ALL_SEVERITIES,
    DEFAULT_RULES,
    Finding,
    Report,
    Severity,
    ValidationContext,
    ValidationRule,
    validate_port,
)

AddPort = Callable[..., PortRef]

bounds = st.floats(min_value=-1e6, max_value=1e6, allow_nan=False, width=32)


def _ranged_port(minimum: float, default: float, maximum: float) -> tuple[MemoryStore, PortRef]:
    store = MemoryStore()
    port = store.add_port(
        "urn:x:plugin",
        index=0,
        symbol="p",
        classes=[LV2_INPUT_PORT, LV2_CONTROL_PORT],
        literals={
            LV2_MINIMUM: TypedLiteral.float_(minimum),
            LV2_DEFAULT: TypedLiteral.float_(default),
            LV2_MAXIMUM: TypedLiteral.float_(maximum),
            RDFS_COMMENT: TypedLiteral.string("doc"),
            PG_GROUP: TypedLiteral.uri("urn:x:group"),
        },
    )
    return store, port


def _finding(report: Report, rule: str) -> Finding | None:
    return dict(report.findings)[rule]


class TestValidatePort:
    """Tests for validate_port()."""

    @pytest.mark.unit
    def test_returns_report_for_port(self, store: MemoryStore, add_port: AddPort) -> None:
        port = add_port(symbol="gain")
        report = validate_port(store, port)
        assert isinstance(report, Report)
        assert report.port_index == port.index
        assert report.port_symbol == "gain"

    @pytest.mark.unit
    def test_runs_every_rule_in_registry_order(
        self, store: MemoryStore, add_port: AddPort
    ) -> None:
        report = validate_port(store, add_port())
        assert [name for name, _ in report.findings] == [
            "Class",
            "PortProperties",
            "Default",
            "Minimum",
            "Maximum",
            "Range",
            "Event Port",
            "Comment",
            "Group",
        ]

    @pytest.mark.unit
    def test_default_rule_order_puts_numeric_rules_before_range(self) -> None:
        names = [rule.name for rule in DEFAULT_RULES]
        for numeric in ("Default", "Minimum", "Maximum"):
            assert names.index(numeric) < names.index("Range")

    @pytest.mark.unit
    def test_continues_after_failure(self, store: MemoryStore, add_port: AddPort) -> None:
        port = add_port(classes=[LV2_INPUT_PORT, LV2_CONTROL_PORT, "urn:x:Bogus"], with_docs=False)
        report = validate_port(store, port)
        assert len(report.findings) == len(DEFAULT_RULES)
        assert _finding(report, "Class") is not None
        assert _finding(report, "Comment") is not None

    @pytest.mark.unit
    def test_attaches_discovered_urn_as_substitution(self) -> None:
        store = MemoryStore(port_classes={"urn:x:A", "urn:x:B"})
        port = store.add_port("urn:x:plugin", index=0, symbol="p", classes=["urn:x:A", "urn:x:C"])

        finding = _finding(validate_port(store, port), "Class")

        assert finding is not None
        assert finding.severity == Severity.FAIL
        assert finding.substitution == "urn:x:C"
        assert finding.render_message() == "lv2:Port class <urn:x:C> not valid"

    @pytest.mark.unit
    def test_substitution_does_not_leak_into_later_rules(self) -> None:
        store = MemoryStore(port_classes=set())
        port = store.add_port("urn:x:plugin", index=0, symbol="p", classes=["urn:x:C"])
        report = validate_port(store, port)
        comment = _finding(report, "Comment")
        assert comment is not None
        assert comment.substitution is None

    @pytest.mark.unit
    def test_custom_rules(self, store: MemoryStore, add_port: AddPort) -> None:
        class AlwaysNote(ValidationRule):
            name = "Always"
            description = "Always notes"

            def check(self, store, context):  # type: ignore[no-untyped-def]
                context.last_urn = context.port.symbol
                return self._note("saw {urn}", "urn:x:doc")

        report = validate_port(store, add_port(symbol="knob"), rules=[AlwaysNote()])
        finding = _finding(report, "Always")
        assert finding is not None
        assert finding.render_message() == "saw knob"

    @pytest.mark.unit
    def test_rules_see_a_fresh_context(self, store: MemoryStore, add_port: AddPort) -> None:
        seen: list[ValidationContext] = []

        class Spy(ValidationRule):
            name = "Spy"
            description = "Records the context"

            def check(self, store, context):  # type: ignore[no-untyped-def]
                seen.append(context)
                context.default_value = 99.0
                return None

        port = add_port()
        validate_port(store, port, rules=[Spy()])
        validate_port(store, port, rules=[Spy()])
        assert seen[0] is not seen[1]
        assert seen[1].port == port


class TestOverallPass:
    """Tests for failure mask handling."""

    @pytest.mark.unit
    def test_warn_and_note_pass_with_fail_mask(
        self, store: MemoryStore, add_port: AddPort
    ) -> None:
        # No default/minimum/maximum (WARN) and no docs (NOTE)
        report = validate_port(store, add_port(with_docs=False), failure_mask=Severity.FAIL)
        assert {f.severity for _, f in report.issues} == {Severity.WARN, Severity.NOTE}
        assert report.overall_pass is True

    @pytest.mark.unit
    def test_fail_finding_fails_with_fail_mask(self, store: MemoryStore, add_port: AddPort) -> None:
        port = add_port(literals={RDFS_COMMENT: TypedLiteral.int_(1)})
        report = validate_port(store, port, failure_mask=Severity.FAIL)
        assert report.overall_pass is False

    @pytest.mark.unit
    def test_warn_mask_makes_warnings_fatal(self, store: MemoryStore, add_port: AddPort) -> None:
        report = validate_port(store, add_port(), failure_mask=Severity.WARN | Severity.FAIL)
        assert report.overall_pass is False

    @pytest.mark.unit
    def test_empty_mask_always_passes(self, store: MemoryStore, add_port: AddPort) -> None:
        port = add_port(classes=["urn:x:Bogus"], with_docs=False)
        assert validate_port(store, port, failure_mask=Severity(0)).overall_pass is True

    @pytest.mark.unit
    def test_clean_port_passes_any_mask(self) -> None:
        store, port = _ranged_port(0.0, 0.5, 1.0)
        report = validate_port(store, port, failure_mask=ALL_SEVERITIES)
        assert report.issues == []
        assert report.overall_pass is True


class TestRangeProperties:
    """Range consistency through the whole pipeline."""

    @pytest.mark.unit
    def test_inverted_bounds_fail(self) -> None:
        store, port = _ranged_port(2.0, 1.0, 5.0)
        finding = _finding(validate_port(store, port), "Range")
        assert finding is not None
        assert finding.severity == Severity.FAIL

    @pytest.mark.unit
    def test_consistent_bounds_pass(self) -> None:
        store, port = _ranged_port(0.0, 0.5, 1.0)
        assert _finding(validate_port(store, port), "Range") is None

    @pytest.mark.unit
    def test_missing_bounds_use_fallbacks(self, store: MemoryStore, add_port: AddPort) -> None:
        # default 5 with fallback maximum 1.0 is out of range
        port = add_port(literals={LV2_DEFAULT: TypedLiteral.int_(5)})
        report = validate_port(store, port)
        assert _finding(report, "Maximum") is not None
        assert _finding(report, "Range") is not None

    @pytest.mark.unit
    @given(minimum=bounds, default=bounds, maximum=bounds)
    def test_range_fails_iff_out_of_order(
        self, minimum: float, default: float, maximum: float
    ) -> None:
        store, port = _ranged_port(minimum, default, maximum)
        finding = _finding(validate_port(store, port), "Range")
        out_of_order = minimum > default or default > maximum
        assert (finding is not None) == out_of_order

    @pytest.mark.unit
    @given(default=bounds)
    def test_range_never_fires_when_bounds_are_skipped(self, default: float) -> None:
        store = MemoryStore()
        port = store.add_port(
            "urn:x:plugin",
            index=0,
            symbol="out",
            classes=[LV2_OUTPUT_PORT, LV2_CONTROL_PORT],
            literals={LV2_DEFAULT: TypedLiteral.float_(default)},
        )
        report = validate_port(store, port)
        assert _finding(report, "Minimum") is None
        assert _finding(report, "Maximum") is None
        assert _finding(report, "Range") is None


class TestIdempotence:
    """Repeated runs on the same metadata."""

    @pytest.mark.unit
    def test_two_runs_produce_identical_reports(
        self, store: MemoryStore, add_port: AddPort
    ) -> None:
        port = add_port(
            classes=[LV2_INPUT_PORT, LV2_CONTROL_PORT, "urn:x:Bogus"],
            properties=["urn:x:shiny"],
            literals={LV2_DEFAULT: TypedLiteral.string("x")},
            with_docs=False,
        )
        first = validate_port(store, port)
        second = validate_port(store, port)
        assert first == second

        formatter = ReportFormatter(color=True)
        assert formatter.format_report(first, ALL_SEVERITIES) == formatter.format_report(
            second, ALL_SEVERITIES
        )
