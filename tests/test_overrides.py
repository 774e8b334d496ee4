"""
Override pack and real-dealer registry tests.
"""
from __future__ import annotations

import textwrap

import pytest

from dealerwatch import OverridePackError, OverridePackValidationError
from dealerwatch.engine import OverrideRegistry, build_sections_from_counts
from dealerwatch.generation import REAL_DEALER_NAMES
from dealerwatch.models import (
    SECTION_IDS,
    ControlResult,
    FirmType,
    RagStatus,
    SectionCounts,
)
from dealerwatch.packs import (
    SCHEMA_VERSION,
    default_override_records,
    load_override_pack,
    load_override_pack_from_string,
)

from helpers import assert_audit_invariants, assert_rating_correlation


REAL_NAMES = [
    "Thurlby Motors",
    "Shirlaws Limited",
    "Dynasty Partners Limited",
    "Platinum Vehicle Specialists",
]


def _pack_yaml(dealer_name: str = "Example Motors", extra: str = "", sections: str = None) -> str:
    """Minimal valid pack with one dealer."""
    if sections is None:
        sections = "\n".join(
            f"      {sid}: {{green: 1, amber: 0, red: 0, notes: fine}}" for sid in SECTION_IDS
        )
    return textwrap.dedent(f"""\
        schema_version: "{SCHEMA_VERSION}"
        pack_id: test-pack
        dealers:
          - dealer_name: {dealer_name}
            overall_rag: green
            overall_score: 90
            firm_type: DA
            last_audit_date: "01 Jan 2026"
            sentiment:
              score: 7.0
              trend: 0.1
              categories:
                - {{label: Reputation, score: 7.0, trend: 0.0}}
                - {{label: Visibility, score: 7.1, trend: 0.1}}
                - {{label: Performance, score: 6.9, trend: -0.1}}
            assurance_statement: All good.
        """) + "    sections:\n" + sections + "\n" + extra


# =============================================================================
# Pack Loading
# =============================================================================

class TestBundledPack:
    """The pack shipped with the package."""

    def test_loads_four_dealers(self) -> None:
        records = load_override_pack()
        assert sorted(r.dealer_name for r in records) == sorted(REAL_NAMES)

    def test_default_records_cached(self) -> None:
        assert default_override_records() is default_override_records()

    def test_sections_in_audit_order(self) -> None:
        for record in default_override_records():
            assert [s.section_id for s in record.sections] == list(SECTION_IDS)


class TestPackValidation:
    """Invalid packs are rejected with OverridePackValidationError."""

    def test_minimal_pack(self) -> None:
        records = load_override_pack_from_string(_pack_yaml())
        assert len(records) == 1
        assert records[0].firm_type == FirmType.DA
        assert records[0].key_actions == ()

    def test_not_a_mapping(self) -> None:
        with pytest.raises(OverridePackValidationError):
            load_override_pack_from_string("- just\n- a list\n")

    def test_schema_version_mismatch(self) -> None:
        content = _pack_yaml().replace(f'"{SCHEMA_VERSION}"', '"2.0.0"')
        with pytest.raises(OverridePackValidationError) as exc_info:
            load_override_pack_from_string(content)
        assert exc_info.value.details["pack_version"] == "2.0.0"

    def test_missing_section(self) -> None:
        sections = "\n".join(
            f"      {sid}: {{green: 1, amber: 0, red: 0, notes: fine}}" for sid in SECTION_IDS[:-1]
        )
        with pytest.raises(OverridePackValidationError) as exc_info:
            load_override_pack_from_string(_pack_yaml(sections=sections))
        assert exc_info.value.details["errors"]

    def test_negative_count(self) -> None:
        content = _pack_yaml().replace("conduct: {green: 1", "conduct: {green: -1")
        with pytest.raises(OverridePackValidationError):
            load_override_pack_from_string(content)

    def test_unknown_field(self) -> None:
        content = _pack_yaml().replace("pack_id: test-pack", "pack_id: test-pack\nowner: nobody")
        with pytest.raises(OverridePackValidationError):
            load_override_pack_from_string(content)

    def test_duplicate_action_ids(self) -> None:
        action = (
            "      - {id: a-1, section: Sales, action: Do it, priority: High, "
            "owner: Compliance, due_date: Immediate, status: Pending}\n"
        )
        content = _pack_yaml(extra="    key_actions:\n" + action + action)
        with pytest.raises(OverridePackValidationError):
            load_override_pack_from_string(content)

    def test_invalid_yaml(self) -> None:
        with pytest.raises(OverridePackError):
            load_override_pack_from_string("dealers: [unclosed")

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(OverridePackError) as exc_info:
            load_override_pack(tmp_path / "missing.yaml")
        assert exc_info.value.code == "DW_OVERRIDE_PACK_LOAD_ERROR"

    def test_load_from_file(self, tmp_path) -> None:
        path = tmp_path / "pack.yaml"
        path.write_text(_pack_yaml("File Motors"), encoding="utf-8")
        records = load_override_pack(path)
        assert records[0].dealer_name == "File Motors"


# =============================================================================
# Section Fabrication
# =============================================================================

class TestBuildSectionsFromCounts:
    """Controls fabricated from per-section counts."""

    def _counts(self, **overrides):
        counts = {sid: SectionCounts(sid, 1, 0, 0, "ok") for sid in SECTION_IDS}
        counts.update(overrides)
        return list(counts.values())

    def test_counts_and_order(self) -> None:
        counts = self._counts(sales=SectionCounts("sales", 2, 1, 1, "Sales gaps"))
        sections = build_sections_from_counts(list(reversed(counts)))
        assert [s.id for s in sections] == list(SECTION_IDS)

        sales = sections[3]
        assert [c.id for c in sales.controls] == ["sales-g0", "sales-g1", "sales-a0", "sales-r0"]
        assert sales.summary.rag_status == RagStatus.RED
        assert sales.summary.notes == "Sales gaps"
        assert sales.controls[2].comments == "Sales gaps"
        assert sales.controls[3].result == ControlResult.FAIL

    def test_control_area_numbering(self) -> None:
        sections = build_sections_from_counts(
            self._counts(conduct=SectionCounts("conduct", 1, 1, 0, "n"))
        )
        conduct = sections[-1]
        assert conduct.controls[0].control_area == "Conduct Oversight Control 1"
        assert conduct.controls[1].control_area == "Conduct Oversight Control 2"

    def test_incomplete_counts_rejected(self) -> None:
        with pytest.raises(ValueError):
            build_sections_from_counts(self._counts()[:-1])


# =============================================================================
# Registry
# =============================================================================

class TestOverrideRegistry:
    """Exact-name lookup of real-dealer audits."""

    def test_contains_real_dealers(self, registry) -> None:
        assert len(registry) == 4
        for name in REAL_NAMES:
            assert name in registry

    def test_covers_directory_real_dealers(self, registry) -> None:
        assert set(registry.dealer_names) == REAL_DEALER_NAMES

    def test_lookup_is_case_sensitive(self, registry) -> None:
        assert registry.lookup("thurlby motors") is None
        assert registry.lookup("Thurlby Motors ") is None
        assert registry.lookup("Sytner BMW") is None

    def test_thurlby(self, registry) -> None:
        audit = registry.lookup("Thurlby Motors")
        assert audit.overall_score == 72
        assert audit.overall_rag == RagStatus.AMBER
        assert audit.firm_type == FirmType.AR
        assert len(audit.sections) == 9
        assert [a.id for a in audit.key_actions] == [f"tm-{n}" for n in range(1, 8)]

        promos = audit.get_section("financial-promotions")
        assert [c.id for c in promos.controls] == [
            "financial-promotions-a0",
            "financial-promotions-a1",
        ]
        assert promos.summary.rag_status == RagStatus.AMBER
        assert promos.summary.notes.startswith("Missing representative APR")

    def test_notes_keep_typographic_punctuation(self, registry) -> None:
        thurlby = registry.lookup("Thurlby Motors")
        assert thurlby.key_actions[0].notes == (
            "Financial promotions reviewed – representative APR required"
        )
        dynasty = registry.lookup("Dynasty Partners Limited")
        promos = dynasty.get_section("financial-promotions")
        assert promos.summary.notes.endswith("'We will receive commission…'")

    @pytest.mark.parametrize("name,score,rag,firm", [
        ("Shirlaws Limited", 38, RagStatus.RED, FirmType.AR),
        ("Dynasty Partners Limited", 68, RagStatus.AMBER, FirmType.DA),
        ("Platinum Vehicle Specialists", 42, RagStatus.RED, FirmType.AR),
    ])
    def test_other_real_dealers(self, registry, name, score, rag, firm) -> None:
        audit = registry.lookup(name)
        assert (audit.overall_score, audit.overall_rag, audit.firm_type) == (score, rag, firm)

    @pytest.mark.parametrize("name", REAL_NAMES)
    def test_invariants(self, registry, name) -> None:
        audit = registry.lookup(name)
        assert_audit_invariants(audit)
        assert_rating_correlation(audit)

    def test_lookups_are_independent(self, registry) -> None:
        first = registry.lookup("Shirlaws Limited")
        first.key_actions[0].notes = "changed"
        first.sections.pop()
        second = registry.lookup("Shirlaws Limited")
        assert second.key_actions[0].notes != "changed"
        assert len(second.sections) == 9

    def test_custom_records(self) -> None:
        registry = OverrideRegistry(load_override_pack_from_string(_pack_yaml("Custom Motors")))
        assert registry.dealer_names == ["Custom Motors"]
        audit = registry.lookup("Custom Motors")
        assert audit.overall_rag == RagStatus.GREEN
        assert len(audit.all_controls) == 9
