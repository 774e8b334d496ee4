"""
Per-section control generator tests.

Covers fixed list lengths and ids, the seed-modulus branch selection and
the result/rating pairing.
"""
from __future__ import annotations

import pytest

from dealerwatch import UnknownSectionError
from dealerwatch.generation import SECTION_GENERATORS, SECTION_PRIMES, generate_controls
from dealerwatch.models import SECTION_IDS, ControlResult, RagStatus


EXPECTED_LENGTHS = {
    "governance": 5,
    "digital-reporting": 2,
    "permissions": 4,
    "sales": 3,
    "consumer-duty": 5,
    "financial-crime": 5,
    "financial-promotions": 3,
    "communications": 3,
    "conduct": 1,
}

ID_PREFIXES = {
    "governance": "gov",
    "digital-reporting": "digital",
    "permissions": "perm",
    "sales": "sales",
    "consumer-duty": "duty",
    "financial-crime": "crime",
    "financial-promotions": "promo",
    "communications": "comms",
    "conduct": "conduct",
}

PAIRING = {
    ControlResult.PASS: RagStatus.GREEN,
    ControlResult.PARTIAL: RagStatus.AMBER,
    ControlResult.FAIL: RagStatus.RED,
}


def _by_id(section_id: str, index: int) -> dict:
    return {c.id: c for c in generate_controls(section_id, index)}


class TestRegistry:
    """Test the generator registry."""

    def test_every_section_has_a_generator(self) -> None:
        assert set(SECTION_GENERATORS) == set(SECTION_IDS)
        assert set(SECTION_PRIMES) == set(SECTION_IDS)

    def test_unknown_section_raises(self) -> None:
        with pytest.raises(UnknownSectionError) as exc_info:
            generate_controls("marketing", 3)
        assert exc_info.value.code == "DW_UNKNOWN_SECTION"
        assert exc_info.value.details["section_id"] == "marketing"


class TestShape:
    """Fixed lengths and ids, independent of the index."""

    @pytest.mark.parametrize("section_id", SECTION_IDS)
    @pytest.mark.parametrize("index", [0, 1, 7, 60, 203])
    def test_fixed_length(self, section_id: str, index: int) -> None:
        assert len(generate_controls(section_id, index)) == EXPECTED_LENGTHS[section_id]

    @pytest.mark.parametrize("section_id", SECTION_IDS)
    def test_stable_ids(self, section_id: str) -> None:
        prefix = ID_PREFIXES[section_id]
        expected = [f"{prefix}-{n}" for n in range(1, EXPECTED_LENGTHS[section_id] + 1)]
        assert [c.id for c in generate_controls(section_id, 11)] == expected
        assert [c.id for c in generate_controls(section_id, 12)] == expected

    def test_total_control_count(self) -> None:
        assert sum(len(generate_controls(s, 5)) for s in SECTION_IDS) == 31


class TestBranchSelection:
    """seed % k == 0 picks the non-pass branch."""

    def test_index_zero_trips_every_variable_control(self) -> None:
        results = [c.result for s in SECTION_IDS for c in generate_controls(s, 0)]
        assert results.count(ControlResult.FAIL) == 8
        assert results.count(ControlResult.PARTIAL) == 12
        assert results.count(ControlResult.PASS) == 11

    def test_index_one_passes_everything(self) -> None:
        for section_id in SECTION_IDS:
            for control in generate_controls(section_id, 1):
                assert control.result == ControlResult.PASS, control.id

    def test_governance_branches(self) -> None:
        # index 5: seed 35 -> 35 % 5 == 0, 35 % 8 != 0
        controls = _by_id("governance", 5)
        assert controls["gov-2"].result == ControlResult.PARTIAL
        assert controls["gov-2"].comments == "Minor discrepancy in trading name on ICO register"
        assert controls["gov-4"].result == ControlResult.PASS

        # index 8: seed 56 -> 56 % 8 == 0
        controls = _by_id("governance", 8)
        assert controls["gov-4"].result == ControlResult.FAIL
        assert controls["gov-4"].risk_rating == RagStatus.RED

    def test_index_seven_sections(self) -> None:
        crime = generate_controls("financial-crime", 7)
        assert [c.id for c in crime] == ["crime-1", "crime-2", "crime-3", "crime-4", "crime-5"]
        assert all(c.result == ControlResult.PASS for c in crime)

        # seed 287 = 7 * 41
        assert _by_id("digital-reporting", 7)["digital-1"].result == ControlResult.PARTIAL
        # seed 91 = 7 * 13
        sales = _by_id("sales", 7)
        assert sales["sales-2"].result == ControlResult.FAIL
        assert sales["sales-1"].result == ControlResult.PASS

    def test_fixed_controls_always_pass(self) -> None:
        for index in range(0, 60):
            assert _by_id("governance", index)["gov-1"].result == ControlResult.PASS
            assert _by_id("financial-crime", index)["crime-1"].result == ControlResult.PASS

    def test_deterministic(self) -> None:
        for section_id in SECTION_IDS:
            assert generate_controls(section_id, 42) == generate_controls(section_id, 42)


class TestPairing:
    """Generated controls keep pass/green, partial/amber, fail/red."""

    @pytest.mark.parametrize("index", range(0, 120, 3))
    def test_result_matches_rating(self, index: int) -> None:
        for section_id in SECTION_IDS:
            for control in generate_controls(section_id, index):
                assert control.risk_rating == PAIRING[control.result], control.id
