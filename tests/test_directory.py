"""
Dealer identity and directory tests.

Covers the index-derived identity fields, seeded reproducibility of the
directory, the real dealers at the head of the collection and duplicate
injection.
"""
from __future__ import annotations

import pytest

from dealerwatch import DealerNotFoundError
from dealerwatch.generation import (
    DUPLICATE_RULES,
    REAL_DEALERS,
    DealerIdentityGenerator,
    DuplicateRule,
    apply_duplicate_rules,
    audit_date,
    build_dealer_directory,
    dealer_name,
    firm_type_for_index,
    pseudo_random,
)
from dealerwatch.models import FirmType, GenerationMode, RagStatus

from conftest import TEST_SEED, make_dealer, make_settings


# =============================================================================
# Identity Fields
# =============================================================================

class TestIdentityFields:
    """Index-derived structural fields."""

    def test_dealer_names(self) -> None:
        assert dealer_name(4) == "Sytner BMW"
        assert dealer_name(5) == "Lookers BMW Liverpool"

    def test_audit_date(self) -> None:
        assert audit_date(5) == "15 Sep 2026"
        assert audit_date(1) == "05 Feb 2026"

    def test_firm_type(self) -> None:
        assert firm_type_for_index(5) == FirmType.DA
        assert firm_type_for_index(10) == FirmType.DA
        assert firm_type_for_index(7) == FirmType.AR

    def test_pseudo_random_range_and_stability(self) -> None:
        for index in range(50):
            value = pseudo_random(index, 13)
            assert 0 <= value < 1
            assert value == pseudo_random(index, 13)

    def test_structural_fields_ignore_seed(self) -> None:
        a = DealerIdentityGenerator(GenerationMode.SEEDED, seed=1).generate(42)
        b = DealerIdentityGenerator(GenerationMode.SEEDED, seed=2).generate(42)
        assert a.name == b.name
        assert a.phone == b.phone
        assert a.postcode == b.postcode
        assert a.registration_number == b.registration_number
        assert a.last_audit == b.last_audit

    def test_principal_firm_only_for_ar(self) -> None:
        generator = DealerIdentityGenerator(GenerationMode.SEEDED, seed=TEST_SEED)
        assert generator.generate(5).principal_firm is None
        assert generator.generate(6).principal_firm is not None

    def test_registration_is_eight_digits(self) -> None:
        generator = DealerIdentityGenerator(GenerationMode.SEEDED, seed=TEST_SEED)
        for index in range(4, 40):
            number = generator.generate(index).registration_number
            assert len(number) == 8 and number.isdigit()


# =============================================================================
# Directory
# =============================================================================

class TestDealerDirectory:
    """build_dealer_directory() and lookups."""

    def test_size(self, directory) -> None:
        assert len(directory) == len(REAL_DEALERS) + 200

    def test_real_dealers_first(self, directory) -> None:
        assert [d.name for d in directory.dealers[:4]] == [
            "Thurlby Motors",
            "Dynasty Partners Limited",
            "Shirlaws Limited",
            "Platinum Vehicle Specialists",
        ]

    def test_generated_dealers_use_their_position(self, directory) -> None:
        assert directory[4].name == dealer_name(4)
        assert directory[5].name == dealer_name(5)
        assert directory[5].last_audit == "15 Sep 2026"

    def test_scores_within_band(self, directory) -> None:
        for dealer in directory:
            assert dealer.score_in_band, dealer.name

    def test_seeded_rebuild_is_identical(self, settings, directory) -> None:
        rebuilt = build_dealer_directory(settings)
        assert rebuilt.dealers == directory.dealers

    def test_different_seed_changes_scores_not_names(self, directory) -> None:
        other = build_dealer_directory(make_settings(), seed=TEST_SEED + 1)
        assert [d.name for d in other] == [d.name for d in directory]
        assert [d.score for d in other] != [d.score for d in directory]

    def test_random_mode_keeps_structure(self) -> None:
        directory = build_dealer_directory(make_settings(dealer_count=30), mode=GenerationMode.RANDOM)
        assert directory.generation_mode == GenerationMode.RANDOM
        assert len(directory) == 34
        assert directory[9].name == dealer_name(9)
        for dealer in directory:
            assert dealer.score_in_band

    def test_rag_distribution_is_plausible(self, directory) -> None:
        generated = directory.dealers[4:]
        greens = sum(1 for d in generated if d.rag == RagStatus.GREEN)
        assert 100 <= greens <= 175

    def test_get_out_of_range(self, directory) -> None:
        with pytest.raises(DealerNotFoundError) as exc_info:
            directory.get(len(directory))
        assert exc_info.value.details["index"] == len(directory)

        with pytest.raises(DealerNotFoundError):
            directory.get(-1)

    def test_find(self, directory) -> None:
        index, dealer = directory.find("Shirlaws Limited")
        assert index == 2
        assert dealer.score == 38

    def test_find_unknown(self, directory) -> None:
        with pytest.raises(DealerNotFoundError) as exc_info:
            directory.find("No Such Motors")
        assert exc_info.value.dealer_name == "No Such Motors"
        assert directory.index_of("No Such Motors") is None

    def test_items_pairs_positions(self, small_directory) -> None:
        for index, dealer in small_directory.items():
            assert small_directory[index] is dealer


# =============================================================================
# Duplicate Injection
# =============================================================================

class TestDuplicateInjection:
    """Duplicate rules applied after generation."""

    def test_rules_applied(self, directory) -> None:
        assert directory[17].phone == directory[5].phone
        assert directory[88].phone == directory[42].phone
        assert directory[63].postcode == directory[29].postcode
        assert directory[63].address == directory[29].address
        assert directory[150].registration_number == directory[9].registration_number
        assert directory[121].registration_number == directory[77].registration_number

    def test_only_listed_fields_copied(self, directory) -> None:
        assert directory[17].name == dealer_name(17)
        assert directory[17].postcode != directory[5].postcode

    def test_rules_outside_directory_skipped(self, small_directory) -> None:
        assert len(small_directory) == 24
        assert small_directory[17].phone == small_directory[5].phone

    def test_no_rules(self) -> None:
        directory = build_dealer_directory(make_settings(), rules=())
        assert directory[17].phone != directory[5].phone

    def test_apply_does_not_mutate_input(self) -> None:
        dealers = [make_dealer(name="A", phone="1"), make_dealer(name="B", phone="2")]
        rule = DuplicateRule(target_index=1, source_index=0, fields=("phone",))
        result = apply_duplicate_rules(dealers, [rule])
        assert result[1].phone == "1"
        assert dealers[1].phone == "2"

    def test_rule_validation(self) -> None:
        with pytest.raises(ValueError):
            DuplicateRule(target_index=3, source_index=1, fields=("name",))
        with pytest.raises(ValueError):
            DuplicateRule(target_index=3, source_index=3, fields=("phone",))

    def test_default_rules(self) -> None:
        assert len(DUPLICATE_RULES) == 5
