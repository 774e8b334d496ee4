"""
Key-action synthesizer tests.
"""
from __future__ import annotations

from dealerwatch.engine import (
    BAU_ACTIONS,
    MAX_KEY_ACTIONS,
    OPTIONAL_ACTIONS,
    remediation_action,
    synthesize_key_actions,
)
from dealerwatch.models import ActionPriority, ActionStatus, RagStatus

from conftest import make_control, make_section


G, A, R = RagStatus.GREEN, RagStatus.AMBER, RagStatus.RED


class TestRemediationAction:
    """One remediation action per failing or partial control."""

    def test_red_control(self) -> None:
        section = make_section(id="sales", name="Sales Process", ratings=[R])
        control = section.controls[0]
        action = remediation_action(section, control, dealer_index=7, emitted=1)

        assert action.id == f"action-{control.id}"
        assert action.section == "Sales Process"
        assert action.action == f"Remediate: {control.control_area}"
        assert action.priority == ActionPriority.HIGH
        assert action.owner == "Digital / Compliance"
        assert action.due_date == "Immediate"
        assert action.status == ActionStatus.PENDING
        assert action.notes == control.comments

    def test_amber_control(self) -> None:
        section = make_section(ratings=[A])
        action = remediation_action(section, section.controls[0], dealer_index=7, emitted=0)
        assert action.priority == ActionPriority.MEDIUM
        assert action.owner == "Compliance"
        assert action.due_date == "Q2 2026"
        assert action.status == ActionStatus.IN_PROGRESS


class TestSynthesizeKeyActions:
    """Ordering and truncation."""

    def test_clean_audit_gets_bau_and_optional(self) -> None:
        actions = synthesize_key_actions([make_section(ratings=[G, G])], dealer_index=1)
        assert [a.id for a in actions] == [
            "bau-governance",
            "bau-permissions",
            "bau-sales",
            "opt-governance",
        ]
        assert actions[-1].status == ActionStatus.OPTIONAL

    def test_remediation_first_in_control_order(self) -> None:
        sections = [
            make_section(id="governance", ratings=[G, A]),
            make_section(id="sales", name="Sales Process", ratings=[R, G]),
        ]
        actions = synthesize_key_actions(sections, dealer_index=3)
        assert [a.id for a in actions[:2]] == ["action-governance-1", "action-sales-0"]
        assert actions[2].id == "bau-governance"

    def test_owner_rotates_with_emitted_count(self) -> None:
        actions = synthesize_key_actions([make_section(ratings=[A, A, A])], dealer_index=0)
        assert [a.owner for a in actions[:3]] == [
            "Compliance",
            "Digital / Compliance",
            "Marketing / Compliance",
        ]

    def test_truncated_to_max(self) -> None:
        sections = [make_section(id=f"s{n}", ratings=[R, A, R]) for n in range(5)]
        actions = synthesize_key_actions(sections, dealer_index=2)
        assert len(actions) == MAX_KEY_ACTIONS
        assert all(a.id.startswith("action-") for a in actions)

    def test_pool_entries_are_copies(self) -> None:
        actions = synthesize_key_actions([make_section()], dealer_index=4)
        actions[0].notes = "edited"
        assert BAU_ACTIONS[0].notes != "edited"
        assert len(OPTIONAL_ACTIONS) == 2
