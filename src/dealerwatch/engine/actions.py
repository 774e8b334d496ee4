"""
DealerWatch Engine: Key-Action Synthesizer

Builds the ordered key-action list for a generated audit:

1. One remediation action per failing or partial control, in section and
   control order
2. The first three business-as-usual actions
3. The first optional enhancement

The combined list is truncated to MAX_KEY_ACTIONS, so remediation always
comes first.
"""
from __future__ import annotations

from dataclasses import replace
from typing import Sequence

from ..models import (
    ActionPriority,
    ActionStatus,
    AuditSection,
    ControlCheck,
    KeyAction,
    RagStatus,
)


MAX_KEY_ACTIONS = 12

OWNERS: tuple[str, ...] = (
    "Compliance",
    "Digital / Compliance",
    "Marketing / Compliance",
    "Sales / Compliance",
    "Customer Ops",
    "Risk",
    "Compliance / IT",
)

DUE_DATES: tuple[str, ...] = (
    "Immediate",
    "Q1 2026",
    "Q2 2026",
    "Ongoing",
    "Annual (Nov)",
)

BAU_ACTIONS_USED = 3
OPTIONAL_ACTIONS_USED = 1


# =============================================================================
# Fixed Action Pools
# =============================================================================

BAU_ACTIONS: tuple[KeyAction, ...] = (
    KeyAction(
        id="bau-governance",
        section="Corporate Governance",
        action="Maintain director & PSC sanctions screening as BAU monitoring",
        priority=ActionPriority.MEDIUM,
        owner="Compliance",
        due_date="Ongoing",
        status=ActionStatus.BAU,
        notes="Completed via CreditSafe; no adverse findings",
    ),
    KeyAction(
        id="bau-permissions",
        section="Permissions",
        action="Continue quarterly FCA Register & AR status verification",
        priority=ActionPriority.MEDIUM,
        owner="Compliance",
        due_date="Ongoing",
        status=ActionStatus.BAU,
        notes="Permissions confirmed; no issues identified",
    ),
    KeyAction(
        id="bau-sales",
        section="Sales Process",
        action="Maintain automated pre-contract disclosure logging via Klassify / iVendi",
        priority=ActionPriority.HIGH,
        owner="Compliance",
        due_date="Ongoing",
        status=ActionStatus.BAU,
        notes="Operating effectively; no remediation required",
    ),
    KeyAction(
        id="bau-consumer",
        section="Consumer Duty",
        action="Continue quarterly fair-value benchmarking reviews",
        priority=ActionPriority.HIGH,
        owner="Compliance",
        due_date="Ongoing",
        status=ActionStatus.BAU,
        notes="Benchmarking active; no outliers identified",
    ),
    KeyAction(
        id="bau-crime",
        section="Financial Crime / Fraud",
        action="Maintain KYC / AML & sanctions screening at application stage",
        priority=ActionPriority.HIGH,
        owner="Compliance",
        due_date="Ongoing",
        status=ActionStatus.BAU,
        notes="CreditSafe checks completed; all clear",
    ),
)

OPTIONAL_ACTIONS: tuple[KeyAction, ...] = (
    KeyAction(
        id="opt-governance",
        section="Corporate Governance",
        action="Explore automation for web / registry consistency checks (Co House, FCA, ICO)",
        priority=ActionPriority.LOW,
        owner="Digital / Compliance",
        due_date="Q1 2026",
        status=ActionStatus.OPTIONAL,
        notes="Automation enhancement, not a gap; manual controls effective",
    ),
    KeyAction(
        id="opt-permissions",
        section="Permissions",
        action="Assess feasibility of API-based FCA permission checks",
        priority=ActionPriority.LOW,
        owner="Compliance / IT",
        due_date="Q2 2026",
        status=ActionStatus.OPTIONAL,
        notes="Currently effective and evidenced; optional enhancement",
    ),
)


# =============================================================================
# Synthesis
# =============================================================================

def _priority_for(rating: RagStatus) -> ActionPriority:
    if rating == RagStatus.RED:
        return ActionPriority.HIGH
    if rating == RagStatus.AMBER:
        return ActionPriority.MEDIUM
    return ActionPriority.LOW


def remediation_action(
    section: AuditSection,
    control: ControlCheck,
    dealer_index: int,
    emitted: int,
) -> KeyAction:
    """
    Build the remediation action for one failing or partial control.

    Args:
        section: Section containing the control
        control: The control needing remediation
        dealer_index: Stable dealer index
        emitted: Number of remediation actions already produced
    """
    red = control.risk_rating == RagStatus.RED
    rotation = dealer_index + emitted
    return KeyAction(
        id=f"action-{control.id}",
        section=section.name,
        action=f"Remediate: {control.control_area}",
        priority=_priority_for(control.risk_rating),
        owner=OWNERS[rotation % len(OWNERS)],
        due_date="Immediate" if red else DUE_DATES[rotation % len(DUE_DATES)],
        status=ActionStatus.PENDING if red else ActionStatus.IN_PROGRESS,
        notes=control.comments,
    )


def synthesize_key_actions(sections: Sequence[AuditSection], dealer_index: int) -> list[KeyAction]:
    """
    Synthesize the key actions for a generated audit.

    Returns:
        At most MAX_KEY_ACTIONS actions, remediation first
    """
    actions: list[KeyAction] = []
    for section in sections:
        for control in section.controls:
            if control.needs_remediation:
                actions.append(remediation_action(section, control, dealer_index, len(actions)))

    # Pool entries are shared constants; hand out copies
    actions.extend(replace(a) for a in BAU_ACTIONS[:BAU_ACTIONS_USED])
    actions.extend(replace(a) for a in OPTIONAL_ACTIONS[:OPTIONAL_ACTIONS_USED])
    return actions[:MAX_KEY_ACTIONS]
