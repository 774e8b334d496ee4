"""
DealerWatch Engine

Audit assembly: section roll-ups, the real-dealer override registry,
key-action synthesis and the assembler entry point.

    from dealerwatch.engine import generate_dealer_audit

    audit = generate_dealer_audit("Thurlby Motors", 0)
"""
from __future__ import annotations

from .actions import (
    BAU_ACTIONS,
    DUE_DATES,
    MAX_KEY_ACTIONS,
    OPTIONAL_ACTIONS,
    OWNERS,
    remediation_action,
    synthesize_key_actions,
)
from .assembler import (
    GENERATED_AUDIT_DATE,
    AuditAssembler,
    AuditSource,
    GeneratedSource,
    OverrideSource,
    assurance_statement,
    build_sentiment,
    default_assembler,
    generate_dealer_audit,
    percentage,
    round_half_up,
)
from .overrides import OverrideRegistry, build_sections_from_counts
from .summary import SUMMARY_NOTES, count_ratings, rollup_rag, summarize

__all__ = [
    # Actions
    "BAU_ACTIONS",
    "DUE_DATES",
    "MAX_KEY_ACTIONS",
    "OPTIONAL_ACTIONS",
    "OWNERS",
    "remediation_action",
    "synthesize_key_actions",
    # Assembler
    "GENERATED_AUDIT_DATE",
    "AuditAssembler",
    "AuditSource",
    "GeneratedSource",
    "OverrideSource",
    "assurance_statement",
    "build_sentiment",
    "default_assembler",
    "generate_dealer_audit",
    "percentage",
    "round_half_up",
    # Overrides
    "OverrideRegistry",
    "build_sections_from_counts",
    # Summary
    "SUMMARY_NOTES",
    "count_ratings",
    "rollup_rag",
    "summarize",
]
