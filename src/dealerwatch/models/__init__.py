"""
DealerWatch Models

All domain models for the dealer-compliance audit engine.

    from dealerwatch.models import (
        # Enums
        RagStatus, ControlResult, FirmType, Trend,
        # Dealer
        Dealer,
        # Audit
        ControlCheck, AuditSection, KeyAction, DealerAudit,
    )
"""
from __future__ import annotations

# =============================================================================
# Enums
# =============================================================================
from .enums import (
    ActionPriority,
    ActionStatus,
    ControlResult,
    FirmType,
    GenerationMode,
    RagStatus,
    Trend,
)

# =============================================================================
# Dealer Identity
# =============================================================================
from .dealer import (
    RAG_SCORE_BANDS,
    Dealer,
)

# =============================================================================
# Audit Record
# =============================================================================
from .audit import (
    AUDIT_SECTIONS,
    SECTION_IDS,
    AuditSection,
    ControlCheck,
    DealerAudit,
    KeyAction,
    SectionDefinition,
    SectionSummary,
    SentimentCategory,
)

# =============================================================================
# Override Records
# =============================================================================
from .override import (
    OverrideRecord,
    SectionCounts,
)

__all__ = [
    # Enums
    "ActionPriority",
    "ActionStatus",
    "ControlResult",
    "FirmType",
    "GenerationMode",
    "RagStatus",
    "Trend",
    # Dealer
    "RAG_SCORE_BANDS",
    "Dealer",
    # Audit
    "AUDIT_SECTIONS",
    "SECTION_IDS",
    "AuditSection",
    "ControlCheck",
    "DealerAudit",
    "KeyAction",
    "SectionDefinition",
    "SectionSummary",
    "SentimentCategory",
    # Override
    "OverrideRecord",
    "SectionCounts",
]
