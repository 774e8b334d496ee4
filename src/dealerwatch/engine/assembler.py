"""
DealerWatch Engine: Audit Assembler

Entry point of the audit engine. For a (dealer name, dealer index) pair it
resolves where the audit comes from, then either returns the hand-authored
override audit or generates one:

    nine section generators -> section summaries -> overall roll-up
    -> sentiment -> key actions -> DealerAudit

Every call builds a new record. Nothing is cached between calls.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from functools import lru_cache
from typing import Optional, Union

from ..generation.controls import generate_controls
from ..generation.identity import firm_type_for_index
from ..models import (
    AUDIT_SECTIONS,
    AuditSection,
    ControlResult,
    DealerAudit,
    RagStatus,
    SentimentCategory,
)
from .actions import synthesize_key_actions
from .overrides import OverrideRegistry
from .summary import count_ratings, rollup_rag, summarize

logger = logging.getLogger(__name__)


SENTIMENT_SEED_MULTIPLIER = 37

# Generated audits all report the same review date
GENERATED_AUDIT_DATE = "05 Feb 2026"

ASSURANCE_TEMPLATES: dict[RagStatus, str] = {
    RagStatus.GREEN: (
        "{name} remains compliant, well-controlled, and aligned with FCA "
        "expectations, with ongoing monitoring in place."
    ),
    RagStatus.AMBER: (
        "{name} remains mainly compliant with minor risks raised. "
        "Continuous monitoring as BAU."
    ),
    RagStatus.RED: (
        "TCG recommends a review into the firm's compliance controls before proceeding."
    ),
}


# =============================================================================
# Audit Source
# =============================================================================

@dataclass(frozen=True)
class GeneratedSource:
    """The audit is synthesized from the dealer index."""
    kind: str = "generated"


@dataclass(frozen=True)
class OverrideSource:
    """The audit is the hand-authored record for a real dealer."""
    audit: DealerAudit
    kind: str = "override"


AuditSource = Union[GeneratedSource, OverrideSource]


# =============================================================================
# Numeric Helpers
# =============================================================================

def round_half_up(value: float, places: int = 0) -> float:
    """Round to `places` decimals with halves going away from zero (2.5 -> 3, 6.25 -> 6.3)."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def percentage(part: int, whole: int) -> int:
    """Integer percentage rounded half up; 0 when whole is 0."""
    if whole <= 0:
        return 0
    return (200 * part + whole) // (2 * whole)


def _clamp_score(value: float) -> float:
    return min(10.0, max(0.0, value))


def build_sentiment(dealer_index: int) -> tuple[float, float, list[SentimentCategory]]:
    """
    Derive the sentiment score, trend and the three categories.

    Returns:
        (score, trend, [Reputation, Visibility, Performance])
    """
    seed = dealer_index * SENTIMENT_SEED_MULTIPLIER
    base = 6.0 + (seed % 35) / 10
    trend = ((seed % 10) - 5) / 10

    def category(label: str, offset: float, category_trend: float) -> SentimentCategory:
        return SentimentCategory(
            label=label,
            score=_clamp_score(round_half_up(base + offset, 1)),
            trend=round_half_up(category_trend, 1),
        )

    categories = [
        category("Reputation", ((seed % 7) - 3) / 10, ((seed % 12) - 6) / 10),
        category("Visibility", ((seed % 5) - 2) / 10, ((seed % 8) - 4) / 10),
        category("Performance", ((seed % 9) - 4) / 10, ((seed % 6) - 3) / 10),
    ]
    return _clamp_score(round_half_up(base, 1)), round_half_up(trend, 1), categories


def assurance_statement(dealer_name: str, overall_rag: RagStatus) -> str:
    return ASSURANCE_TEMPLATES[overall_rag].format(name=dealer_name)


# =============================================================================
# Assembler
# =============================================================================

class AuditAssembler:
    """
    Builds dealer audits.

    Usage:
        assembler = AuditAssembler()
        audit = assembler.generate("Thurlby Motors", 0)
    """

    def __init__(self, registry: Optional[OverrideRegistry] = None) -> None:
        self.registry = registry if registry is not None else OverrideRegistry.default()

    def resolve_source(self, dealer_name: str) -> AuditSource:
        """Decide once whether the audit is an override or generated."""
        audit = self.registry.lookup(dealer_name)
        if audit is not None:
            return OverrideSource(audit=audit)
        return GeneratedSource()

    def generate(self, dealer_name: str, dealer_index: int) -> DealerAudit:
        """
        Build the audit for a dealer.

        The name and index are trusted to describe the same dealer; override
        dealers ignore the index entirely.

        Args:
            dealer_name: Exact dealer name
            dealer_index: Stable dealer index (directory position)

        Returns:
            A newly built DealerAudit
        """
        start = time.perf_counter()
        source = self.resolve_source(dealer_name)
        if isinstance(source, OverrideSource):
            audit = source.audit
        else:
            audit = self._generate(dealer_name, dealer_index)

        logger.debug(
            "Assembled audit",
            extra={
                "dealer_name": dealer_name,
                "dealer_index": dealer_index,
                "audit_source": source.kind,
                "duration_ms": round((time.perf_counter() - start) * 1000, 3),
            },
        )
        return audit

    def _generate(self, dealer_name: str, dealer_index: int) -> DealerAudit:
        sections: list[AuditSection] = []
        for definition in AUDIT_SECTIONS:
            controls = generate_controls(definition.id, dealer_index)
            sections.append(AuditSection(
                id=definition.id,
                name=definition.name,
                icon=definition.icon,
                controls=controls,
                summary=summarize(controls),
            ))

        all_controls = [c for s in sections for c in s.controls]
        _, amber, red = count_ratings(all_controls)
        overall_rag = rollup_rag(amber, red)
        passed = sum(1 for c in all_controls if c.result == ControlResult.PASS)
        score, trend, categories = build_sentiment(dealer_index)

        return DealerAudit(
            dealer_name=dealer_name,
            overall_rag=overall_rag,
            overall_score=percentage(passed, len(all_controls)),
            customer_sentiment_score=score,
            customer_sentiment_trend=trend,
            sentiment_categories=categories,
            last_audit_date=GENERATED_AUDIT_DATE,
            sections=sections,
            key_actions=synthesize_key_actions(sections, dealer_index),
            firm_type=firm_type_for_index(dealer_index),
            assurance_statement=assurance_statement(dealer_name, overall_rag),
        )


@lru_cache(maxsize=1)
def default_assembler() -> AuditAssembler:
    """Process-wide assembler backed by the bundled override pack."""
    return AuditAssembler()


def generate_dealer_audit(dealer_name: str, dealer_index: int) -> DealerAudit:
    """Build the audit for a dealer with the default assembler."""
    return default_assembler().generate(dealer_name, dealer_index)
