"""
DealerWatch Override Models

Domain form of the hand-authored audits for the real dealers, as loaded
from the override pack. The registry turns an OverrideRecord into a fresh
DealerAudit on every lookup.
"""
from __future__ import annotations

from dataclasses import dataclass

from .audit import KeyAction, SentimentCategory
from .enums import FirmType, RagStatus


@dataclass(frozen=True)
class SectionCounts:
    """
    Fixed control counts and reviewer notes for one section.

    Attributes:
        section_id: One of the nine audit section ids
        green: Controls passed
        amber: Controls partially passed
        red: Controls failed
        notes: Narrative notes, used as section notes and as comments on
            non-green fabricated controls
    """
    section_id: str
    green: int
    amber: int
    red: int
    notes: str

    @property
    def total(self) -> int:
        return self.green + self.amber + self.red


@dataclass(frozen=True)
class OverrideRecord:
    """A complete hand-authored audit for one real dealer."""
    dealer_name: str
    overall_rag: RagStatus
    overall_score: int
    firm_type: FirmType
    last_audit_date: str
    customer_sentiment_score: float
    customer_sentiment_trend: float
    sentiment_categories: tuple[SentimentCategory, ...]
    sections: tuple[SectionCounts, ...]
    key_actions: tuple[KeyAction, ...]
    assurance_statement: str
