"""
DealerWatch Dealer Models

Identity record for a dealer in the monitored portfolio.

Dealer records are frozen: the directory is built once per process and
shared read-only by every caller.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Optional

from .enums import FirmType, RagStatus, Trend


# Score bands per RAG status (inclusive)
RAG_SCORE_BANDS: dict[RagStatus, tuple[int, int]] = {
    RagStatus.RED: (30, 54),
    RagStatus.AMBER: (55, 79),
    RagStatus.GREEN: (80, 100),
}


@dataclass(frozen=True)
class Dealer:
    """
    A dealer's identity record.

    Attributes:
        name: Dealer name (unique key for the override registry)
        trading_name: Name the dealer trades under
        score: Compliance score (0-100)
        rag: RAG status matching the score band
        region: Town or city the dealer trades from
        firm_type: AR or DA
        principal_firm: Principal firm reference (AR only)
        address: First line of the trading address
        postcode: Trading postcode
        phone: Main telephone number
        registration_number: Company registration number
        last_audit: Date of last audit, "DD Mon YYYY"
        trend: Score direction since the previous audit
    """
    name: str
    trading_name: str
    score: int
    rag: RagStatus
    region: str
    firm_type: FirmType
    principal_firm: Optional[str]
    address: str
    postcode: str
    phone: str
    registration_number: str
    last_audit: str
    trend: Trend

    @property
    def score_in_band(self) -> bool:
        """Check if the score lies inside its RAG band."""
        low, high = RAG_SCORE_BANDS[self.rag]
        return low <= self.score <= high

    def with_fields(self, **changes: Any) -> Dealer:
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "name": self.name,
            "trading_name": self.trading_name,
            "score": self.score,
            "rag": self.rag.value,
            "region": self.region,
            "firm_type": self.firm_type.value,
            "principal_firm": self.principal_firm,
            "address": self.address,
            "postcode": self.postcode,
            "phone": self.phone,
            "registration_number": self.registration_number,
            "last_audit": self.last_audit,
            "trend": self.trend.value,
        }
