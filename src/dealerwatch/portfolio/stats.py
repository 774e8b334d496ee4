"""
Portfolio-level RAG counts and average score.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from ..models import Dealer, RagStatus


@dataclass(frozen=True)
class PortfolioStats:
    """RAG distribution of the dealer portfolio."""
    green: int
    amber: int
    red: int
    total: int
    average_score: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "green": self.green,
            "amber": self.amber,
            "red": self.red,
            "total": self.total,
            "average_score": self.average_score,
        }


def portfolio_stats(dealers: Iterable[Dealer]) -> PortfolioStats:
    """
    Count dealers per RAG status and average their scores.

    The average is rounded half up; an empty portfolio averages 0.
    """
    counts = {RagStatus.GREEN: 0, RagStatus.AMBER: 0, RagStatus.RED: 0}
    total = 0
    score_sum = 0
    for dealer in dealers:
        counts[dealer.rag] += 1
        total += 1
        score_sum += dealer.score

    average = (2 * score_sum + total) // (2 * total) if total else 0
    return PortfolioStats(
        green=counts[RagStatus.GREEN],
        amber=counts[RagStatus.AMBER],
        red=counts[RagStatus.RED],
        total=total,
        average_score=average,
    )
