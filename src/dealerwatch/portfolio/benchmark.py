"""
Section benchmarking: compare a dealer's per-section pass rates against the
portfolio average or against another dealer.

A section's pass rate is the share of its controls rated green, as a whole
percentage rounded half up (0 for an empty section).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional, Sequence

from ..engine.assembler import AuditAssembler, percentage
from ..models import Dealer, DealerAudit, RagStatus
from .stats import portfolio_stats


PORTFOLIO_LABEL = "Portfolio Avg"


@dataclass(frozen=True)
class SectionBenchmark:
    id: str
    name: str
    dealer_pass_rate: int
    comparison_pass_rate: int

    @property
    def difference(self) -> int:
        return self.dealer_pass_rate - self.comparison_pass_rate

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "dealer_pass_rate": self.dealer_pass_rate,
            "comparison_pass_rate": self.comparison_pass_rate,
            "difference": self.difference,
        }


@dataclass(frozen=True)
class DealerBenchmark:
    """
    A dealer compared against the portfolio or against a second dealer.

    Attributes:
        dealer_name: Dealer being benchmarked
        dealer_score: Directory score of that dealer
        dealer_rag: Directory RAG of that dealer
        comparison_name: Second dealer's name, or PORTFOLIO_LABEL
        comparison_score: Second dealer's score, or the portfolio average
        comparison_rag: Second dealer's RAG (None against the portfolio)
        sections: Per-section comparison in audit order
    """
    dealer_name: str
    dealer_score: int
    dealer_rag: RagStatus
    comparison_name: str
    comparison_score: int
    comparison_rag: Optional[RagStatus]
    sections: tuple[SectionBenchmark, ...]

    @property
    def score_difference(self) -> int:
        return self.dealer_score - self.comparison_score

    def to_dict(self) -> dict[str, Any]:
        return {
            "dealer_name": self.dealer_name,
            "dealer_score": self.dealer_score,
            "dealer_rag": self.dealer_rag.value,
            "comparison_name": self.comparison_name,
            "comparison_score": self.comparison_score,
            "comparison_rag": self.comparison_rag.value if self.comparison_rag else None,
            "score_difference": self.score_difference,
            "sections": [s.to_dict() for s in self.sections],
        }


# =============================================================================
# Pass Rates
# =============================================================================

def section_pass_rates(audit: DealerAudit) -> dict[str, int]:
    """Pass rate per section id, in audit order."""
    return {
        s.id: percentage(s.summary.green, s.summary.total)
        for s in audit.sections
    }


def portfolio_section_averages(
    dealers: Iterable[Dealer],
    assembler: AuditAssembler,
) -> dict[str, int]:
    """
    Portfolio-wide pass rate per section.

    Pools green and total control counts across every dealer before taking
    the percentage, so dealers with more controls in a section weigh more.
    """
    pooled: dict[str, list[int]] = {}
    for index, dealer in enumerate(dealers):
        audit = assembler.generate(dealer.name, index)
        for section in audit.sections:
            green_total = pooled.setdefault(section.id, [0, 0])
            green_total[0] += section.summary.green
            green_total[1] += section.summary.total
    return {sid: percentage(green, total) for sid, (green, total) in pooled.items()}


def _compare_sections(audit: DealerAudit, comparison: dict[str, int]) -> tuple[SectionBenchmark, ...]:
    rates = section_pass_rates(audit)
    return tuple(
        SectionBenchmark(
            id=s.id,
            name=s.name,
            dealer_pass_rate=rates[s.id],
            comparison_pass_rate=comparison.get(s.id, 0),
        )
        for s in audit.sections
    )


# =============================================================================
# Benchmarks
# =============================================================================

def benchmark_against_portfolio(
    dealers: Sequence[Dealer],
    index: int,
    assembler: AuditAssembler,
    averages: Optional[dict[str, int]] = None,
) -> DealerBenchmark:
    """
    Benchmark the dealer at `index` against the portfolio.

    Args:
        dealers: Dealers in directory order
        index: Position of the dealer to benchmark
        assembler: Audit assembler
        averages: Precomputed portfolio_section_averages(), if available
    """
    dealer = dealers[index]
    if averages is None:
        averages = portfolio_section_averages(dealers, assembler)
    audit = assembler.generate(dealer.name, index)
    return DealerBenchmark(
        dealer_name=dealer.name,
        dealer_score=dealer.score,
        dealer_rag=dealer.rag,
        comparison_name=PORTFOLIO_LABEL,
        comparison_score=portfolio_stats(dealers).average_score,
        comparison_rag=None,
        sections=_compare_sections(audit, averages),
    )


def benchmark_against_dealer(
    dealers: Sequence[Dealer],
    index: int,
    other_index: int,
    assembler: AuditAssembler,
) -> DealerBenchmark:
    """
    Benchmark the dealer at `index` against the dealer at `other_index`.

    Raises:
        ValueError: If both indices name the same dealer
    """
    if index == other_index:
        raise ValueError("Cannot benchmark a dealer against itself")
    dealer = dealers[index]
    other = dealers[other_index]
    audit = assembler.generate(dealer.name, index)
    other_rates = section_pass_rates(assembler.generate(other.name, other_index))
    return DealerBenchmark(
        dealer_name=dealer.name,
        dealer_score=dealer.score,
        dealer_rag=dealer.rag,
        comparison_name=other.name,
        comparison_score=other.score,
        comparison_rag=other.rag,
        sections=_compare_sections(audit, other_rates),
    )
