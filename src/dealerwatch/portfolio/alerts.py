"""
Alert aggregation: every amber or red control across the portfolio.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional

from ..engine.assembler import AuditAssembler
from ..models import Dealer, DealerAudit, RagStatus


@dataclass(frozen=True)
class Alert:
    """One control needing attention at one dealer."""
    dealer_index: int
    dealer_name: str
    section_id: str
    section_name: str
    control_id: str
    control_area: str
    rating: RagStatus
    comments: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "dealer_index": self.dealer_index,
            "dealer_name": self.dealer_name,
            "section_id": self.section_id,
            "section_name": self.section_name,
            "control_id": self.control_id,
            "control_area": self.control_area,
            "rating": self.rating.value,
            "comments": self.comments,
        }


def alerts_for_audit(audit: DealerAudit, dealer_index: int) -> list[Alert]:
    """Amber and red controls of one audit, in section order."""
    alerts = []
    for section in audit.sections:
        for control in section.controls:
            if control.risk_rating == RagStatus.GREEN:
                continue
            alerts.append(Alert(
                dealer_index=dealer_index,
                dealer_name=audit.dealer_name,
                section_id=section.id,
                section_name=section.name,
                control_id=control.id,
                control_area=control.control_area,
                rating=control.risk_rating,
                comments=control.comments,
            ))
    return alerts


def collect_alerts(
    dealers: Iterable[Dealer],
    assembler: AuditAssembler,
    limit: Optional[int] = None,
) -> list[Alert]:
    """
    Flatten the amber and red controls of every dealer's audit.

    Red alerts come before amber; within a rating, alerts keep dealer
    index order and then section order.

    Args:
        dealers: Dealers in directory order (position is the index)
        assembler: Audit assembler used to build each audit
        limit: Maximum number of alerts to return
    """
    alerts: list[Alert] = []
    for index, dealer in enumerate(dealers):
        alerts.extend(alerts_for_audit(assembler.generate(dealer.name, index), index))

    # Stable sort keeps index and section order within a rating
    alerts.sort(key=lambda a: 0 if a.rating == RagStatus.RED else 1)
    if limit is not None:
        return alerts[:limit]
    return alerts
