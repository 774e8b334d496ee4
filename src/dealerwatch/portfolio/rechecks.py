"""
Re-check schedule for high-scoring dealers.

Dealers scoring 80 or more are re-checked 3, 6, 9 and 12 months after
their last audit. Each re-check is overdue once its date has passed,
due-soon within the 14 days before it, and upcoming otherwise.
"""
from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Iterable, Optional

from ..models import Dealer


RECHECK_SCORE_THRESHOLD = 80
RECHECK_MONTHS: tuple[int, ...] = (3, 6, 9, 12)
DUE_SOON_DAYS = 14

_MONTHS = {name: number for number, name in enumerate(calendar.month_abbr) if name}


class RecheckStatus(str, Enum):
    OVERDUE = "overdue"
    DUE_SOON = "due-soon"
    UPCOMING = "upcoming"


@dataclass(frozen=True)
class RecheckItem:
    """
    One scheduled re-check.

    Attributes:
        dealer_index: Directory position of the dealer
        dealer_name: Dealer name
        last_audit_date: Date of the audit the schedule counts from
        recheck_month: Months after the last audit (3, 6, 9 or 12)
        recheck_date: Date the re-check falls due
        days_overdue: Days past the due date; negative means days until due
        status: overdue / due-soon / upcoming
    """
    dealer_index: int
    dealer_name: str
    last_audit_date: date
    recheck_month: int
    recheck_date: date
    days_overdue: int
    status: RecheckStatus

    @property
    def is_overdue(self) -> bool:
        return self.days_overdue > 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "dealer_index": self.dealer_index,
            "dealer_name": self.dealer_name,
            "last_audit_date": self.last_audit_date.isoformat(),
            "recheck_month": self.recheck_month,
            "recheck_date": self.recheck_date.isoformat(),
            "days_overdue": self.days_overdue,
            "is_overdue": self.is_overdue,
            "status": self.status.value,
        }


def parse_audit_date(value: str) -> date:
    """
    Parse a "DD Mon YYYY" audit date.

    Raises:
        ValueError: If the string is not in that format
    """
    parts = value.split()
    if len(parts) != 3 or parts[1] not in _MONTHS:
        raise ValueError(f"Invalid audit date: {value!r}")
    return date(int(parts[2]), _MONTHS[parts[1]], int(parts[0]))


def add_months(start: date, months: int) -> date:
    """Add calendar months, clamping the day to the end of the target month."""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def _status_for(days_overdue: int) -> RecheckStatus:
    if days_overdue > 0:
        return RecheckStatus.OVERDUE
    if days_overdue > -DUE_SOON_DAYS:
        return RecheckStatus.DUE_SOON
    return RecheckStatus.UPCOMING


def _as_date(now: Optional[date]) -> date:
    if now is None:
        return date.today()
    if isinstance(now, datetime):
        return now.date()
    return now


def generate_recheck_schedule(
    dealers: Iterable[Dealer],
    now: Optional[date] = None,
) -> list[RecheckItem]:
    """
    Build the re-check schedule for every dealer scoring 80 or more.

    Args:
        dealers: Dealers in directory order (position is the index)
        now: Reference date (defaults to today)

    Returns:
        Items sorted most overdue first
    """
    today = _as_date(now)
    items: list[RecheckItem] = []
    for index, dealer in enumerate(dealers):
        if dealer.score < RECHECK_SCORE_THRESHOLD:
            continue
        last_audit = parse_audit_date(dealer.last_audit)
        for month in RECHECK_MONTHS:
            due = add_months(last_audit, month)
            days_overdue = (today - due).days
            items.append(RecheckItem(
                dealer_index=index,
                dealer_name=dealer.name,
                last_audit_date=last_audit,
                recheck_month=month,
                recheck_date=due,
                days_overdue=days_overdue,
                status=_status_for(days_overdue),
            ))

    items.sort(key=lambda item: item.days_overdue, reverse=True)
    return items


def dealer_rechecks(
    dealers: Iterable[Dealer],
    dealer_name: str,
    now: Optional[date] = None,
) -> list[RecheckItem]:
    """Schedule entries for one dealer."""
    return [i for i in generate_recheck_schedule(dealers, now) if i.dealer_name == dealer_name]


def overdue_rechecks(dealers: Iterable[Dealer], now: Optional[date] = None) -> list[RecheckItem]:
    return [i for i in generate_recheck_schedule(dealers, now) if i.is_overdue]


def urgent_rechecks(
    dealers: Iterable[Dealer],
    now: Optional[date] = None,
    limit: Optional[int] = None,
) -> list[RecheckItem]:
    """Overdue and due-soon entries, most overdue first."""
    items = [
        i for i in generate_recheck_schedule(dealers, now)
        if i.status in (RecheckStatus.OVERDUE, RecheckStatus.DUE_SOON)
    ]
    return items[:limit] if limit else items
