"""Portfolio analytics endpoints."""
from __future__ import annotations

from datetime import date
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ...engine.assembler import AuditAssembler
from ...exceptions import DealerNotFoundError
from ...generation.directory import DealerDirectory
from ...portfolio import (
    RecheckStatus,
    benchmark_against_dealer,
    benchmark_against_portfolio,
    collect_alerts,
    detect_duplicates,
    generate_recheck_schedule,
    portfolio_stats,
)
from ..dependencies import get_assembler, get_directory, not_found
from ..schemas import PortfolioStatsResponse

router = APIRouter(prefix="/portfolio", tags=["Portfolio"])


@router.get("/stats", response_model=PortfolioStatsResponse)
async def get_stats(directory: DealerDirectory = Depends(get_directory)):
    """RAG counts and average score across the directory."""
    return PortfolioStatsResponse(**portfolio_stats(directory).to_dict())


@router.get("/alerts")
async def get_alerts(
    limit: Optional[int] = Query(default=None, ge=1),
    directory: DealerDirectory = Depends(get_directory),
    assembler: AuditAssembler = Depends(get_assembler),
) -> dict[str, Any]:
    """Every amber and red control across the portfolio, red first."""
    alerts = collect_alerts(directory, assembler, limit=limit)
    return {"total": len(alerts), "alerts": [a.to_dict() for a in alerts]}


@router.get("/duplicates")
async def get_duplicates(directory: DealerDirectory = Depends(get_directory)) -> dict[str, Any]:
    """Groups of dealers sharing a phone, registration, postcode or address."""
    groups = detect_duplicates(directory)
    return {"total": len(groups), "groups": [g.to_dict() for g in groups]}


@router.get("/benchmark/{index}")
async def get_benchmark(
    index: int,
    against: Optional[int] = Query(default=None, description="Compare with this dealer index"),
    directory: DealerDirectory = Depends(get_directory),
    assembler: AuditAssembler = Depends(get_assembler),
) -> dict[str, Any]:
    """Per-section pass rates of a dealer against the portfolio or another dealer."""
    try:
        directory.get(index)
        if against is not None:
            directory.get(against)
    except DealerNotFoundError as e:
        raise not_found(e)

    if against is None:
        return benchmark_against_portfolio(directory, index, assembler).to_dict()
    if against == index:
        raise HTTPException(status_code=400, detail="Cannot benchmark a dealer against itself")
    return benchmark_against_dealer(directory, index, against, assembler).to_dict()


@router.get("/rechecks")
async def get_rechecks(
    status: Optional[RecheckStatus] = Query(default=None),
    limit: Optional[int] = Query(default=None, ge=1),
    on: Optional[date] = Query(default=None, description="Reference date (defaults to today)"),
    directory: DealerDirectory = Depends(get_directory),
) -> dict[str, Any]:
    """Re-check schedule for dealers scoring 80 or more, most overdue first."""
    items = generate_recheck_schedule(directory, now=on)
    if status is not None:
        items = [i for i in items if i.status == status]
    if limit is not None:
        items = items[:limit]
    return {"total": len(items), "items": [i.to_dict() for i in items]}
