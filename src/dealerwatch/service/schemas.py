"""Response models for the DealerWatch HTTP service."""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Liveness probe response."""
    status: str
    timestamp: str
    version: str
    dealer_count: int
    generation_mode: str


class DealerResponse(BaseModel):
    """A dealer's identity record with its directory index."""
    index: int
    name: str
    trading_name: str
    score: int = Field(..., ge=0, le=100)
    rag: str
    region: str
    firm_type: str
    principal_firm: Optional[str] = None
    address: str
    postcode: str
    phone: str
    registration_number: str
    last_audit: str
    trend: str


class DealerListResponse(BaseModel):
    total: int
    dealers: list[DealerResponse]


class PortfolioStatsResponse(BaseModel):
    green: int
    amber: int
    red: int
    total: int
    average_score: int
