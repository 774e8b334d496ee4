"""Dealer directory and audit endpoints."""
from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, Query, Request

from ...engine.assembler import AuditAssembler
from ...exceptions import DealerNotFoundError
from ...generation.directory import DealerDirectory
from ...models import Dealer, RagStatus
from ..dependencies import get_assembler, get_directory, not_found
from ..schemas import DealerListResponse, DealerResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Dealers"])


def _dealer_response(index: int, dealer: Dealer) -> DealerResponse:
    return DealerResponse(index=index, **dealer.to_dict())


@router.get("/dealers", response_model=DealerListResponse)
async def list_dealers(
    rag: Optional[RagStatus] = Query(default=None, description="Only dealers with this RAG status"),
    directory: DealerDirectory = Depends(get_directory),
):
    """List the dealer directory in index order."""
    dealers = [
        _dealer_response(index, dealer)
        for index, dealer in directory.items()
        if rag is None or dealer.rag == rag
    ]
    return DealerListResponse(total=len(dealers), dealers=dealers)


@router.get("/dealers/{index}", response_model=DealerResponse)
async def get_dealer(index: int, directory: DealerDirectory = Depends(get_directory)):
    """Get one dealer's identity record."""
    try:
        dealer = directory.get(index)
    except DealerNotFoundError as e:
        raise not_found(e)
    return _dealer_response(index, dealer)


@router.get("/dealers/{index}/audit")
async def get_dealer_audit(
    index: int,
    request: Request,
    directory: DealerDirectory = Depends(get_directory),
    assembler: AuditAssembler = Depends(get_assembler),
) -> dict[str, Any]:
    """Build the compliance audit for the dealer at an index."""
    try:
        dealer = directory.get(index)
    except DealerNotFoundError as e:
        raise not_found(e)

    audit = assembler.generate(dealer.name, index)
    logger.info(
        "Audit served",
        extra={
            "request_id": getattr(request.state, "request_id", "unknown"),
            "dealer_index": index,
            "dealer_name": dealer.name,
        },
    )
    return audit.to_dict()


@router.get("/audits")
async def get_audit_by_name(
    name: str = Query(..., min_length=1, description="Exact dealer name"),
    directory: DealerDirectory = Depends(get_directory),
    assembler: AuditAssembler = Depends(get_assembler),
) -> dict[str, Any]:
    """Build the compliance audit for a dealer looked up by exact name."""
    try:
        index, dealer = directory.find(name)
    except DealerNotFoundError as e:
        raise not_found(e)
    return assembler.generate(dealer.name, index).to_dict()
