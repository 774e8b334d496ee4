"""Request-scoped access to the state built by the app lifespan."""
from __future__ import annotations

from fastapi import HTTPException, Request

from ..engine.assembler import AuditAssembler
from ..exceptions import DealerWatchError
from ..generation.directory import DealerDirectory


def get_directory(request: Request) -> DealerDirectory:
    return request.app.state.directory


def get_assembler(request: Request) -> AuditAssembler:
    return request.app.state.assembler


def not_found(error: DealerWatchError) -> HTTPException:
    """404 carrying the error's serialized form."""
    return HTTPException(status_code=404, detail=error.to_dict())
