"""
DealerWatch FastAPI Service

Read-only JSON API over the dealer directory and the audit engine.

Endpoints:
    GET /health                      - Liveness probe
    GET /dealers                     - Dealer directory
    GET /dealers/{index}             - One dealer's identity record
    GET /dealers/{index}/audit       - Audit for the dealer at an index
    GET /audits?name=...             - Audit for a dealer by exact name
    GET /portfolio/stats             - RAG counts and average score
    GET /portfolio/alerts            - Amber/red controls across the portfolio
    GET /portfolio/duplicates        - Dealers sharing identifying fields
    GET /portfolio/benchmark/{index} - Section pass rates vs portfolio or dealer
    GET /portfolio/rechecks          - Re-check schedule

Run with:
    uvicorn dealerwatch.service.app:create_app --factory
"""
from __future__ import annotations

import logging
import time
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request

from .. import __version__
from ..config import Settings
from ..engine.assembler import AuditAssembler
from ..generation.directory import DealerDirectory, build_dealer_directory
from ..logging_config import configure_logging
from .routers import dealers, portfolio
from .schemas import HealthResponse

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    directory: Optional[DealerDirectory] = None,
    assembler: Optional[AuditAssembler] = None,
) -> FastAPI:
    """
    Create the FastAPI application.

    The directory is built once by the lifespan hook unless one is passed
    in; either way it is held on app.state and shared by every request.

    Args:
        settings: Runtime settings (defaults to Settings.from_env())
        directory: Prebuilt dealer directory
        assembler: Audit assembler (defaults to one backed by the bundled pack)
    """
    settings = settings or Settings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings.log_level, settings.log_format)
        if app.state.directory is None:
            app.state.directory = build_dealer_directory(settings)
        if app.state.assembler is None:
            app.state.assembler = AuditAssembler()
        logger.info(
            "DealerWatch service started",
            extra={
                "request_id": "startup",
                "dealer_count": len(app.state.directory),
                "generation_mode": app.state.directory.generation_mode.value,
            },
        )
        yield
        logger.info("DealerWatch service stopped", extra={"request_id": "shutdown"})

    app = FastAPI(
        title="DealerWatch",
        description="Dealer compliance audit engine",
        version=__version__,
        docs_url="/docs" if settings.docs_enabled else None,
        redoc_url="/redoc" if settings.docs_enabled else None,
        openapi_url="/openapi.json" if settings.docs_enabled else None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.directory = directory
    app.state.assembler = assembler

    @app.middleware("http")
    async def add_request_id(request: Request, call_next):
        """Tag each request with an id and log its duration."""
        request_id = str(uuid.uuid4())[:8]
        request.state.request_id = request_id
        start = time.time()

        response = await call_next(request)

        response.headers["X-Request-ID"] = request_id
        logger.debug(
            "%s %s -> %s",
            request.method,
            request.url.path,
            response.status_code,
            extra={
                "request_id": request_id,
                "duration_ms": round((time.time() - start) * 1000, 3),
            },
        )
        return response

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check(request: Request):
        """Liveness probe."""
        directory = request.app.state.directory
        return HealthResponse(
            status="healthy",
            timestamp=datetime.now(timezone.utc).isoformat(),
            version=__version__,
            dealer_count=len(directory) if directory is not None else 0,
            generation_mode=settings.generation_mode.value,
        )

    app.include_router(dealers.router)
    app.include_router(portfolio.router)
    return app
