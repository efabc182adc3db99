"""
Deposit Defender FastAPI Service

REST API over the case strength engine.

Endpoints:
    POST /analyze   - Analyze an intake, returns report + validation
    GET  /health    - Liveness probe with reference pack identity
    GET  /statutes  - Statutes in the loaded reference pack
    GET  /bands     - Score and recovery band tables

Run:
    uvicorn depositdefender.service.main:app
"""
from __future__ import annotations

import logging
import time
import uuid
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from ..config import DD_DOCS_ENABLED, DD_LOG_LEVEL, ENGINE_VERSION
from ..engine import CaseAnalyzer, FixedClock, SystemClock
from ..exceptions import DepositDefenderError, IntakeError
from ..logsetup import configure_logging
from ..models import IntakeRecord, ReferenceData
from ..packs import load_reference_data
from .schemas import AnalyzeRequest, ErrorResponse, HealthResponse

configure_logging(DD_LOG_LEVEL)
logger = logging.getLogger(__name__)


def get_reference() -> ReferenceData:
    """Process-wide reference data (cached by the loader)."""
    return load_reference_data()


# =============================================================================
# FastAPI App
# =============================================================================

app = FastAPI(
    title="Deposit Defender",
    description="Texas security deposit case strength engine",
    version=ENGINE_VERSION,
    docs_url="/docs" if DD_DOCS_ENABLED else None,
    redoc_url="/redoc" if DD_DOCS_ENABLED else None,
    openapi_url="/openapi.json" if DD_DOCS_ENABLED else None,
)


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Add request ID to all requests."""
    request_id = str(uuid.uuid4())[:8]
    request.state.request_id = request_id
    request.state.start_time = time.time()

    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


# =============================================================================
# Health / Reference Endpoints
# =============================================================================

@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check(reference: ReferenceData = Depends(get_reference)):
    """Liveness probe. Also confirms the reference pack loaded."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        engine_version=ENGINE_VERSION,
        reference_pack=f"{reference.pack_id}@{reference.version}",
        reference_data_hash=reference.content_hash,
    )


@app.get("/statutes", tags=["Reference"])
async def list_statutes(reference: ReferenceData = Depends(get_reference)):
    """Statutes the engine can cite."""
    return [s.to_dict() for s in reference.statutes]


@app.get("/bands", tags=["Reference"])
async def list_bands(reference: ReferenceData = Depends(get_reference)):
    """Score bands and recovery bands, highest threshold first."""
    return {
        "score_bands": [b.to_dict() for b in reference.score_bands],
        "recovery_bands": [b.to_dict() for b in reference.recovery_bands],
    }


# =============================================================================
# Analysis Endpoint
# =============================================================================

@app.post(
    "/analyze",
    tags=["Analysis"],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def analyze(
    body: AnalyzeRequest,
    request: Request,
    reference: ReferenceData = Depends(get_reference),
):
    """
    Run the case strength pipeline on one intake.

    Returns:
    - report: Timeline, checklist, leverage points, case strength,
      recovery estimate, strategy, steps, statutes, disclaimers
    - validation: Advisory report-shape check
    """
    request_id = getattr(request.state, "request_id", "unknown")
    start_time = getattr(request.state, "start_time", time.time())
    clock = FixedClock(body.today) if body.today else SystemClock()

    try:
        intake = IntakeRecord.from_dict(body.intake, lease_text=body.lease_text)
        result = CaseAnalyzer(reference=reference, clock=clock).analyze(intake)
    except IntakeError as e:
        logger.warning("Rejected intake: %s", e.message, extra={"case_id": e.case_id})
        return JSONResponse(
            status_code=400,
            content={**e.to_dict(), "request_id": request_id},
        )
    except DepositDefenderError as e:
        logger.error("Analysis failed: %s", e, extra={"case_id": e.case_id})
        return JSONResponse(
            status_code=500,
            content={**e.to_dict(), "request_id": request_id},
        )

    logger.info(
        "Analysis served",
        extra={
            "request_id": request_id,
            "case_id": intake.case_id,
            "report_hash": result.report.report_hash,
            "duration_ms": int((time.time() - start_time) * 1000),
        },
    )
    return JSONResponse(content=result.to_dict())
