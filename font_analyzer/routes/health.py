# ─────────────────────────────────────────────────────────────────────────────
# Health Check Routes — liveness and readiness
# ─────────────────────────────────────────────────────────────────────────────
#   /health        → "Is the process alive?" Always 200.
#   /health/ready  → "Can it serve suggestions?" 503 without a provider key.
# ─────────────────────────────────────────────────────────────────────────────

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from font_analyzer.dependencies import get_typographer
from font_analyzer.schemas import LivenessResponse, ReadinessResponse
from font_analyzer.services.typographer import TypographerService

router = APIRouter()


@router.get("/health", response_model=LivenessResponse)
async def liveness() -> LivenessResponse:
    """Liveness probe. No dependencies, no I/O."""
    return LivenessResponse(status="ok")


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness(
    typographer: TypographerService = Depends(get_typographer),
) -> JSONResponse:
    """Readiness probe: the provider key must be present."""
    ready = typographer.configured
    response = ReadinessResponse(
        status="ready" if ready else "not_ready",
        provider_configured=ready,
        model=typographer.model,
    )
    return JSONResponse(
        status_code=200 if ready else 503,
        content=response.model_dump(),
    )
