"""Health check endpoints for liveness and readiness probes."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.api.v1.dependencies import get_cache
from app.infrastructure.cache.cache_protocol import CacheProtocol
from app.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Cache unreachable", "model": ReadinessErrorResponse}},
)
async def readiness_check(
    cache: Annotated[CacheProtocol | None, Depends(get_cache)],
) -> ReadinessResponse | JSONResponse:
    """Return 200 if ready; 503 when Redis is enabled but does not answer PING."""
    if cache is None:
        return ReadinessResponse()
    if await cache.ping():
        return ReadinessResponse(cache="ok")
    return JSONResponse(
        status_code=503,
        content=ReadinessErrorResponse(message="Redis cache unreachable").model_dump(),
    )
