"""
Liveness and readiness probes.
"""
import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from api.dependencies import get_health_checker
from api.schemas import HealthResponse, ReadyResponse
from monitoring.health_checks import HealthChecker

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
def health_check(checker: HealthChecker = Depends(get_health_checker)):
    """Liveness: the process is up."""
    logger.debug("GET /health")
    return HealthResponse(**checker.check_liveness().to_dict())


@router.get(
    "/ready",
    response_model=ReadyResponse,
    response_model_exclude_none=True,
    responses={503: {"model": ReadyResponse}},
)
def readiness_check(checker: HealthChecker = Depends(get_health_checker)):
    """Readiness: required configuration is present."""
    logger.debug("GET /ready")
    readiness = checker.check_readiness()
    if not readiness.is_ready:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=readiness.to_dict(),
        )
    return ReadyResponse(**readiness.to_dict())
