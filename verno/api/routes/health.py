"""
Health Check Endpoints - Application health and status monitoring.
"""

from datetime import datetime

from fastapi import APIRouter, Depends

from verno.core.config import get_settings, Settings
from verno.models.responses import HealthResponse


router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="Check if the API is running and healthy"
)
async def health_check(
    settings: Settings = Depends(get_settings)
) -> HealthResponse:
    """
    Basic health check endpoint.

    Returns:
        HealthResponse with status and version info
    """
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        environment=settings.environment,
        timestamp=datetime.utcnow()
    )


@router.get(
    "/ready",
    summary="Readiness Check",
    description="Check if the API is ready to accept requests"
)
async def readiness_check(
    settings: Settings = Depends(get_settings)
) -> dict:
    """
    Readiness check.

    A missing API key is reported, not fatal: local OpenAI-compatible
    servers accept unauthenticated requests.
    """
    checks = {
        "api": True,
        "config_loaded": settings is not None,
        "llm_configured": bool(settings.llm_api_key),
    }

    return {
        "ready": checks["api"] and checks["config_loaded"],
        "checks": checks,
        "timestamp": datetime.utcnow().isoformat()
    }
