"""
Health Check Route

Simple health check endpoint for liveness probes.
"""

from fastapi import APIRouter

from api.models.responses import HealthData, SuccessResponse, success


router = APIRouter(tags=["health"])


@router.get("/health", response_model=SuccessResponse)
async def health_check() -> SuccessResponse:
    """
    Health check endpoint.

    Returns service status for liveness probes.
    """
    return success(HealthData())


@router.get("/", response_model=SuccessResponse)
async def root() -> SuccessResponse:
    """
    Root endpoint - same as health check.
    """
    return success(HealthData())
