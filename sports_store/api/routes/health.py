"""
Health check endpoints for container orchestration.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from sports_store.monitoring.health_service import HealthService, get_health_service

router = APIRouter(tags=["health"])


@router.get("/health/live")
async def liveness_check(health: HealthService = Depends(get_health_service)):
    """
    Liveness probe. Returns 200 while the process is running.
    No dependencies checked.
    """
    return JSONResponse(content=await health.get_liveness_status(), status_code=200)


@router.get("/health/ready")
async def readiness_check(health: HealthService = Depends(get_health_service)):
    """
    Readiness probe. 200 only when the database answers and the
    upload directory is writable, 503 otherwise.
    """
    status = await health.get_readiness_status()
    return JSONResponse(content=status, status_code=200 if status.get("ready") else 503)
