"""Health check and monitoring API endpoints."""

import time
from datetime import datetime

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ..models.response import HealthResponse
from ..config import get_settings

router = APIRouter(prefix="/api/v1", tags=["health"])
settings = get_settings()

# Import the global search engine instance
from ..engine_instance import search_engine

# Track application start time
app_start_time = time.time()


def _index_status() -> str:
    if search_engine.loading:
        return "loading"
    return "healthy" if search_engine.entries else "empty"


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check the health status of the search service"
)
async def health_check() -> HealthResponse:
    """
    Perform a health check on the search service.
    
    The service is degraded while a document is being indexed, and until a
    document with at least one named record has been loaded.
    """
    uptime = time.time() - app_start_time
    
    dependencies = {"index": _index_status()}
    status = "healthy" if dependencies["index"] == "healthy" else "degraded"
    
    return HealthResponse(
        status=status,
        version=settings.app_version,
        uptime=uptime,
        dependencies=dependencies
    )


@router.get(
    "/health/ready",
    summary="Readiness check",
    description="Check if the service is ready to accept requests"
)
async def readiness_check() -> JSONResponse:
    """Not ready (503) while a document is being indexed."""
    index_stats = search_engine.get_stats()["index_stats"]
    ready = not index_stats["loading"]
    
    return JSONResponse(
        status_code=200 if ready else 503,
        content={
            "status": "ready" if ready else "loading",
            "timestamp": datetime.utcnow().isoformat(),
            "index_stats": index_stats
        }
    )


@router.get(
    "/health/live",
    summary="Liveness check",
    description="Check if the service is alive and responding"
)
async def liveness_check() -> JSONResponse:
    """Simple liveness check."""
    return JSONResponse(
        status_code=200,
        content={
            "status": "alive",
            "timestamp": datetime.utcnow().isoformat(),
            "uptime": time.time() - app_start_time
        }
    )
