"""Metrics and monitoring API endpoints."""

import psutil

from fastapi import APIRouter

from ..models.response import MetricsResponse

router = APIRouter(prefix="/api/v1", tags=["metrics"])

# Import the global search engine instance
from ..engine_instance import search_engine


@router.get(
    "/metrics",
    response_model=MetricsResponse,
    summary="Get performance metrics",
    description="Get query, indexing and memory metrics for the search service"
)
async def get_metrics() -> MetricsResponse:
    """Get query statistics, index size and process memory usage."""
    stats = search_engine.get_stats()
    
    # Resident memory of this process
    memory_usage_mb = psutil.Process().memory_info().rss / (1024 * 1024)
    
    return MetricsResponse(
        total_queries=stats["total_queries"],
        average_response_time_ms=stats["average_execution_time_ms"],
        match_rate=stats["match_rate"],
        documents_loaded=stats["documents_loaded"],
        stale_builds_discarded=stats["stale_builds_discarded"],
        total_entries=stats["index_stats"]["total_entries"],
        memory_usage_mb=memory_usage_mb
    )
