"""Main FastAPI application for the Page Name Finder."""

import logging
import sys
import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
import structlog

from .api import (
    documents_router,
    search_router,
    health_router,
    metrics_router,
)
from .config import get_settings
from .core.extraction import DocumentExtractionError
from .engine_instance import search_engine
from .models.response import ErrorResponse

settings = get_settings()

logging.basicConfig(
    format="%(message)s",
    stream=sys.stdout,
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
)

# Configure structured logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
        if settings.log_format == "json"
        else structlog.dev.ConsoleRenderer()
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    # Startup
    logger.info("Starting Page Name Finder service", version=settings.app_version)
    
    if settings.preload_pdf:
        path = Path(settings.preload_pdf)
        try:
            result = await search_engine.load_pdf_async(path.read_bytes(), document_id=path.name)
            logger.info(
                "Preloaded document",
                document_id=path.name,
                total_entries=len(result.entries) if result else 0
            )
        except FileNotFoundError:
            logger.warning("Preload document not found, starting without a document", path=str(path))
        except DocumentExtractionError as e:
            logger.error("Failed to preload document", path=str(path), error=str(e))
            raise
    
    yield
    
    # Shutdown
    logger.info("Shutting down Page Name Finder service")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="Name index and fuzzy page search for multi-page documents",
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan
)

# Add middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(GZipMiddleware, minimum_size=1000)


# Request logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next) -> Response:
    """Log all HTTP requests."""
    start_time = time.time()
    
    logger.info(
        "Request started",
        method=request.method,
        url=str(request.url),
        client_ip=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent")
    )
    
    response = await call_next(request)
    
    process_time = time.time() - start_time
    logger.info(
        "Request completed",
        method=request.method,
        url=str(request.url),
        status_code=response.status_code,
        process_time_ms=round(process_time * 1000, 2)
    )
    
    return response


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle global exceptions."""
    logger.error(
        "Unhandled exception",
        method=request.method,
        url=str(request.url),
        error=str(exc),
        exc_info=True
    )
    
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error="Internal Server Error",
            message="An unexpected error occurred",
            details={"exception": str(exc)} if settings.debug else None
        ).model_dump(mode="json")
    )


# Include API routers
app.include_router(documents_router)
app.include_router(search_router)
app.include_router(health_router)
app.include_router(metrics_router)


# Root endpoint
@app.get("/", summary="Root endpoint", description="Get basic information about the API")
async def root() -> dict:
    """Root endpoint with basic API information."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": "Name index and fuzzy page search for multi-page documents",
        "docs_url": "/docs",
        "health_url": "/api/v1/health",
        "status": "running"
    }


# API info endpoint
@app.get("/api", summary="API information", description="Get detailed API information")
async def api_info() -> dict:
    """Get detailed API information."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "endpoints": {
            "load_pdf": "/api/v1/documents",
            "load_text": "/api/v1/documents/text",
            "search": "/api/v1/search/{query}",
            "listing": "/api/v1/listing",
            "quick_jump": "/api/v1/listing/{page_number}",
            "entries": "/api/v1/entries",
            "health": "/api/v1/health",
            "metrics": "/api/v1/metrics"
        },
        "features": [
            "Name extraction after the 'Name:' marker",
            "Well/unit number matching ('10-28' matches '10-28F')",
            "Fuzzy name matching on letter-only keys",
            "Repeat a query to cycle through matches",
            "Numeric-aware names listing"
        ],
        "search": {
            "name_marker": settings.name_marker,
            "max_matches": settings.max_matches,
            "max_query_length": settings.max_query_length
        }
    }


if __name__ == "__main__":
    import uvicorn
    
    uvicorn.run(
        "page_name_finder.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        workers=1 if settings.debug else settings.workers,
        log_level=settings.log_level.lower()
    )
