"""Document loading API endpoints."""

import time
from typing import Optional

from fastapi import APIRouter, File, HTTPException, UploadFile
import structlog

from ..config import get_settings
from ..core.extraction import DocumentExtractionError
from ..models.index import IndexBuildResult
from ..models.request import PagesTextRequest
from ..models.response import DocumentLoadResponse

router = APIRouter(prefix="/api/v1", tags=["documents"])
settings = get_settings()
logger = structlog.get_logger(__name__)

# Import the global search engine instance
from ..engine_instance import search_engine


def _load_response(result: Optional[IndexBuildResult], start_time: float) -> DocumentLoadResponse:
    if result is None:
        raise HTTPException(
            status_code=409,
            detail="Document load was superseded by a newer load"
        )
    
    return DocumentLoadResponse(
        document_id=search_engine.document_id,
        page_count=search_engine.page_count,
        total_entries=len(result.entries),
        listing=search_engine.listing(),
        execution_time_ms=(time.time() - start_time) * 1000
    )


@router.post(
    "/documents",
    response_model=DocumentLoadResponse,
    summary="Load a PDF document",
    description="Upload a PDF, extract the text of every page and rebuild the name index"
)
async def load_document(file: UploadFile = File(..., description="PDF document")) -> DocumentLoadResponse:
    """
    Load a PDF document.
    
    The previous document's index and search session are dropped as soon as
    the upload is accepted. Pages are indexed in page order.
    """
    start_time = time.time()
    
    data = await file.read()
    if not data:
        raise HTTPException(status_code=400, detail="Uploaded document is empty")
    
    if len(data) > settings.max_upload_mb * 1024 * 1024:
        raise HTTPException(
            status_code=413,
            detail=f"Document too large. Maximum size is {settings.max_upload_mb} MB"
        )
    
    try:
        result = await search_engine.load_pdf_async(data, document_id=file.filename)
    except DocumentExtractionError as e:
        logger.warning("document_rejected", filename=file.filename, error=str(e))
        raise HTTPException(status_code=400, detail=str(e))
    
    return _load_response(result, start_time)


@router.post(
    "/documents/text",
    response_model=DocumentLoadResponse,
    summary="Load page text",
    description="Rebuild the name index from text already extracted per page"
)
async def load_document_text(request: PagesTextRequest) -> DocumentLoadResponse:
    """Load a document supplied as one text block per page."""
    start_time = time.time()
    
    result = search_engine.rebuild(request.pages, document_id=request.document_id)
    
    return _load_response(result, start_time)
