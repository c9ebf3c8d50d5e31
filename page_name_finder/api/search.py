"""Search and listing API endpoints."""

from typing import List

from fastapi import APIRouter, HTTPException, Path

from ..config import get_settings
from ..models.index import Entry, ListingItem, SearchMatch
from ..models.request import SearchRequest

router = APIRouter(prefix="/api/v1", tags=["search"])
settings = get_settings()

# Import the global search engine instance
from ..engine_instance import search_engine


def _resolve(query: str) -> SearchMatch:
    if len(query) > settings.max_query_length:
        raise HTTPException(
            status_code=400,
            detail=f"Query too long. Maximum length is {settings.max_query_length} characters"
        )
    
    match = search_engine.search(query)
    if match is None:
        raise HTTPException(status_code=404, detail="No match")
    
    return match


@router.get(
    "/search/{query}",
    response_model=SearchMatch,
    summary="Find the page for a name",
    description="Resolve a name or well/unit number to a page; repeat the query to cycle through matches"
)
async def search_name(
    query: str = Path(..., description="Name or number to search for", min_length=1)
) -> SearchMatch:
    """
    Resolve a query to the best-matching page.
    
    Submitting the same normalized query again moves to the next match,
    wrapping around after the last one. The response carries the match
    position so callers can render "match X of Y".
    """
    return _resolve(query)


@router.post(
    "/search",
    response_model=SearchMatch,
    summary="Search with request body",
    description="Resolve a query supplied in a JSON request body"
)
async def search_with_body(request: SearchRequest) -> SearchMatch:
    """Resolve a query supplied in a structured request body."""
    return _resolve(request.query)


@router.get(
    "/listing",
    response_model=List[ListingItem],
    summary="Get the names listing",
    description="Get every indexed name as a listing item, sorted by label"
)
async def get_listing() -> List[ListingItem]:
    """Get the listing items of the loaded document."""
    return search_engine.listing()


@router.get(
    "/listing/{page_number}",
    response_model=ListingItem,
    summary="Quick jump",
    description="Get the listing item to select for a page"
)
async def jump_to_page(
    page_number: int = Path(..., ge=1, description="Page to jump to")
) -> ListingItem:
    """Find the listing item for a page without touching the search cycle."""
    item = search_engine.jump_to_listing(page_number)
    if item is None:
        raise HTTPException(
            status_code=404,
            detail=f"No listed name on page {page_number}"
        )
    return item


@router.get(
    "/entries",
    response_model=List[Entry],
    summary="Get indexed entries",
    description="Get the entry index of the loaded document in insertion order"
)
async def get_entries() -> List[Entry]:
    """Get all entries in index order."""
    return list(search_engine.entries)
