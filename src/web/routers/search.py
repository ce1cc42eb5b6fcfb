"""Search router: company typeahead, advanced search and filter options."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import Field

from src.core.database import get_gateway
from src.core.gateway import Gateway
from src.core.schemas import PaginatedResponse, StandardResponse
from src.search.filters import SearchFilters
from src.search.service import MAX_PAGE_SIZE, advanced_search, autocomplete, get_filter_options
from src.web.dependencies import client_context, get_optional_user, verify_api_key
from src.web.responses import collection, paginated

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/search",
    tags=["Search"],
    dependencies=[Depends(verify_api_key)],
)


class AdvancedSearchRequest(SearchFilters):
    page: int = Field(1, ge=1)
    page_size: Optional[int] = Field(None, ge=1, le=MAX_PAGE_SIZE, alias="pageSize")


@router.get("/autocomplete", summary="Company Typeahead")
async def search_autocomplete(
    q: str = Query(""),
    limit: Optional[int] = Query(None, ge=1, le=50),
    gateway: Gateway = Depends(get_gateway),
):
    """Active companies whose name, sector or CIN contains the query."""
    results = await autocomplete(gateway, q, limit)
    return collection(results)


@router.post("/advanced", response_model=PaginatedResponse[dict], summary="Advanced Search")
async def search_advanced(
    request: AdvancedSearchRequest,
    user: Optional[dict] = Depends(get_optional_user),
    context: dict = Depends(client_context),
    gateway: Gateway = Depends(get_gateway),
):
    filters = SearchFilters(**request.model_dump(exclude={"page", "page_size"}))
    result = await advanced_search(
        gateway,
        filters,
        page=request.page,
        page_size=request.page_size,
        user_id=user["id"] if user else None,
        session_id=context["session_id"],
        user_agent=context["user_agent"],
    )
    return paginated(result["results"], result["total"], result["page"], result["limit"])


@router.get("/filters", response_model=StandardResponse[dict], summary="Filter Options")
async def search_filter_options(gateway: Gateway = Depends(get_gateway)):
    return StandardResponse(data=await get_filter_options(gateway))
