"""Market router: market analysis aggregates and their JSON export."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from src.access.rbac import UserRole
from src.core.database import get_gateway
from src.core.errors import IntelError
from src.core.gateway import Gateway
from src.core.schemas import StandardResponse
from src.market.filters import DEFAULT_TIME_RANGE, MarketFilters
from src.market.service import export_market_overview, get_market_overview
from src.web.dependencies import client_context, get_optional_user, get_user_role, verify_api_key
from src.web.responses import http_error, json_attachment

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/market",
    tags=["Market"],
    dependencies=[Depends(verify_api_key)],
)


def market_filters(
    sector: Optional[str] = Query(None),
    company_type: Optional[str] = Query(None),
    company_size: Optional[str] = Query(None, description="startup, small, medium, large or all"),
    time_range: str = Query(DEFAULT_TIME_RANGE, description="3months, 6months, 1year, 2years, 5years or all"),
) -> MarketFilters:
    return MarketFilters(
        sector=sector,
        company_type=company_type,
        company_size=company_size,
        time_range=time_range,
    )


@router.get("/overview", response_model=StandardResponse[dict], summary="Market Analysis")
async def market_overview(
    filters: MarketFilters = Depends(market_filters),
    role: UserRole = Depends(get_user_role),
    gateway: Gateway = Depends(get_gateway),
):
    try:
        overview = await get_market_overview(gateway, filters, role)
    except IntelError as e:
        raise http_error(e)
    return StandardResponse(data=overview)


@router.get("/export", summary="Export Market Analysis")
async def market_export(
    filters: MarketFilters = Depends(market_filters),
    user: Optional[dict] = Depends(get_optional_user),
    role: UserRole = Depends(get_user_role),
    context: dict = Depends(client_context),
    gateway: Gateway = Depends(get_gateway),
):
    try:
        filename, payload = await export_market_overview(
            gateway,
            filters,
            role,
            user_id=user["id"] if user else None,
            session_id=context["session_id"],
            user_agent=context["user_agent"],
        )
    except IntelError as e:
        raise http_error(e)
    return json_attachment(payload, filename)
