"""Activity router: the signed-in user's activity history."""

import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query

from src.activity.service import format_activity, get_activity_stats, get_activity_types, get_user_activity_logs
from src.core.database import get_gateway
from src.core.gateway import Gateway
from src.core.schemas import StandardResponse
from src.web.dependencies import get_current_user, verify_api_key
from src.web.responses import collection

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/activity",
    tags=["Activity"],
    dependencies=[Depends(verify_api_key)],
)


@router.get("/logs")
async def activity_logs(
    activity_type: Optional[str] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    limit: Optional[int] = Query(None, ge=1, le=1000),
    user: dict = Depends(get_current_user),
    gateway: Gateway = Depends(get_gateway),
):
    logs = await get_user_activity_logs(
        gateway,
        user["id"],
        activity_type=activity_type,
        start_date=start_date,
        end_date=end_date,
        limit=limit,
    )
    return collection([format_activity(entry) for entry in logs])


@router.get("/stats", response_model=StandardResponse[dict])
async def activity_stats(
    days: Optional[int] = Query(None, ge=1, le=365),
    user: dict = Depends(get_current_user),
    gateway: Gateway = Depends(get_gateway),
):
    return StandardResponse(data=await get_activity_stats(gateway, user["id"], days))


@router.get("/types", response_model=StandardResponse[list])
async def activity_types():
    return StandardResponse(data=get_activity_types())
