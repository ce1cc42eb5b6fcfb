"""Comparison router: side-by-side company metrics and their JSON export."""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from src.access.rbac import UserRole
from src.comparison.service import compare_companies, export_comparison
from src.core.database import get_gateway
from src.core.errors import IntelError
from src.core.gateway import Gateway
from src.core.schemas import StandardResponse
from src.web.dependencies import client_context, get_optional_user, get_user_role, verify_api_key
from src.web.responses import http_error, json_attachment

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/compare",
    tags=["Comparison"],
    dependencies=[Depends(verify_api_key)],
)


class CompareRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    company_ids: List[int] = Field(alias="companyIds")


@router.post("", response_model=StandardResponse[dict], summary="Compare Companies")
async def compare(
    request: CompareRequest,
    role: UserRole = Depends(get_user_role),
    gateway: Gateway = Depends(get_gateway),
):
    """Two to four distinct companies with metrics and a summary."""
    try:
        comparison = await compare_companies(gateway, request.company_ids, role)
    except IntelError as e:
        raise http_error(e)
    return StandardResponse(data=comparison)


@router.post("/export", summary="Export Comparison")
async def export(
    request: CompareRequest,
    user: Optional[dict] = Depends(get_optional_user),
    role: UserRole = Depends(get_user_role),
    context: dict = Depends(client_context),
    gateway: Gateway = Depends(get_gateway),
):
    try:
        filename, payload = await export_comparison(
            gateway,
            request.company_ids,
            role,
            user_id=user["id"] if user else None,
            session_id=context["session_id"],
            user_agent=context["user_agent"],
        )
    except IntelError as e:
        raise http_error(e)
    return json_attachment(payload, filename)
