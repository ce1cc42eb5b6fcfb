"""Companies router: role-filtered detail page and JSON export."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends

from src.access.rbac import UserRole
from src.companies.service import filter_sections, get_company_detail
from src.core.database import get_gateway
from src.core.errors import IntelError
from src.core.gateway import Gateway
from src.core.schemas import StandardResponse
from src.reporting.export import export_company
from src.web.dependencies import client_context, get_optional_user, get_user_role, verify_api_key
from src.web.responses import http_error, json_attachment

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/companies",
    tags=["Companies"],
    dependencies=[Depends(verify_api_key)],
)


@router.get("/{company_id}", response_model=StandardResponse[dict])
async def get_company_page(
    company_id: int,
    user: Optional[dict] = Depends(get_optional_user),
    role: UserRole = Depends(get_user_role),
    context: dict = Depends(client_context),
    gateway: Gateway = Depends(get_gateway),
):
    """Company composite with only the sections the caller's role may see."""
    try:
        composite = await get_company_detail(
            gateway,
            company_id,
            user_id=user["id"] if user else None,
            session_id=context["session_id"],
            user_agent=context["user_agent"],
        )
    except IntelError as e:
        raise http_error(e)
    return StandardResponse(data=filter_sections(composite, role))


@router.get("/{company_id}/export")
async def export_company_data(
    company_id: int,
    user: Optional[dict] = Depends(get_optional_user),
    role: UserRole = Depends(get_user_role),
    context: dict = Depends(client_context),
    gateway: Gateway = Depends(get_gateway),
):
    """Download the role-filtered composite as a JSON attachment."""
    try:
        filename, payload = await export_company(
            gateway,
            company_id,
            role,
            user_id=user["id"] if user else None,
            email=user["email"] if user else None,
            session_id=context["session_id"],
            user_agent=context["user_agent"],
        )
    except IntelError as e:
        raise http_error(e)

    return json_attachment(payload, filename)
