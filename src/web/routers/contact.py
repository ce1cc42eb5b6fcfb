"""Contact router: public contact form and the admin inbox."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from src.contact.service import ContactForm, list_contact_messages, submit_contact_form, update_message_status
from src.core.database import get_gateway
from src.core.errors import IntelError
from src.core.gateway import Gateway
from src.core.schemas import StandardResponse
from src.web.dependencies import get_optional_user, require_admin, verify_api_key
from src.web.responses import collection, http_error

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/contact",
    tags=["Contact"],
    dependencies=[Depends(verify_api_key)],
)


class StatusUpdateRequest(BaseModel):
    status: str


@router.post("", response_model=StandardResponse[dict])
async def submit(
    form: ContactForm,
    user: Optional[dict] = Depends(get_optional_user),
    gateway: Gateway = Depends(get_gateway),
):
    try:
        result = await submit_contact_form(gateway, form, user_id=user["id"] if user else None)
    except IntelError as e:
        raise http_error(e)
    return StandardResponse(data=result, message=result["message"])


@router.get("")
async def list_messages(
    status: Optional[str] = None,
    inquiry_type: Optional[str] = None,
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    admin: dict = Depends(require_admin),
    gateway: Gateway = Depends(get_gateway),
):
    messages = await list_contact_messages(gateway, status, inquiry_type, limit, offset)
    return collection(messages)


@router.patch("/{message_id}", response_model=StandardResponse[dict])
async def set_status(
    message_id: int,
    request: StatusUpdateRequest,
    admin: dict = Depends(require_admin),
    gateway: Gateway = Depends(get_gateway),
):
    try:
        data = await update_message_status(gateway, message_id, request.status)
    except IntelError as e:
        raise http_error(e)
    return StandardResponse(data=data)
