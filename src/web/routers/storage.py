"""Storage router: avatar, company logo and company document uploads."""

import logging

from fastapi import APIRouter, Depends, File, Form, UploadFile

from src.companies.service import get_company, set_company_logo
from src.core.database import get_gateway
from src.core.errors import IntelError
from src.core.gateway import Gateway
from src.core.schemas import StandardResponse
from src.storage.service import (
    AVATARS_BUCKET,
    COMPANY_ASSETS_BUCKET,
    avatar_path,
    company_document_path,
    company_logo_path,
)
from src.users.service import set_user_avatar
from src.web.dependencies import get_current_user, require_admin, verify_api_key
from src.web.responses import http_error

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/storage",
    tags=["Storage"],
    dependencies=[Depends(verify_api_key)],
)


@router.post("/avatar", response_model=StandardResponse[dict])
async def upload_avatar(
    file: UploadFile = File(...),
    user: dict = Depends(get_current_user),
    gateway: Gateway = Depends(get_gateway),
):
    """Replace the signed-in user's avatar."""
    path = avatar_path(user["id"], file.filename or "avatar")
    try:
        stored = await gateway.storage.upload(AVATARS_BUCKET, path, await file.read(), upsert=True)
        url = gateway.storage.public_url(AVATARS_BUCKET, path)
        await set_user_avatar(gateway, user["id"], url)
    except IntelError as e:
        raise http_error(e)
    return StandardResponse(data={**stored, "url": url})


@router.post("/companies/{company_id}/logo", response_model=StandardResponse[dict])
async def upload_company_logo(
    company_id: int,
    file: UploadFile = File(...),
    admin: dict = Depends(require_admin),
    gateway: Gateway = Depends(get_gateway),
):
    path = company_logo_path(company_id, file.filename or "logo")
    try:
        await get_company(gateway, company_id)
        stored = await gateway.storage.upload(COMPANY_ASSETS_BUCKET, path, await file.read(), upsert=True)
        url = gateway.storage.public_url(COMPANY_ASSETS_BUCKET, path)
        await set_company_logo(gateway, company_id, url)
    except IntelError as e:
        raise http_error(e)
    return StandardResponse(data={**stored, "url": url})


@router.post("/companies/{company_id}/documents", response_model=StandardResponse[dict])
async def upload_company_document(
    company_id: int,
    file: UploadFile = File(...),
    document_type: str = Form("regulatory"),
    admin: dict = Depends(require_admin),
    gateway: Gateway = Depends(get_gateway),
):
    """Store a filing or other company document; existing objects are never overwritten."""
    path = company_document_path(company_id, file.filename or "document", document_type)
    try:
        await get_company(gateway, company_id)
        stored = await gateway.storage.upload(COMPANY_ASSETS_BUCKET, path, await file.read(), upsert=False)
        url = gateway.storage.public_url(COMPANY_ASSETS_BUCKET, path)
    except IntelError as e:
        raise http_error(e)
    return StandardResponse(data={**stored, "url": url})


@router.get("/public-url", response_model=StandardResponse[dict])
async def public_url(bucket: str, path: str, gateway: Gateway = Depends(get_gateway)):
    try:
        url = gateway.storage.public_url(bucket, path)
    except IntelError as e:
        raise http_error(e)
    return StandardResponse(data={"bucket": bucket, "path": path, "url": url})
