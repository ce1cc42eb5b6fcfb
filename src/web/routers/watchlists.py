"""Watchlists router: a signed-in user's company watchlists."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from src.core.database import get_gateway
from src.core.errors import IntelError
from src.core.gateway import Gateway
from src.core.schemas import StandardResponse
from src.watchlists import service as watchlists
from src.web.dependencies import client_context, require_watchlist_user, verify_api_key
from src.web.responses import collection, http_error, success

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/watchlists",
    tags=["Watchlists"],
    dependencies=[Depends(verify_api_key)],
)


# --- Schemas ---

class CreateWatchlistRequest(BaseModel):
    name: str
    description: str = ""


class UpdateWatchlistRequest(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None


class AddCompanyRequest(BaseModel):
    company_id: int
    notes: str = ""


class UpdateNotesRequest(BaseModel):
    notes: str


async def _check_owner(gateway: Gateway, watchlist_id: str, user: dict) -> None:
    try:
        owner = await watchlists.get_watchlist_owner(gateway, watchlist_id)
    except IntelError as e:
        raise http_error(e)
    if owner != user["id"]:
        raise HTTPException(status_code=403, detail="Not your watchlist")


# --- Endpoints ---

@router.get("")
async def list_watchlists(
    user: dict = Depends(require_watchlist_user),
    gateway: Gateway = Depends(get_gateway),
):
    try:
        data = await watchlists.get_user_watchlists(gateway, user["id"])
    except IntelError as e:
        raise http_error(e)
    return collection(data)


@router.get("/stats", response_model=StandardResponse[dict])
async def watchlist_stats(
    user: dict = Depends(require_watchlist_user),
    gateway: Gateway = Depends(get_gateway),
):
    return StandardResponse(data=await watchlists.get_watchlist_stats(gateway, user["id"]))


@router.get("/membership/{company_id}")
async def company_membership(
    company_id: int,
    user: dict = Depends(require_watchlist_user),
    gateway: Gateway = Depends(get_gateway),
):
    """Which of the user's watchlists already contain a company."""
    return collection(await watchlists.is_company_in_watchlists(gateway, user["id"], company_id))


@router.post("", response_model=StandardResponse[dict])
async def create_watchlist(
    request: CreateWatchlistRequest,
    user: dict = Depends(require_watchlist_user),
    context: dict = Depends(client_context),
    gateway: Gateway = Depends(get_gateway),
):
    try:
        data = await watchlists.create_watchlist(
            gateway,
            user["id"],
            request.name,
            request.description,
            session_id=context["session_id"],
            user_agent=context["user_agent"],
        )
    except IntelError as e:
        raise http_error(e)
    return StandardResponse(data=data, message="Watchlist created")


@router.get("/{watchlist_id}", response_model=StandardResponse[dict])
async def get_watchlist(
    watchlist_id: str,
    user: dict = Depends(require_watchlist_user),
    gateway: Gateway = Depends(get_gateway),
):
    await _check_owner(gateway, watchlist_id, user)
    try:
        data = await watchlists.get_watchlist(gateway, watchlist_id)
    except IntelError as e:
        raise http_error(e)
    return StandardResponse(data=data)


@router.patch("/{watchlist_id}", response_model=StandardResponse[dict])
async def update_watchlist(
    watchlist_id: str,
    request: UpdateWatchlistRequest,
    user: dict = Depends(require_watchlist_user),
    gateway: Gateway = Depends(get_gateway),
):
    await _check_owner(gateway, watchlist_id, user)
    try:
        data = await watchlists.update_watchlist(gateway, watchlist_id, request.name, request.description)
    except IntelError as e:
        raise http_error(e)
    return StandardResponse(data=data)


@router.delete("/{watchlist_id}")
async def delete_watchlist(
    watchlist_id: str,
    user: dict = Depends(require_watchlist_user),
    gateway: Gateway = Depends(get_gateway),
):
    await _check_owner(gateway, watchlist_id, user)
    try:
        await watchlists.delete_watchlist(gateway, watchlist_id)
    except IntelError as e:
        raise http_error(e)
    return success("Watchlist deleted")


@router.post("/{watchlist_id}/companies", response_model=StandardResponse[dict])
async def add_company(
    watchlist_id: str,
    request: AddCompanyRequest,
    user: dict = Depends(require_watchlist_user),
    context: dict = Depends(client_context),
    gateway: Gateway = Depends(get_gateway),
):
    await _check_owner(gateway, watchlist_id, user)
    try:
        data = await watchlists.add_company_to_watchlist(
            gateway,
            watchlist_id,
            request.company_id,
            request.notes,
            session_id=context["session_id"],
            user_agent=context["user_agent"],
        )
    except IntelError as e:
        raise http_error(e)
    return StandardResponse(data=data, message="Company added to watchlist")


@router.delete("/{watchlist_id}/companies/{company_id}")
async def remove_company(
    watchlist_id: str,
    company_id: int,
    user: dict = Depends(require_watchlist_user),
    gateway: Gateway = Depends(get_gateway),
):
    await _check_owner(gateway, watchlist_id, user)
    try:
        await watchlists.remove_company_from_watchlist(gateway, watchlist_id, company_id)
    except IntelError as e:
        raise http_error(e)
    return success("Company removed from watchlist")


@router.patch("/{watchlist_id}/companies/{company_id}", response_model=StandardResponse[dict])
async def update_notes(
    watchlist_id: str,
    company_id: int,
    request: UpdateNotesRequest,
    user: dict = Depends(require_watchlist_user),
    gateway: Gateway = Depends(get_gateway),
):
    await _check_owner(gateway, watchlist_id, user)
    try:
        data = await watchlists.update_company_notes(gateway, watchlist_id, company_id, request.notes)
    except IntelError as e:
        raise http_error(e)
    return StandardResponse(data=data)
