"""Auth router: sign-in, token sessions and the current profile."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, EmailStr

from src.core.database import get_gateway
from src.core.errors import IntelError
from src.core.gateway import Gateway
from src.core.schemas import StandardResponse
from src.users.service import get_session, get_user_profile, register_user, set_session, sign_in, sign_out
from src.web.dependencies import get_access_token, get_current_user, verify_api_key
from src.web.responses import http_error, success

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/auth",
    tags=["Auth"],
    dependencies=[Depends(verify_api_key)],
)


# --- Schemas ---

class SignInRequest(BaseModel):
    email: str
    password: str


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class SetSessionRequest(BaseModel):
    access_token: str
    refresh_token: str


# --- Endpoints ---

@router.post("/register", response_model=StandardResponse[dict])
async def register(request: RegisterRequest, gateway: Gateway = Depends(get_gateway)):
    """Create a FREEMIUM account."""
    try:
        profile = await register_user(
            gateway,
            email=request.email,
            password=request.password,
            first_name=request.first_name,
            last_name=request.last_name,
        )
    except IntelError as e:
        raise http_error(e)
    return StandardResponse(data=profile)


@router.post("/sign-in", response_model=StandardResponse[dict])
async def sign_in_with_password(request: SignInRequest, gateway: Gateway = Depends(get_gateway)):
    try:
        session = await sign_in(gateway, request.email, request.password)
    except IntelError as e:
        raise http_error(e)
    return StandardResponse(data=session)


@router.post("/session", response_model=StandardResponse[dict])
async def restore_session(request: SetSessionRequest, gateway: Gateway = Depends(get_gateway)):
    """Restore a session from a stored token pair, rotating an expired access token."""
    try:
        session = await set_session(gateway, request.access_token, request.refresh_token)
    except IntelError as e:
        raise http_error(e)
    return StandardResponse(data=session)


@router.get("/session", response_model=StandardResponse[dict])
async def current_session(
    token: Optional[str] = Depends(get_access_token),
    gateway: Gateway = Depends(get_gateway),
):
    session = await get_session(gateway, token)
    if session is None:
        raise HTTPException(status_code=401, detail="No active session")
    return StandardResponse(data=session)


@router.post("/sign-out")
async def sign_out_session(
    token: Optional[str] = Depends(get_access_token),
    gateway: Gateway = Depends(get_gateway),
):
    if not token or not await sign_out(gateway, token):
        raise HTTPException(status_code=401, detail="No active session")
    return success("Signed out")


@router.get("/profile", response_model=StandardResponse[dict])
async def profile(user: dict = Depends(get_current_user), gateway: Gateway = Depends(get_gateway)):
    try:
        data = await get_user_profile(gateway, user["id"])
    except IntelError as e:
        raise http_error(e)
    return StandardResponse(data=data)
