"""Shared dependencies for API routers."""

import logging
import secrets
from typing import Any, Dict, Optional

from fastapi import Depends, Header, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.access.rbac import UserRole, can_use_watchlist, normalize_role
from src.core.database import get_gateway
from src.core.gateway import Gateway
from src.users.service import get_session

logger = logging.getLogger(__name__)

bearer = HTTPBearer(auto_error=False)


# --- API key ---

def verify_api_key(
    apikey: Optional[str] = Header(None),
    gateway: Gateway = Depends(get_gateway),
) -> None:
    """Every request must present the anonymous key in the ``apikey`` header."""
    presented = (apikey or "").encode("utf8")
    expected = gateway.settings.anon_key.encode("utf8")
    if not secrets.compare_digest(presented, expected):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid API key",
        )


# --- Auth ---

def get_access_token(credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer)) -> Optional[str]:
    return credentials.credentials if credentials else None


async def get_optional_user(
    token: Optional[str] = Depends(get_access_token),
    gateway: Gateway = Depends(get_gateway),
) -> Optional[Dict[str, Any]]:
    """Signed-in user for the bearer token, or None for anonymous requests."""
    session = await get_session(gateway, token)
    return session["user"] if session else None


async def get_current_user(user: Optional[Dict[str, Any]] = Depends(get_optional_user)) -> Dict[str, Any]:
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


async def get_user_role(user: Optional[Dict[str, Any]] = Depends(get_optional_user)) -> UserRole:
    return normalize_role(user["role"] if user else None)


async def require_admin(user: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
    if normalize_role(user["role"]) != UserRole.ADMIN:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return user


async def require_watchlist_user(user: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
    if not can_use_watchlist(user["role"], authenticated=True):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Watchlists are not available")
    return user


# --- Request context ---

def client_context(request: Request, x_session_id: Optional[str] = Header(None)) -> Dict[str, Optional[str]]:
    """Session id and client details recorded with activity entries."""
    return {
        "session_id": x_session_id,
        "user_agent": request.headers.get("user-agent"),
    }
