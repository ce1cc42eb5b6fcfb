"""Public service interface for users: profiles, sign-in and token sessions."""
import hashlib
import logging
import secrets
import uuid
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from src.access.rbac import UserRole, normalize_role
from src.core.errors import AuthenticationError, DuplicateEntryError, NotFoundError, ValidationError
from src.core.gateway import Gateway
from src.core.schemas import normalize_email
from src.users.database import AuthSession, UserProfile

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, stored: str) -> bool:
    try:
        return pwd_context.verify(password, stored)
    except ValueError:
        # Not a hash this context recognises.
        return False


def token_digest(token: str) -> str:
    """Sessions are stored and looked up by the sha256 of their tokens."""
    return hashlib.sha256(token.encode("utf8")).hexdigest()


def _profile_dict(user: UserProfile) -> Dict[str, Any]:
    return {
        "id": user.id,
        "email": user.email,
        "name": user.full_name,
        "avatar": user.user_avatar,
        "role": normalize_role(user.role).value,
        "is_active": user.is_active,
    }


def _session_dict(auth: AuthSession, access_token: str, refresh_token: Optional[str]) -> Dict[str, Any]:
    return {
        "access_token": access_token,
        "refresh_token": refresh_token,
        "expires_at": auth.expires_at.isoformat(),
        "user": _profile_dict(auth.user),
    }


async def register_user(
    gateway: Gateway,
    email: str,
    password: str,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    role: str = UserRole.FREEMIUM.value,
) -> Dict[str, Any]:
    email = (email or "").strip()
    if not email or not password:
        raise ValidationError("Email and password are required")
    email = normalize_email(email)

    user = UserProfile(
        id=str(uuid.uuid4()),
        email=email,
        password_hash=hash_password(password),
        first_name=first_name,
        last_name=last_name,
        role=normalize_role(role).value,
    )
    try:
        async with gateway.session() as session:
            session.add(user)
    except IntegrityError:
        raise DuplicateEntryError(f"An account already exists for {email}")
    logger.info(f"Registered user {user.id}")
    return _profile_dict(user)


async def sign_in(gateway: Gateway, email: str, password: str) -> Dict[str, Any]:
    """Verify credentials and issue a fresh access/refresh token pair."""
    settings = gateway.settings
    async with gateway.session() as session:
        result = await session.execute(
            select(UserProfile).where(UserProfile.email == (email or "").strip().lower())
        )
        user = result.scalar_one_or_none()
        if not user or not user.is_active or not verify_password(password or "", user.password_hash):
            raise AuthenticationError("Incorrect email or password")

        now = datetime.utcnow()
        access_token = secrets.token_urlsafe(32)
        refresh_token = secrets.token_urlsafe(32)
        auth = AuthSession(
            user_id=user.id,
            access_token=token_digest(access_token),
            refresh_token=token_digest(refresh_token),
            expires_at=now + timedelta(minutes=settings.session_ttl_minutes),
            refresh_expires_at=now + timedelta(days=settings.refresh_ttl_days),
        )
        auth.user = user
        session.add(auth)

    return _session_dict(auth, access_token, refresh_token)


async def get_session(gateway: Gateway, access_token: Optional[str]) -> Optional[Dict[str, Any]]:
    """
    Current session for an access token, or None when unknown, expired or revoked.

    Only digests are stored, so the refresh token in the result is always None.
    """
    if not access_token:
        return None
    async with gateway.session() as session:
        result = await session.execute(
            select(AuthSession).where(AuthSession.access_token == token_digest(access_token))
        )
        auth = result.scalar_one_or_none()
        if auth is None or auth.revoked or auth.expires_at <= datetime.utcnow() or not auth.user.is_active:
            return None
        return _session_dict(auth, access_token, None)


async def set_session(gateway: Gateway, access_token: str, refresh_token: str) -> Dict[str, Any]:
    """Restore a session from a token pair.

    An expired access token is rotated as long as the refresh token is still
    valid; a revoked, unknown or fully expired pair is rejected.
    """
    now = datetime.utcnow()
    async with gateway.session() as session:
        result = await session.execute(
            select(AuthSession).where(
                AuthSession.access_token == token_digest(access_token or ""),
                AuthSession.refresh_token == token_digest(refresh_token or ""),
            )
        )
        auth = result.scalar_one_or_none()
        if auth is None or auth.revoked:
            raise AuthenticationError("Invalid session tokens")
        if auth.refresh_expires_at <= now:
            raise AuthenticationError("Session expired, sign in again")

        if auth.expires_at <= now:
            access_token = secrets.token_urlsafe(32)
            auth.access_token = token_digest(access_token)
            auth.expires_at = now + timedelta(minutes=gateway.settings.session_ttl_minutes)
            logger.info(f"Rotated access token for user {auth.user_id}")

        return _session_dict(auth, access_token, refresh_token)


async def sign_out(gateway: Gateway, access_token: str) -> bool:
    async with gateway.session() as session:
        result = await session.execute(
            select(AuthSession).where(AuthSession.access_token == token_digest(access_token or ""))
        )
        auth = result.scalar_one_or_none()
        if auth is None:
            return False
        auth.revoked = True
        return True


async def get_user_profile(gateway: Gateway, user_id: str) -> Dict[str, Any]:
    async with gateway.session() as session:
        user = await session.get(UserProfile, user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found")
        return _profile_dict(user)


async def set_user_avatar(gateway: Gateway, user_id: str, avatar_url: str) -> None:
    async with gateway.session() as session:
        user = await session.get(UserProfile, user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found")
        user.user_avatar = avatar_url
