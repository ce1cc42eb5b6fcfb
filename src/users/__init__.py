"""
Users Module - Profiles, password sign-in and token sessions.
"""

from src.users.service import (
    get_session,
    get_user_profile,
    register_user,
    set_session,
    sign_in,
    sign_out,
)

__all__ = [
    "get_session",
    "get_user_profile",
    "register_user",
    "set_session",
    "sign_in",
    "sign_out",
]
