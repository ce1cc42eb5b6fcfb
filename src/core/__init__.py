"""
Core Module - Shared Infrastructure.
"""

from src.core.config import Settings, get_settings
from src.core.database import Base
from src.core.errors import IntelError
from src.core.gateway import Gateway

__all__ = [
    "Settings",
    "get_settings",
    "Base",
    "IntelError",
    "Gateway",
]
