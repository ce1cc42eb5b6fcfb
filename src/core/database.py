# ──── Usage Guide ────
# SERVICE CODE (src/*/service.py):
#   Every service function takes the process Gateway as its first argument.
#   Pattern: async with gateway.session() as session:
#                result = await session.execute(select(Model).where(...))
#
# ROUTERS (src/web/routers/*):
#   Resolve the gateway with Depends(get_gateway); never build engines in routers.
#
# DATABASE: PostgreSQL (asyncpg). SQLite (aiosqlite) is only used by the test suite.

import datetime
from decimal import Decimal
from enum import Enum

from fastapi import Request
from sqlalchemy import MetaData, inspect
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase


class ToDictMixin:
    """Mixin to add dictionary serialization to models."""
    def to_dict(self):
        """Convert model instance to dictionary."""
        result = {}
        for key in inspect(self).mapper.column_attrs.keys():
            value = getattr(self, key)
            if isinstance(value, (datetime.datetime, datetime.date)):
                result[key] = value.isoformat()
            elif isinstance(value, Decimal):
                result[key] = float(value)
            elif isinstance(value, Enum):
                result[key] = value.value
            else:
                result[key] = value
        return result


class Base(ToDictMixin, DeclarativeBase):
    metadata = MetaData()


def load_models() -> None:
    """Import every module's models so their tables register on Base.metadata."""
    from src.companies import database as _companies  # noqa: F401
    from src.watchlists import database as _watchlists  # noqa: F401
    from src.activity import database as _activity  # noqa: F401
    from src.users import database as _users  # noqa: F401
    from src.contact import database as _contact  # noqa: F401


def async_database_url(url: str) -> str:
    """Pick the async driver for a configured database URL."""
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if url.startswith("sqlite://"):
        return url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    return url


def build_engine(url: str) -> AsyncEngine:
    return create_async_engine(async_database_url(url), echo=False, future=True)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


# ──── Session Providers (FastAPI Dependencies) ────
def get_gateway(request: Request):
    return request.app.state.gateway
