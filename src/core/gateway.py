"""Persistence gateway: the one database + storage handle a process owns."""
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from src.core.config import Settings
from src.core.database import Base, build_engine, build_session_factory, load_models
from src.storage.service import ObjectStorage

logger = logging.getLogger(__name__)


class Gateway:
    """Engine, session factory and object storage built once from settings.

    Construct with ``Gateway.from_settings`` at startup and hand the instance
    to services; attributes are read-only after construction.
    """

    __slots__ = ("_settings", "_engine", "_session_factory", "_storage")

    def __init__(
        self,
        settings: Settings,
        engine: AsyncEngine,
        session_factory: async_sessionmaker[AsyncSession],
        storage: ObjectStorage,
    ):
        object.__setattr__(self, "_settings", settings)
        object.__setattr__(self, "_engine", engine)
        object.__setattr__(self, "_session_factory", session_factory)
        object.__setattr__(self, "_storage", storage)

    def __setattr__(self, name, value):
        raise AttributeError("Gateway is immutable")

    @classmethod
    def from_settings(cls, settings: Settings) -> "Gateway":
        engine = build_engine(settings.database_url)
        storage = ObjectStorage(settings.storage_dir, settings.backend_url)
        return cls(settings, engine, build_session_factory(engine), storage)

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        return self._session_factory

    @property
    def storage(self) -> ObjectStorage:
        return self._storage

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def create_all(self) -> None:
        load_models()
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self._engine.dispose()
        logger.info("Gateway disposed")
