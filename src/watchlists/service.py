"""Public service interface for the Watchlists module.

Write paths raise so the caller can show a specific message; read paths
raise too, since the watchlist page reports load failures explicitly.
"""
import logging
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload

from src.activity.service import log_activity_safe
from src.companies.database import CompanyModel
from src.core.errors import DuplicateEntryError, NotFoundError, ValidationError
from src.core.gateway import Gateway
from src.core.models import ActivityType
from src.watchlists.database import Watchlist, WatchlistCompany

logger = logging.getLogger(__name__)

DUPLICATE_MESSAGE = "Company is already in this watchlist"


def _entry_dict(entry: WatchlistCompany) -> Dict[str, Any]:
    return {
        "id": entry.id,
        "company_id": entry.company_id,
        "notes": entry.notes,
        "added_at": entry.added_at.isoformat() if entry.added_at else None,
        "company": entry.company.summary() if entry.company is not None else None,
    }


def _watchlist_dict(watchlist: Watchlist, with_entries: bool = True) -> Dict[str, Any]:
    data = {
        "id": watchlist.id,
        "user_id": watchlist.user_id,
        "name": watchlist.name,
        "description": watchlist.description,
        "created_at": watchlist.created_at.isoformat() if watchlist.created_at else None,
        "updated_at": watchlist.updated_at.isoformat() if watchlist.updated_at else None,
    }
    if with_entries:
        data["watchlist_companies"] = [_entry_dict(e) for e in watchlist.entries]
    return data


async def get_user_watchlists(gateway: Gateway, user_id: str) -> List[Dict[str, Any]]:
    stmt = (
        select(Watchlist)
        .where(Watchlist.user_id == user_id)
        .options(selectinload(Watchlist.entries))
        .order_by(Watchlist.created_at.desc())
    )
    async with gateway.session() as session:
        result = await session.execute(stmt)
        return [_watchlist_dict(w) for w in result.scalars().all()]


async def get_watchlist(gateway: Gateway, watchlist_id: str) -> Dict[str, Any]:
    stmt = (
        select(Watchlist)
        .where(Watchlist.id == watchlist_id)
        .options(selectinload(Watchlist.entries))
    )
    async with gateway.session() as session:
        result = await session.execute(stmt)
        watchlist = result.scalar_one_or_none()
        if watchlist is None:
            raise NotFoundError(f"Watchlist {watchlist_id} not found")
        return _watchlist_dict(watchlist)


async def get_watchlist_owner(gateway: Gateway, watchlist_id: str) -> str:
    async with gateway.session() as session:
        result = await session.execute(select(Watchlist.user_id).where(Watchlist.id == watchlist_id))
        owner = result.scalar_one_or_none()
    if owner is None:
        raise NotFoundError(f"Watchlist {watchlist_id} not found")
    return owner


async def create_watchlist(
    gateway: Gateway,
    user_id: str,
    name: str,
    description: str = "",
    session_id: Optional[str] = None,
    user_agent: Optional[str] = None,
) -> Dict[str, Any]:
    if not name or not name.strip():
        raise ValidationError("Watchlist name is required")

    now = datetime.utcnow()
    watchlist = Watchlist(
        id=str(uuid.uuid4()),
        user_id=user_id,
        name=name.strip(),
        description=description or "",
        created_at=now,
        updated_at=now,
    )
    async with gateway.session() as session:
        session.add(watchlist)

    logger.info(f"Created watchlist {watchlist.id} for user {user_id}")
    await log_activity_safe(
        gateway,
        user_id,
        ActivityType.CREATE_WATCHLIST.value,
        resource_type="watchlist",
        resource_id=watchlist.id,
        session_id=session_id,
        user_agent=user_agent,
    )
    return _watchlist_dict(watchlist, with_entries=False)


async def update_watchlist(
    gateway: Gateway,
    watchlist_id: str,
    name: Optional[str] = None,
    description: Optional[str] = None,
) -> Dict[str, Any]:
    if name is not None and not name.strip():
        raise ValidationError("Watchlist name cannot be blank")

    async with gateway.session() as session:
        watchlist = await session.get(Watchlist, watchlist_id)
        if watchlist is None:
            raise NotFoundError(f"Watchlist {watchlist_id} not found")
        if name is not None:
            watchlist.name = name.strip()
        if description is not None:
            watchlist.description = description
        watchlist.updated_at = datetime.utcnow()
        return _watchlist_dict(watchlist, with_entries=False)


async def delete_watchlist(gateway: Gateway, watchlist_id: str) -> bool:
    async with gateway.session() as session:
        watchlist = await session.get(Watchlist, watchlist_id)
        if watchlist is None:
            raise NotFoundError(f"Watchlist {watchlist_id} not found")
        await session.execute(
            delete(WatchlistCompany).where(WatchlistCompany.watchlist_id == watchlist_id)
        )
        await session.delete(watchlist)
    logger.info(f"Deleted watchlist {watchlist_id}")
    return True


async def add_company_to_watchlist(
    gateway: Gateway,
    watchlist_id: str,
    company_id: int,
    notes: str = "",
    session_id: Optional[str] = None,
    user_agent: Optional[str] = None,
) -> Dict[str, Any]:
    """Add a company; a second add of the same pair raises DuplicateEntryError."""
    entry = WatchlistCompany(
        id=str(uuid.uuid4()),
        watchlist_id=watchlist_id,
        company_id=company_id,
        notes=notes or "",
        added_at=datetime.utcnow(),
    )
    try:
        async with gateway.session() as session:
            watchlist = await session.get(Watchlist, watchlist_id)
            if watchlist is None:
                raise NotFoundError(f"Watchlist {watchlist_id} not found")
            if await session.get(CompanyModel, company_id) is None:
                raise NotFoundError(f"Company {company_id} not found")
            owner_id = watchlist.user_id
            session.add(entry)
            await session.flush()
    except IntegrityError:
        raise DuplicateEntryError(DUPLICATE_MESSAGE)

    await log_activity_safe(
        gateway,
        owner_id,
        ActivityType.ADD_TO_WATCHLIST.value,
        company_id=company_id,
        resource_type="watchlist_company",
        resource_id=entry.id,
        session_id=session_id,
        user_agent=user_agent,
    )
    return {
        "id": entry.id,
        "watchlist_id": entry.watchlist_id,
        "company_id": entry.company_id,
        "notes": entry.notes,
        "added_at": entry.added_at.isoformat(),
    }


async def remove_company_from_watchlist(gateway: Gateway, watchlist_id: str, company_id: int) -> bool:
    async with gateway.session() as session:
        result = await session.execute(
            delete(WatchlistCompany).where(
                WatchlistCompany.watchlist_id == watchlist_id,
                WatchlistCompany.company_id == company_id,
            )
        )
        if result.rowcount == 0:
            raise NotFoundError("Company is not in this watchlist")
    return True


async def update_company_notes(gateway: Gateway, watchlist_id: str, company_id: int, notes: str) -> Dict[str, Any]:
    async with gateway.session() as session:
        result = await session.execute(
            select(WatchlistCompany).where(
                WatchlistCompany.watchlist_id == watchlist_id,
                WatchlistCompany.company_id == company_id,
            )
        )
        entry = result.scalar_one_or_none()
        if entry is None:
            raise NotFoundError("Company is not in this watchlist")
        entry.notes = notes
        return _entry_dict(entry)


async def is_company_in_watchlists(gateway: Gateway, user_id: str, company_id: int) -> List[Dict[str, Any]]:
    stmt = (
        select(WatchlistCompany.watchlist_id, Watchlist.name)
        .join(Watchlist, Watchlist.id == WatchlistCompany.watchlist_id)
        .where(WatchlistCompany.company_id == company_id, Watchlist.user_id == user_id)
        .order_by(Watchlist.name)
    )
    async with gateway.session() as session:
        result = await session.execute(stmt)
        return [{"watchlist_id": row.watchlist_id, "name": row.name} for row in result.all()]


async def get_watchlist_stats(gateway: Gateway, user_id: str) -> Dict[str, Any]:
    stmt = (
        select(Watchlist.id, Watchlist.name, func.count(WatchlistCompany.id).label("company_count"))
        .outerjoin(WatchlistCompany, WatchlistCompany.watchlist_id == Watchlist.id)
        .where(Watchlist.user_id == user_id)
        .group_by(Watchlist.id, Watchlist.name)
        .order_by(Watchlist.name)
    )
    async with gateway.session() as session:
        result = await session.execute(stmt)
        rows = [{"id": r.id, "name": r.name, "company_count": r.company_count} for r in result.all()]

    return {
        "total_watchlists": len(rows),
        "total_companies": sum(r["company_count"] for r in rows),
        "watchlists": rows,
    }
