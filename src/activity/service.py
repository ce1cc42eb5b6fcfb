"""Public service interface for the Activity module.

Other modules log through ``log_activity_safe`` so a logging failure never
changes the outcome of the action being logged.
"""
import logging
import secrets
import string
import time
from collections import Counter
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from sqlalchemy import select

from src.activity.database import ActivityLog
from src.core.errors import ValidationError
from src.core.gateway import Gateway
from src.core.models import ActivityType

logger = logging.getLogger(__name__)

ACTIVITY_LABELS = {
    ActivityType.SEARCH: "Search",
    ActivityType.VIEW_PROFILE: "Viewed Company Profile",
    ActivityType.EXPORT_DATA: "Exported Data",
    ActivityType.CREATE_WATCHLIST: "Created Watchlist",
    ActivityType.ADD_TO_WATCHLIST: "Added to Watchlist",
    ActivityType.SAVE_SEARCH: "Saved Search",
    ActivityType.DOWNLOAD_REPORT: "Downloaded Report",
    ActivityType.API_CALL: "API Call",
}

_ID_ALPHABET = string.ascii_lowercase + string.digits


def new_activity_id() -> str:
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"activity-{int(time.time() * 1000)}-{suffix}"


def get_activity_types() -> List[str]:
    return [t.value for t in ActivityType]


async def log_activity(
    gateway: Gateway,
    user_id: str,
    activity_type: str,
    company_id: Optional[int] = None,
    search_query: Optional[str] = None,
    resource_type: Optional[str] = None,
    resource_id: Optional[str] = None,
    session_id: Optional[str] = None,
    user_agent: Optional[str] = None,
    ip_address: Optional[str] = None,
) -> Dict[str, Any]:
    """Append one activity row. Raises on invalid type or persistence failure."""
    try:
        kind = ActivityType(activity_type)
    except ValueError:
        raise ValidationError(f"Unknown activity type: {activity_type}")

    entry = ActivityLog(
        id=new_activity_id(),
        user_id=user_id,
        activity_type=kind.value,
        company_id=company_id,
        search_query=search_query,
        resource_type=resource_type,
        resource_id=resource_id,
        session_id=session_id,
        user_agent=user_agent,
        ip_address=ip_address,
        timestamp=datetime.utcnow(),
    )
    async with gateway.session() as session:
        session.add(entry)

    return {
        "id": entry.id,
        "user_id": entry.user_id,
        "activity_type": entry.activity_type,
        "company_id": entry.company_id,
        "search_query": entry.search_query,
        "resource_type": entry.resource_type,
        "resource_id": entry.resource_id,
        "timestamp": entry.timestamp.isoformat(),
        "session_id": entry.session_id,
        "user_agent": entry.user_agent,
    }


async def log_activity_safe(gateway: Gateway, user_id: Optional[str], activity_type: str, **fields) -> Optional[Dict[str, Any]]:
    """Best-effort logging: failures are logged here and swallowed."""
    if not user_id:
        return None
    try:
        return await log_activity(gateway, user_id, activity_type, **fields)
    except Exception as e:
        logger.warning(f"Failed to log {activity_type} activity for user {user_id}: {e}")
        return None


def _serialize(entry: ActivityLog) -> Dict[str, Any]:
    data = entry.to_dict()
    data["company"] = (
        {
            "id": entry.company.id,
            "name": entry.company.name,
            "sector": entry.company.sector,
            "company_type": entry.company.company_type,
        }
        if entry.company is not None
        else None
    )
    return data


async def get_user_activity_logs(
    gateway: Gateway,
    user_id: str,
    activity_type: Optional[str] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    limit: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """Activity rows for a user, newest first, with the company summary joined."""
    stmt = select(ActivityLog).where(ActivityLog.user_id == user_id)
    if activity_type:
        stmt = stmt.where(ActivityLog.activity_type == activity_type)
    if start_date:
        stmt = stmt.where(ActivityLog.timestamp >= start_date)
    if end_date:
        stmt = stmt.where(ActivityLog.timestamp <= end_date)
    stmt = stmt.order_by(ActivityLog.timestamp.desc(), ActivityLog.id.desc())
    if limit:
        stmt = stmt.limit(limit)

    async with gateway.session() as session:
        result = await session.execute(stmt)
        return [_serialize(e) for e in result.scalars().all()]


async def get_activity_stats(gateway: Gateway, user_id: str, days: Optional[int] = None) -> Dict[str, Any]:
    """Counts per activity type and per day over a trailing window."""
    days = days if days is not None else gateway.settings.activity_window_days
    since = datetime.utcnow() - timedelta(days=days)

    stmt = (
        select(ActivityLog)
        .where(ActivityLog.user_id == user_id, ActivityLog.timestamp >= since)
        .order_by(ActivityLog.timestamp.desc())
    )
    async with gateway.session() as session:
        result = await session.execute(stmt)
        entries = result.scalars().all()

    by_type = Counter(e.activity_type for e in entries)
    by_day = Counter(e.timestamp.date().isoformat() for e in entries)

    return {
        "total_activities": len(entries),
        "activity_types": dict(by_type),
        "daily_activity": dict(sorted(by_day.items())),
        "recent_activity": [_serialize(e) for e in entries[:10]],
        "window_days": days,
    }


def get_relative_time(timestamp: datetime, now: Optional[datetime] = None) -> str:
    now = now or datetime.utcnow()
    seconds = int((now - timestamp).total_seconds())

    def _ago(n: int, unit: str) -> str:
        return f"{n} {unit}{'s' if n > 1 else ''} ago"

    if seconds < 60:
        return "Just now"
    if seconds < 3600:
        return _ago(seconds // 60, "minute")
    if seconds < 86400:
        return _ago(seconds // 3600, "hour")
    if seconds < 2592000:
        return _ago(seconds // 86400, "day")
    return _ago(seconds // 2592000, "month")


def format_activity(activity: Dict[str, Any], now: Optional[datetime] = None) -> Dict[str, Any]:
    """Add a display label and relative time to a serialized activity row."""
    kind = activity.get("activity_type")
    try:
        label = ACTIVITY_LABELS[ActivityType(kind)]
    except ValueError:
        label = kind

    timestamp = activity.get("timestamp")
    if isinstance(timestamp, str):
        timestamp = datetime.fromisoformat(timestamp)

    return {
        **activity,
        "label": label,
        "formatted_time": timestamp.strftime("%d %b %Y, %H:%M") if timestamp else None,
        "relative_time": get_relative_time(timestamp, now) if timestamp else None,
    }
