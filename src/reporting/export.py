"""Role-filtered JSON export of a company composite."""
import logging
from datetime import date, datetime
from typing import Any, Dict, Optional, Tuple

from src.access.rbac import (
    can_export_data,
    get_accessible_section_names,
    get_export_limitations,
    get_role_display_name,
    has_section_access,
    normalize_role,
)
from src.activity.service import log_activity_safe
from src.companies.service import SECTION_FIELDS, get_company_detail
from src.core.errors import PermissionDeniedError
from src.core.gateway import Gateway
from src.core.models import ActivityType

logger = logging.getLogger(__name__)

COMPANY_FIELDS = (
    "id", "name", "legal_name", "cin", "gst", "pan", "sector", "company_type",
    "status", "description", "website", "linkedin_url", "founded_date",
    "employee_count", "employee_range", "annual_revenue_range", "market_cap",
    "is_listed", "stock_exchange", "stock_symbol", "isin",
)


def build_export(
    composite: Dict[str, Any],
    role,
    exported_by: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Build the export payload a role is allowed to download.

    Basic info, addresses and contacts are always included; every other
    collection is added only when the role can see its section.
    """
    now = now or datetime.utcnow()
    user_role = normalize_role(role)

    report: Dict[str, Any] = {
        "company": {field: composite.get(field) for field in COMPANY_FIELDS},
        "addresses": composite.get("addresses", []),
        "contacts": composite.get("contacts", []),
        "exported_at": now.isoformat(),
        "exported_by": exported_by,
        "user_role": user_role.value,
    }

    for level, fields in SECTION_FIELDS.items():
        if has_section_access(user_role, level):
            for field in fields:
                report[field] = composite.get(field, [])

    report["export_metadata"] = {
        "user_role": user_role.value,
        "role_display_name": get_role_display_name(user_role),
        "accessible_sections": get_accessible_section_names(user_role),
        "export_limitations": get_export_limitations(user_role),
    }
    return report


def export_filename(company_name: str, role, today: Optional[date] = None) -> str:
    today = today or date.today()
    display = get_role_display_name(normalize_role(role)).lower()
    return f"{company_name}_{display}_export_{today.isoformat()}.json"


async def export_company(
    gateway: Gateway,
    company_id: int,
    role,
    user_id: Optional[str] = None,
    email: Optional[str] = None,
    session_id: Optional[str] = None,
    user_agent: Optional[str] = None,
) -> Tuple[str, Dict[str, Any]]:
    """Load, filter and name an export. Roles without export rights are refused."""
    if not can_export_data(role):
        raise PermissionDeniedError("Your plan does not include data export")

    composite = await get_company_detail(gateway, company_id)

    await log_activity_safe(
        gateway,
        user_id,
        ActivityType.EXPORT_DATA.value,
        company_id=company_id,
        resource_type="company_report",
        session_id=session_id,
        user_agent=user_agent,
    )

    payload = build_export(composite, role, exported_by=email)
    filename = export_filename(composite["name"], role)
    logger.info(f"Exported company {company_id} as {normalize_role(role).value}")
    return filename, payload
