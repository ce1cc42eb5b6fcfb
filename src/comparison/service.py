"""Public service interface for the Comparison module.

Side-by-side view of two to four active companies: headline fields, latest
financials, funding totals and headcount, with metrics and a summary across
the selection.
"""
import logging
from collections import defaultdict
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import func, select

from src.access.rbac import can_compare_companies
from src.activity.service import log_activity_safe
from src.companies.database import CompanyModel, FinancialStatement, FundingRound, KeyOfficial
from src.core.errors import NotFoundError, PermissionDeniedError, ValidationError
from src.core.gateway import Gateway
from src.core.models import ActivityType

logger = logging.getLogger(__name__)

MIN_COMPARE = 2
MAX_COMPARE = 4


def validate_selection(company_ids: Sequence[int]) -> List[int]:
    ids = list(company_ids or [])
    if len(ids) != len(set(ids)):
        raise ValidationError("Company already added to comparison")
    if len(ids) > MAX_COMPARE:
        raise ValidationError(f"Maximum {MAX_COMPARE} companies can be compared at once")
    if len(ids) < MIN_COMPARE:
        raise ValidationError(f"Select at least {MIN_COMPARE} companies to compare")
    return ids


def _number(value) -> float:
    return float(value) if value is not None else 0.0


def comparison_row(
    company: CompanyModel,
    latest_statement: Optional[FinancialStatement],
    rounds: List[FundingRound],
    officials: int,
) -> Dict[str, Any]:
    return {
        "id": company.id,
        "name": company.name,
        "sector": company.sector,
        "company_type": company.company_type,
        "market_cap": _number(company.market_cap),
        "employee_count": company.employee_count or 0,
        "founded_date": company.founded_date.isoformat() if company.founded_date else None,
        "is_listed": company.is_listed,
        "revenue": _number(latest_statement.total_revenue) if latest_statement else 0.0,
        "profit": _number(latest_statement.net_profit) if latest_statement else 0.0,
        "financial_year": latest_statement.financial_year if latest_statement else None,
        "total_funding": sum(_number(r.amount) for r in rounds),
        "funding_rounds": len(rounds),
        "key_officials": officials,
    }


def comparison_metrics(rows: List[Dict[str, Any]]) -> Dict[str, Any]:
    if not rows:
        return {
            "highest_market_cap": 0.0,
            "lowest_market_cap": 0.0,
            "avg_employees": 0.0,
            "total_funding": 0.0,
            "total_companies": 0,
        }
    market_caps = [r["market_cap"] for r in rows]
    return {
        "highest_market_cap": max(market_caps),
        "lowest_market_cap": min(market_caps),
        "avg_employees": sum(r["employee_count"] for r in rows) / len(rows),
        "total_funding": sum(r["total_funding"] for r in rows),
        "total_companies": len(rows),
    }


def comparison_summary(rows: List[Dict[str, Any]], metrics: Dict[str, Any]) -> Dict[str, Any]:
    """Market leader is the largest market cap; the earliest selected wins a tie."""
    leader = max(rows, key=lambda r: r["market_cap"]) if rows else None
    return {
        "market_leader": leader["name"] if leader else None,
        "total_market_cap": sum(r["market_cap"] for r in rows),
        "average_employees": metrics["avg_employees"],
        "total_funding": metrics["total_funding"],
        "sectors": list(dict.fromkeys(r["sector"] for r in rows)),
        "company_types": list(dict.fromkeys(r["company_type"] for r in rows)),
    }


async def compare_companies(gateway: Gateway, company_ids: Sequence[int], role=None) -> Dict[str, Any]:
    """
    Load the selected companies in one session and compute the comparison.

    Args:
        gateway: Process gateway
        company_ids: Two to four distinct company ids, in display order
        role: Caller's role; comparison is an Enterprise feature

    Returns:
        ``companies`` rows in selection order plus ``metrics`` and ``summary``.
    """
    if not can_compare_companies(role):
        raise PermissionDeniedError("Your plan does not include company comparison")
    ids = validate_selection(company_ids)

    async with gateway.session() as session:
        result = await session.execute(select(CompanyModel).where(CompanyModel.id.in_(ids)))
        companies = {c.id: c for c in result.scalars().all()}
        missing = [i for i in ids if i not in companies]
        if missing:
            raise NotFoundError(f"Companies not found: {', '.join(str(i) for i in missing)}")

        result = await session.execute(
            select(FinancialStatement)
            .where(FinancialStatement.company_id.in_(ids))
            .order_by(FinancialStatement.financial_year.desc(), FinancialStatement.id.desc())
        )
        latest: Dict[int, FinancialStatement] = {}
        for statement in result.scalars().all():
            latest.setdefault(statement.company_id, statement)

        result = await session.execute(select(FundingRound).where(FundingRound.company_id.in_(ids)))
        rounds: Dict[int, List[FundingRound]] = defaultdict(list)
        for funding_round in result.scalars().all():
            rounds[funding_round.company_id].append(funding_round)

        result = await session.execute(
            select(KeyOfficial.company_id, func.count(KeyOfficial.id))
            .where(KeyOfficial.company_id.in_(ids))
            .group_by(KeyOfficial.company_id)
        )
        officials = dict(result.all())

        rows = [comparison_row(companies[i], latest.get(i), rounds[i], officials.get(i, 0)) for i in ids]

    metrics = comparison_metrics(rows)
    return {"companies": rows, "metrics": metrics, "summary": comparison_summary(rows, metrics)}


def build_comparison_export(comparison: Dict[str, Any], now: Optional[datetime] = None) -> Dict[str, Any]:
    now = now or datetime.utcnow()
    return {
        "timestamp": now.isoformat(),
        "companies": comparison["companies"],
        "metrics": comparison["metrics"],
        "summary": comparison["summary"],
    }


def comparison_filename(today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"company-comparison-{today.isoformat()}.json"


async def export_comparison(
    gateway: Gateway,
    company_ids: Sequence[int],
    role=None,
    user_id: Optional[str] = None,
    session_id: Optional[str] = None,
    user_agent: Optional[str] = None,
):
    """Comparison payload and attachment filename for download."""
    comparison = await compare_companies(gateway, company_ids, role)

    await log_activity_safe(
        gateway,
        user_id,
        ActivityType.DOWNLOAD_REPORT.value,
        resource_type="company_comparison",
        resource_id=",".join(str(c["id"]) for c in comparison["companies"]),
        session_id=session_id,
        user_agent=user_agent,
    )
    logger.info(f"Exported comparison of {len(comparison['companies'])} companies")
    return comparison_filename(), build_comparison_export(comparison)
