"""Public service interface for the Market module.

Market analysis aggregates active companies by sector, type and size, funding
rounds over a time range, the last few years of financial statements and
recently founded companies. The four reads run concurrently, one session
each; the aggregation helpers below are pure.
"""
import asyncio
import logging
from collections import Counter, defaultdict
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import select

from src.access.rbac import can_view_market_analysis
from src.activity.service import log_activity_safe
from src.companies.database import CompanyModel, FinancialStatement, FundingRound
from src.core.errors import PermissionDeniedError
from src.core.gateway import Gateway
from src.core.models import ActivityType, CompanyStatus
from src.market.filters import ALL, COMPANY_SIZES, MarketFilters, months_before, size_bucket

logger = logging.getLogger(__name__)

TOP_SECTORS = 8
RECENT_DEALS = 10
RECENT_COMPANIES = 10
RECENT_FOUNDING_MONTHS = 6
FINANCIAL_YEARS_BACK = 2
TREND_MONTHS = 12
OTHER_ROUND = "Other"


def _number(value) -> float:
    return float(value) if value is not None else 0.0


# ──── Pure aggregations ────

def sector_distribution(companies: List[Dict[str, Any]], limit: Optional[int] = TOP_SECTORS) -> List[Dict[str, Any]]:
    """Per-sector counts and averages, largest sectors first. Blank sectors are skipped."""
    stats: Dict[str, Dict[str, Any]] = {}
    for company in companies:
        sector = (company.get("sector") or "").strip()
        if not sector:
            continue
        entry = stats.setdefault(
            sector,
            {"name": sector, "companies": 0, "total_market_cap": 0.0, "listed_count": 0, "total_employees": 0},
        )
        entry["companies"] += 1
        entry["total_market_cap"] += _number(company.get("market_cap"))
        entry["listed_count"] += 1 if company.get("is_listed") else 0
        entry["total_employees"] += company.get("employee_count") or 0

    sectors = []
    for entry in stats.values():
        count = entry["companies"]
        sectors.append(
            {
                **entry,
                "average_market_cap": entry["total_market_cap"] / count,
                "average_employees": entry["total_employees"] / count,
                "listing_rate": entry["listed_count"] / count * 100,
            }
        )
    sectors.sort(key=lambda s: (-s["companies"], s["name"]))
    return sectors[:limit]


def type_distribution(companies: List[Dict[str, Any]]) -> Dict[str, int]:
    counts = Counter(c.get("company_type") or "UNKNOWN" for c in companies)
    return dict(counts.most_common())


def size_distribution(companies: List[Dict[str, Any]]) -> Dict[str, int]:
    """Companies per size bucket, in bucket order, plus ``unknown`` headcounts."""
    counts = Counter(size_bucket(c.get("employee_count")) or "unknown" for c in companies)
    return {name: counts.get(name, 0) for name in [*COMPANY_SIZES, "unknown"]}


def funding_by_round_type(rounds: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    stats: Dict[str, Dict[str, float]] = {}
    for funding_round in rounds:
        entry = stats.setdefault(funding_round.get("round_type") or OTHER_ROUND, {"count": 0, "total_amount": 0.0})
        entry["count"] += 1
        entry["total_amount"] += _number(funding_round.get("amount"))

    breakdown = [
        {
            "type": round_type,
            "count": entry["count"],
            "total_amount": entry["total_amount"],
            "average_amount": entry["total_amount"] / entry["count"],
        }
        for round_type, entry in stats.items()
    ]
    breakdown.sort(key=lambda r: (-r["total_amount"], r["type"]))
    return breakdown


def funding_trend(rounds: List[Dict[str, Any]], today: date, months: int = TREND_MONTHS) -> List[Dict[str, Any]]:
    """Funding raised per calendar month, oldest first, ending with the current month."""
    totals: Dict[str, float] = defaultdict(float)
    for funding_round in rounds:
        when = funding_round.get("round_date")
        if when:
            totals[when[:7]] += _number(funding_round.get("amount"))

    first = months_before(today.replace(day=1), months - 1)
    trend = []
    for offset in range(months):
        month = months_before(first, -offset).strftime("%Y-%m")
        trend.append({"month": month, "funding": totals.get(month, 0.0)})
    return trend


def recent_deals(rounds: List[Dict[str, Any]], limit: int = RECENT_DEALS) -> List[Dict[str, Any]]:
    deals = [r for r in rounds if _number(r.get("amount")) > 0]
    deals.sort(key=lambda r: r.get("round_date") or "", reverse=True)
    return [
        {
            "company": r.get("company_name") or "Unknown",
            "sector": r.get("sector") or "Unknown",
            "amount": _number(r.get("amount")),
            "date": r.get("round_date"),
            "round_type": r.get("round_type"),
        }
        for r in deals[:limit]
    ]


def financial_summary(statements: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Revenue and profit totals over the recent statements, overall and per year."""
    by_year: Dict[str, Dict[str, Any]] = {}
    for statement in statements:
        year = statement.get("financial_year") or "unknown"
        entry = by_year.setdefault(year, {"statements": 0, "total_revenue": 0.0, "total_net_profit": 0.0})
        entry["statements"] += 1
        entry["total_revenue"] += _number(statement.get("total_revenue"))
        entry["total_net_profit"] += _number(statement.get("net_profit"))

    count = len(statements)
    total_revenue = sum(e["total_revenue"] for e in by_year.values())
    total_profit = sum(e["total_net_profit"] for e in by_year.values())
    return {
        "statements": count,
        "total_revenue": total_revenue,
        "total_net_profit": total_profit,
        "average_revenue": total_revenue / count if count else 0.0,
        "average_net_profit": total_profit / count if count else 0.0,
        "profitable_statements": sum(1 for s in statements if _number(s.get("net_profit")) > 0),
        "by_year": dict(sorted(by_year.items())),
    }


def company_growth(companies: List[Dict[str, Any]], today: date) -> Dict[str, Any]:
    """Companies founded this calendar year against last year."""
    years = Counter(c["founded_date"][:4] for c in companies if c.get("founded_date"))
    current = years.get(str(today.year), 0)
    previous = years.get(str(today.year - 1), 0)
    growth = round((current - previous) / previous * 100, 1) if previous else 0.0
    return {"founded_this_year": current, "founded_last_year": previous, "growth_pct": growth}


def summarize_market(
    companies: List[Dict[str, Any]],
    rounds: List[Dict[str, Any]],
    statements: List[Dict[str, Any]],
    recent_companies: List[Dict[str, Any]],
    today: date,
) -> Dict[str, Any]:
    total_funding = sum(_number(r.get("amount")) for r in rounds)
    sectors = sector_distribution(companies, limit=None)
    return {
        "total_companies": len(companies),
        "listed_companies": sum(1 for c in companies if c.get("is_listed")),
        "total_market_cap": sum(_number(c.get("market_cap")) for c in companies),
        "active_sectors": len(sectors),
        "total_funding": total_funding,
        "funding_rounds": len(rounds),
        "average_deal_size": total_funding / len(rounds) if rounds else 0.0,
        "sector_distribution": sectors[:TOP_SECTORS],
        "type_distribution": type_distribution(companies),
        "size_distribution": size_distribution(companies),
        "funding_by_round_type": funding_by_round_type(rounds),
        "funding_trend": funding_trend(rounds, today),
        "recent_deals": recent_deals(rounds),
        "financials": financial_summary(statements),
        "growth": company_growth(companies, today),
        "recent_companies": recent_companies,
    }


# ──── Source readers ────

def _company_row(company: CompanyModel) -> Dict[str, Any]:
    return {
        "sector": company.sector,
        "company_type": company.company_type,
        "is_listed": company.is_listed,
        "employee_count": company.employee_count,
        "market_cap": company.market_cap,
        "founded_date": company.founded_date.isoformat() if company.founded_date else None,
    }


async def _read_companies(gateway: Gateway, filters: MarketFilters) -> List[Dict[str, Any]]:
    stmt = select(CompanyModel).where(CompanyModel.status == CompanyStatus.ACTIVE.value)
    if filters.sector:
        stmt = stmt.where(CompanyModel.sector == filters.sector)
    if filters.company_type:
        stmt = stmt.where(CompanyModel.company_type == filters.company_type)
    if filters.company_size:
        low, high = COMPANY_SIZES[filters.company_size]
        if low is not None:
            stmt = stmt.where(CompanyModel.employee_count >= low)
        if high is not None:
            stmt = stmt.where(CompanyModel.employee_count <= high)
    async with gateway.session() as session:
        result = await session.execute(stmt)
        return [_company_row(c) for c in result.scalars().all()]


async def _read_funding_rounds(gateway: Gateway, filters: MarketFilters, today: date) -> List[Dict[str, Any]]:
    stmt = (
        select(FundingRound, CompanyModel.name, CompanyModel.sector)
        .join(CompanyModel, CompanyModel.id == FundingRound.company_id)
        .order_by(FundingRound.round_date.desc(), FundingRound.id.desc())
    )
    since = filters.since(today)
    if since is not None:
        stmt = stmt.where(FundingRound.round_date >= since)
    if filters.sector:
        stmt = stmt.where(CompanyModel.sector == filters.sector)
    async with gateway.session() as session:
        result = await session.execute(stmt)
        return [
            {**funding_round.to_dict(), "company_name": name, "sector": sector}
            for funding_round, name, sector in result.all()
        ]


async def _read_statements(gateway: Gateway, filters: MarketFilters, today: date) -> List[Dict[str, Any]]:
    # financial_year is stored as text starting with the year ("2024", "2024-25").
    stmt = (
        select(FinancialStatement)
        .join(CompanyModel, CompanyModel.id == FinancialStatement.company_id)
        .where(FinancialStatement.financial_year >= str(today.year - FINANCIAL_YEARS_BACK))
    )
    if filters.sector:
        stmt = stmt.where(CompanyModel.sector == filters.sector)
    async with gateway.session() as session:
        result = await session.execute(stmt)
        return [s.to_dict() for s in result.scalars().all()]


async def _read_recent_companies(gateway: Gateway, filters: MarketFilters, today: date) -> List[Dict[str, Any]]:
    stmt = (
        select(CompanyModel)
        .where(
            CompanyModel.status == CompanyStatus.ACTIVE.value,
            CompanyModel.founded_date >= months_before(today, RECENT_FOUNDING_MONTHS),
        )
        .order_by(CompanyModel.founded_date.desc(), CompanyModel.id.asc())
        .limit(RECENT_COMPANIES)
    )
    if filters.sector:
        stmt = stmt.where(CompanyModel.sector == filters.sector)
    async with gateway.session() as session:
        result = await session.execute(stmt)
        return [
            {
                "id": c.id,
                "name": c.name,
                "sector": c.sector,
                "founded_date": c.founded_date.isoformat(),
                "market_cap": c.market_cap,
            }
            for c in result.scalars().all()
        ]


async def get_market_overview(
    gateway: Gateway,
    filters: Optional[MarketFilters] = None,
    role=None,
    today: Optional[date] = None,
) -> Dict[str, Any]:
    """
    Market analysis for the filtered slice of active companies.

    Sector narrows every read. Company type and size narrow the company
    aggregates only; the time range applies to funding rounds.
    """
    if not can_view_market_analysis(role):
        raise PermissionDeniedError("Your plan does not include market analysis")
    filters = filters or MarketFilters()
    today = today or date.today()

    companies, rounds, statements, recent = await asyncio.gather(
        _read_companies(gateway, filters),
        _read_funding_rounds(gateway, filters, today),
        _read_statements(gateway, filters, today),
        _read_recent_companies(gateway, filters, today),
    )
    overview = summarize_market(companies, rounds, statements, recent, today)
    overview["filters"] = filters.model_dump()
    return overview


def build_market_export(overview: Dict[str, Any], now: Optional[datetime] = None) -> Dict[str, Any]:
    now = now or datetime.utcnow()
    return {
        "generated_at": now.isoformat(),
        "filters": overview["filters"],
        "summary": {
            "total_companies": overview["total_companies"],
            "total_funding": overview["total_funding"],
            "average_deal_size": overview["average_deal_size"],
            "active_sectors": overview["active_sectors"],
        },
        "sector_analysis": overview["sector_distribution"],
        "type_distribution": overview["type_distribution"],
        "size_distribution": overview["size_distribution"],
        "recent_deals": overview["recent_deals"],
        "funding_by_round_type": overview["funding_by_round_type"],
        "funding_trend": overview["funding_trend"],
        "financials": overview["financials"],
        "growth": overview["growth"],
    }


def market_filename(filters: MarketFilters, today: Optional[date] = None) -> str:
    today = today or date.today()
    parts = [
        filters.sector or ALL,
        filters.time_range,
        filters.company_type or ALL,
        filters.company_size or ALL,
    ]
    return f"market_analysis_{'_'.join(parts)}_{today.isoformat()}.json"


async def export_market_overview(
    gateway: Gateway,
    filters: Optional[MarketFilters] = None,
    role=None,
    user_id: Optional[str] = None,
    session_id: Optional[str] = None,
    user_agent: Optional[str] = None,
):
    filters = filters or MarketFilters()
    overview = await get_market_overview(gateway, filters, role)

    await log_activity_safe(
        gateway,
        user_id,
        ActivityType.DOWNLOAD_REPORT.value,
        resource_type="market_analysis",
        session_id=session_id,
        user_agent=user_agent,
    )
    logger.info(f"Exported market analysis for sector {filters.sector or ALL}")
    return market_filename(filters), build_market_export(overview)
