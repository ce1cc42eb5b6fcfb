"""Public service interface for the Search module.

Read paths here never raise: backend failures are logged and degrade to
empty results.
"""
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import Select, func, or_, select

from src.activity.service import log_activity_safe
from src.companies.database import CompanyAddress, CompanyModel, FinancialStatement
from src.core.gateway import Gateway
from src.core.models import ActivityType, CompanyStatus
from src.search.filters import SearchFilters

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2
MAX_PAGE_SIZE = 100


def _text_match(query: str):
    pattern = f"%{query.strip().lower()}%"
    return or_(
        CompanyModel.name_lowercase.ilike(pattern),
        CompanyModel.sector.ilike(pattern),
        CompanyModel.cin.ilike(pattern),
    )


def _search_row(company: CompanyModel) -> Dict[str, Any]:
    row = company.summary()
    row.update(
        {
            "employee_count": company.employee_count,
            "employee_range": company.employee_range,
            "description": company.description,
        }
    )
    return row


async def autocomplete(gateway: Gateway, query: Optional[str], limit: Optional[int] = None) -> List[Dict[str, Any]]:
    """Typeahead lookup. Queries under two characters never reach the database."""
    if not query or len(query.strip()) < MIN_QUERY_LENGTH:
        return []
    limit = limit or gateway.settings.autocomplete_limit

    stmt = (
        select(CompanyModel)
        .where(_text_match(query), CompanyModel.status == CompanyStatus.ACTIVE.value)
        .order_by(CompanyModel.name.asc(), CompanyModel.id.asc())
        .limit(limit)
    )
    try:
        async with gateway.session() as session:
            result = await session.execute(stmt)
            return [c.summary() for c in result.scalars().all()]
    except Exception as e:
        logger.error(f"Autocomplete failed for '{query}': {e}")
        return []


def build_search_query(filters: SearchFilters) -> Select:
    """
    Build the ordered company select for a filter record.

    Financial bounds are applied to a per-company aggregate of matching
    statements, and location to a distinct set of company ids, so each
    company appears at most once whichever joins are active.
    """
    stmt = select(CompanyModel).where(CompanyModel.status == CompanyStatus.ACTIVE.value)

    if filters.search_query:
        stmt = stmt.where(_text_match(filters.search_query))
    if filters.sector:
        stmt = stmt.where(CompanyModel.sector == filters.sector)
    if filters.company_type:
        stmt = stmt.where(CompanyModel.company_type == filters.company_type)
    if filters.is_listed is not None:
        stmt = stmt.where(CompanyModel.is_listed == filters.is_listed)
    if filters.revenue_range:
        stmt = stmt.where(CompanyModel.annual_revenue_range == filters.revenue_range)
    if filters.employee_range:
        stmt = stmt.where(CompanyModel.employee_range == filters.employee_range)

    if filters.location:
        located = (
            select(CompanyAddress.company_id)
            .where(CompanyAddress.state == filters.location)
            .distinct()
            .subquery("located")
        )
        stmt = stmt.join(located, located.c.company_id == CompanyModel.id)

    sort_column, direction = filters.resolved_sort()

    financials = None
    if filters.has_financial_bounds or sort_column in ("revenue", "profit"):
        fin = select(
            FinancialStatement.company_id.label("company_id"),
            func.max(FinancialStatement.total_revenue).label("revenue"),
            func.max(FinancialStatement.net_profit).label("profit"),
        )
        # Bounds filter individual statements, so they hold on one row.
        if filters.min_revenue is not None:
            fin = fin.where(FinancialStatement.total_revenue >= filters.min_revenue)
        if filters.max_revenue is not None:
            fin = fin.where(FinancialStatement.total_revenue <= filters.max_revenue)
        if filters.min_profit is not None:
            fin = fin.where(FinancialStatement.net_profit >= filters.min_profit)
        if filters.max_profit is not None:
            fin = fin.where(FinancialStatement.net_profit <= filters.max_profit)
        financials = fin.group_by(FinancialStatement.company_id).subquery("fin")

        if filters.has_financial_bounds:
            stmt = stmt.join(financials, financials.c.company_id == CompanyModel.id)
        else:
            stmt = stmt.outerjoin(financials, financials.c.company_id == CompanyModel.id)

    columns = {
        "name": CompanyModel.name,
        "market_cap": CompanyModel.market_cap,
        "founded_date": CompanyModel.founded_date,
    }
    if financials is not None:
        columns["revenue"] = financials.c.revenue
        columns["profit"] = financials.c.profit

    column = columns[sort_column]
    if direction == "asc":
        stmt = stmt.order_by(column.asc(), CompanyModel.id.asc())
    else:
        stmt = stmt.order_by(column.desc().nulls_last(), CompanyModel.id.asc())
    return stmt


async def advanced_search(
    gateway: Gateway,
    filters: SearchFilters,
    page: int = 1,
    page_size: Optional[int] = None,
    user_id: Optional[str] = None,
    session_id: Optional[str] = None,
    user_agent: Optional[str] = None,
) -> Dict[str, Any]:
    """One page of matching companies plus the total match count."""
    page = max(page or 1, 1)
    limit = page_size if page_size and page_size > 0 else gateway.settings.search_page_size
    limit = min(limit, MAX_PAGE_SIZE)

    if filters.search_query and user_id:
        await log_activity_safe(
            gateway,
            user_id,
            ActivityType.SEARCH.value,
            search_query=filters.search_query,
            session_id=session_id,
            user_agent=user_agent,
        )

    try:
        stmt = build_search_query(filters)
        count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
        offset = (page - 1) * limit

        async with gateway.session() as session:
            total = (await session.execute(count_stmt)).scalar_one()
            result = await session.execute(stmt.offset(offset).limit(limit))
            results = [_search_row(c) for c in result.scalars().all()]
    except Exception as e:
        logger.error(f"Advanced search failed: {e}")
        return {"results": [], "total": 0, "page": page, "limit": limit}

    return {"results": results, "total": total, "page": page, "limit": limit}


async def _distinct_values(session, column, *criteria) -> List[str]:
    stmt = select(column).where(column.isnot(None), *criteria).distinct().order_by(column)
    result = await session.execute(stmt)
    return [v for v in result.scalars().all() if v]


async def get_filter_options(gateway: Gateway) -> Dict[str, List[str]]:
    """Distinct values present for each choice filter, alphabetically."""
    active = CompanyModel.status == CompanyStatus.ACTIVE.value
    try:
        async with gateway.session() as session:
            sectors = await _distinct_values(session, CompanyModel.sector, active)
            revenue_ranges = await _distinct_values(session, CompanyModel.annual_revenue_range, active)
            employee_ranges = await _distinct_values(session, CompanyModel.employee_range, active)
            locations = await _distinct_values(
                session,
                CompanyAddress.state,
                CompanyAddress.company_id.in_(select(CompanyModel.id).where(active)),
            )
    except Exception as e:
        logger.error(f"Failed to load filter options: {e}")
        return {"sectors": [], "revenue_ranges": [], "employee_ranges": [], "locations": []}

    return {
        "sectors": sectors,
        "revenue_ranges": revenue_ranges,
        "employee_ranges": employee_ranges,
        "locations": locations,
    }
