"""Public service interface for the Companies module.

``get_company_detail`` assembles the company page: the base record plus ten
per-company collections read concurrently, one session per read.
"""
import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional

from sqlalchemy import or_, select
from sqlalchemy.orm import selectinload

from src.access.rbac import AccessLevel, get_accessible_sections, has_section_access
from src.activity.service import log_activity_safe
from src.companies.database import (
    CompanyAddress,
    CompanyContact,
    CompanyInvestment,
    CompanyModel,
    CompanyNews,
    CompanyRelationship,
    FinancialStatement,
    FundingInvestor,
    FundingRound,
    KeyOfficial,
    LegalProceeding,
    RegulatoryFiling,
)
from src.core.errors import NotFoundError
from src.core.gateway import Gateway
from src.core.models import ActivityType, RelationshipType

logger = logging.getLogger(__name__)

UNKNOWN_COMPANY = "Unknown Company"

# Composite collections gated behind each section above the free tier.
SECTION_FIELDS: Dict[AccessLevel, List[str]] = {
    AccessLevel.KEY_OFFICIALS: ["key_officials"],
    AccessLevel.FINANCIAL_INFO: ["financial_statements"],
    AccessLevel.FUNDING_INVESTMENTS: ["funding_rounds", "company_investments"],
    AccessLevel.REGULATORY_LEGAL: ["regulatory_filings", "legal_proceedings"],
    AccessLevel.NEWS_RELATIONSHIPS: ["company_news", "company_relationships"],
}


# ──── Pure helpers ────

def label_relationship(row: Dict[str, Any], company_id: int) -> Dict[str, Any]:
    """Orient a parent/subsidiary row around the viewed company."""
    related_id = None
    related_name = UNKNOWN_COMPANY
    relationship_type = row.get("relationship_type")

    if row.get("parent_company_id") == company_id:
        related_id = row.get("subsidiary_company_id")
        related_name = (row.get("subsidiary_company") or {}).get("name") or UNKNOWN_COMPANY
        relationship_type = RelationshipType.PARENT_COMPANY.value
    elif row.get("subsidiary_company_id") == company_id:
        related_id = row.get("parent_company_id")
        related_name = (row.get("parent_company") or {}).get("name") or UNKNOWN_COMPANY
        relationship_type = RelationshipType.SUBSIDIARY_COMPANY.value

    return {
        **row,
        "related_company_id": related_id,
        "related_company_name": related_name,
        "relationship_type": relationship_type,
    }


def flatten_funding_round(row: Dict[str, Any]) -> Dict[str, Any]:
    """Add a flat ``investors`` list built from the round's link rows."""
    investors = []
    for link in row.get("funding_investors") or []:
        investor = link.get("investors") or {}
        investors.append(
            {
                "id": investor.get("id", link.get("investor_id")),
                "name": investor.get("name"),
                "investor_type": investor.get("investor_type"),
                "description": investor.get("description"),
                "amount_invested": link.get("amount_invested"),
                "is_lead": link.get("is_lead", False),
            }
        )
    return {**row, "investors": investors}


def _newest_first(rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return sorted(rows, key=lambda r: r.get("created_at") or "", reverse=True)


def filter_sections(composite: Dict[str, Any], role) -> Dict[str, Any]:
    """Drop the collections a role may not see and attach its section list."""
    visible = dict(composite)
    for level, fields in SECTION_FIELDS.items():
        if not has_section_access(role, level):
            for field in fields:
                visible.pop(field, None)
    visible["accessible_sections"] = [level.value for level in get_accessible_sections(role)]
    return visible


# ──── Source readers ────

async def _read_rows(gateway: Gateway, model, company_id: int) -> List[Dict[str, Any]]:
    async with gateway.session() as session:
        result = await session.execute(select(model).where(model.company_id == company_id))
        return [row.to_dict() for row in result.scalars().all()]


async def _read_funding_rounds(gateway: Gateway, company_id: int) -> List[Dict[str, Any]]:
    stmt = (
        select(FundingRound)
        .where(FundingRound.company_id == company_id)
        .options(selectinload(FundingRound.funding_investors).selectinload(FundingInvestor.investor))
    )
    async with gateway.session() as session:
        result = await session.execute(stmt)
        rounds = []
        for funding_round in result.scalars().all():
            data = funding_round.to_dict()
            data["funding_investors"] = [
                {
                    **link.to_dict(),
                    "investors": {
                        "id": link.investor.id,
                        "name": link.investor.name,
                        "investor_type": link.investor.investor_type,
                        "description": link.investor.description,
                    } if link.investor is not None else None,
                }
                for link in funding_round.funding_investors
            ]
            rounds.append(data)
        return rounds


async def _read_relationships(gateway: Gateway, company_id: int) -> List[Dict[str, Any]]:
    stmt = (
        select(CompanyRelationship)
        .where(
            or_(
                CompanyRelationship.parent_company_id == company_id,
                CompanyRelationship.subsidiary_company_id == company_id,
            )
        )
        .options(
            selectinload(CompanyRelationship.parent_company),
            selectinload(CompanyRelationship.subsidiary_company),
        )
    )
    async with gateway.session() as session:
        result = await session.execute(stmt)
        rows = []
        for rel in result.scalars().all():
            data = rel.to_dict()
            data["parent_company"] = {"name": rel.parent_company.name} if rel.parent_company else None
            data["subsidiary_company"] = {"name": rel.subsidiary_company.name} if rel.subsidiary_company else None
            rows.append(data)
        return rows


def _rows(model) -> Callable[[Gateway, int], Awaitable[List[Dict[str, Any]]]]:
    async def read(gateway: Gateway, company_id: int):
        return await _read_rows(gateway, model, company_id)
    return read


# composite key -> reader
SOURCES: Dict[str, Callable[[Gateway, int], Awaitable[List[Dict[str, Any]]]]] = {
    "company_addresses": _rows(CompanyAddress),
    "company_contacts": _rows(CompanyContact),
    "key_officials": _rows(KeyOfficial),
    "financial_statements": _rows(FinancialStatement),
    "funding_rounds": _read_funding_rounds,
    "company_investments": _rows(CompanyInvestment),
    "regulatory_filings": _rows(RegulatoryFiling),
    "legal_proceedings": _rows(LegalProceeding),
    "company_news": _rows(CompanyNews),
    "company_relationships": _read_relationships,
}


async def get_company(gateway: Gateway, company_id: int) -> Dict[str, Any]:
    async with gateway.session() as session:
        company = await session.get(CompanyModel, company_id)
        if company is None:
            raise NotFoundError(f"Company {company_id} not found")
        return company.to_dict()


async def get_company_detail(
    gateway: Gateway,
    company_id: int,
    user_id: Optional[str] = None,
    strict: bool = False,
    session_id: Optional[str] = None,
    user_agent: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Load the full company composite.

    Args:
        gateway: Process gateway
        company_id: Company to load
        user_id: When given, a VIEW_PROFILE activity is logged for this user
        strict: Raise on the first failing collection instead of substituting
            an empty one

    Returns:
        Base company fields plus every collection, newest first. Names of
        collections that failed to load are listed under ``_failed_sources``.
    """
    composite = await get_company(gateway, company_id)

    names = list(SOURCES)
    outcomes = await asyncio.gather(
        *(SOURCES[name](gateway, company_id) for name in names),
        return_exceptions=True,
    )

    collections: Dict[str, List[Dict[str, Any]]] = {}
    failed = []
    for name, outcome in zip(names, outcomes):
        if isinstance(outcome, BaseException):
            if strict or not isinstance(outcome, Exception):
                raise outcome
            logger.error(f"Failed to load {name} for company {company_id}: {outcome}")
            failed.append(name)
            outcome = []
        collections[name] = outcome

    relationships = [label_relationship(r, company_id) for r in collections["company_relationships"]]
    funding_rounds = [flatten_funding_round(r) for r in collections["funding_rounds"]]
    addresses = _newest_first(collections["company_addresses"])
    contacts = _newest_first(collections["company_contacts"])

    composite.update(
        {
            "addresses": addresses,
            "contacts": contacts,
            "company_addresses": addresses,
            "company_contacts": contacts,
            "key_officials": _newest_first(collections["key_officials"]),
            "financial_statements": _newest_first(collections["financial_statements"]),
            "funding_rounds": _newest_first(funding_rounds),
            "company_investments": _newest_first(collections["company_investments"]),
            "regulatory_filings": _newest_first(collections["regulatory_filings"]),
            "legal_proceedings": _newest_first(collections["legal_proceedings"]),
            "company_news": _newest_first(collections["company_news"]),
            "company_relationships": _newest_first(relationships),
            "_failed_sources": failed,
        }
    )

    if user_id:
        await log_activity_safe(
            gateway,
            user_id,
            ActivityType.VIEW_PROFILE.value,
            company_id=company_id,
            resource_type="company",
            resource_id=str(company_id),
            session_id=session_id,
            user_agent=user_agent,
        )
    return composite


async def set_company_logo(gateway: Gateway, company_id: int, logo_url: str) -> Dict[str, Any]:
    async with gateway.session() as session:
        company = await session.get(CompanyModel, company_id)
        if company is None:
            raise NotFoundError(f"Company {company_id} not found")
        company.logo_url = logo_url
        return company.summary()
