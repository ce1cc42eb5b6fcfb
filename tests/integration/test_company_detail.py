"""
Integration tests for the company detail composite.
"""
from datetime import datetime

import pytest

from src.activity.service import get_user_activity_logs
from src.companies.database import (
    CompanyNews,
    CompanyRelationship,
    FundingInvestor,
    FundingRound,
    Investor,
    KeyOfficial,
)
from src.companies.service import SOURCES, get_company, get_company_detail, set_company_logo
from src.core.errors import NotFoundError


@pytest.fixture
async def group(gateway, company_factory):
    """A holding company with one subsidiary, news, officials and a funded round."""
    holding = await company_factory(name="Holding Co", state="Maharashtra")
    subsidiary = await company_factory(name="Sub Co")

    async with gateway.session() as session:
        session.add(CompanyRelationship(
            parent_company_id=holding, subsidiary_company_id=subsidiary, ownership_percent=76,
        ))
        session.add(KeyOfficial(company_id=holding, name="R. Iyer", designation="Director"))
        session.add(CompanyNews(company_id=holding, title="Older", created_at=datetime(2026, 1, 1)))
        session.add(CompanyNews(company_id=holding, title="Newer", created_at=datetime(2026, 3, 1)))

        fund = Investor(name="Seed Fund", investor_type="VC")
        session.add(fund)
        funding_round = FundingRound(company_id=holding, round_type="SERIES_A", amount=1000)
        session.add(funding_round)
        await session.flush()
        session.add(FundingInvestor(
            funding_round_id=funding_round.id, investor_id=fund.id, amount_invested=400, is_lead=True,
        ))

    return holding, subsidiary


class TestCompanyDetail:

    async def test_composite_contains_every_collection(self, gateway, group):
        holding, _ = group
        detail = await get_company_detail(gateway, holding)

        assert detail["name"] == "Holding Co"
        assert detail["_failed_sources"] == []
        for key in SOURCES:
            assert isinstance(detail[key], list)
        assert detail["addresses"] == detail["company_addresses"]
        assert detail["addresses"][0]["state"] == "Maharashtra"
        assert [o["name"] for o in detail["key_officials"]] == ["R. Iyer"]
        assert [n["title"] for n in detail["company_news"]] == ["Newer", "Older"]

    async def test_relationships_are_oriented_to_viewed_company(self, gateway, group):
        holding, subsidiary = group

        parent_view = await get_company_detail(gateway, holding)
        (rel,) = parent_view["company_relationships"]
        assert rel["relationship_type"] == "PARENT_COMPANY"
        assert rel["related_company_id"] == subsidiary
        assert rel["related_company_name"] == "Sub Co"

        child_view = await get_company_detail(gateway, subsidiary)
        (rel,) = child_view["company_relationships"]
        assert rel["relationship_type"] == "SUBSIDIARY_COMPANY"
        assert rel["related_company_id"] == holding
        assert rel["related_company_name"] == "Holding Co"

    async def test_funding_investors_are_flattened(self, gateway, group):
        holding, _ = group
        detail = await get_company_detail(gateway, holding)
        (funding_round,) = detail["funding_rounds"]
        (investor,) = funding_round["investors"]
        assert investor["name"] == "Seed Fund"
        assert investor["investor_type"] == "VC"
        assert investor["amount_invested"] == 400
        assert investor["is_lead"] is True

    async def test_failed_source_degrades_to_empty(self, gateway, group, monkeypatch):
        holding, _ = group

        async def failing(gateway, company_id):
            raise RuntimeError("news backend down")

        monkeypatch.setitem(SOURCES, "company_news", failing)
        detail = await get_company_detail(gateway, holding)
        assert detail["company_news"] == []
        assert detail["_failed_sources"] == ["company_news"]
        assert [o["name"] for o in detail["key_officials"]] == ["R. Iyer"]

    async def test_strict_mode_raises(self, gateway, group, monkeypatch):
        holding, _ = group

        async def failing(gateway, company_id):
            raise RuntimeError("news backend down")

        monkeypatch.setitem(SOURCES, "company_news", failing)
        with pytest.raises(RuntimeError):
            await get_company_detail(gateway, holding, strict=True)

    async def test_unknown_company(self, gateway):
        with pytest.raises(NotFoundError):
            await get_company_detail(gateway, 404)

    async def test_view_is_logged_for_user(self, gateway, group):
        holding, _ = group
        await get_company_detail(gateway, holding, user_id="user-1", session_id="s-1")
        await get_company_detail(gateway, holding)

        logs = await get_user_activity_logs(gateway, "user-1")
        assert len(logs) == 1
        assert logs[0]["activity_type"] == "VIEW_PROFILE"
        assert logs[0]["company_id"] == holding
        assert logs[0]["company"]["name"] == "Holding Co"


class TestCompanyLogo:

    async def test_set_logo(self, gateway, company_factory):
        company_id = await company_factory(name="Acme")
        summary = await set_company_logo(gateway, company_id, "http://intel.test/logo.png")
        assert summary["logo_url"] == "http://intel.test/logo.png"
        assert (await get_company(gateway, company_id))["logo_url"] == "http://intel.test/logo.png"

    async def test_set_logo_unknown_company(self, gateway):
        with pytest.raises(NotFoundError):
            await set_company_logo(gateway, 404, "x")
