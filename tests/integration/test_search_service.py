"""
Integration tests for company search against a SQLite database.
"""
import math
from unittest.mock import MagicMock, patch

import pytest

from src.activity.service import get_user_activity_logs
from src.companies.database import CompanyAddress
from src.search.filters import SearchFilters
from src.search.service import advanced_search, autocomplete, get_filter_options


@pytest.fixture
async def tech_universe(company_factory):
    """25 active listed companies matching 'tech' plus near misses."""
    for i in range(25):
        name = f"Tech Company {i:02d}" if i % 2 else f"Company {i:02d}"
        sector = "Technology" if i % 2 == 0 else "Manufacturing"
        await company_factory(name=name, sector=sector, is_listed=True, market_cap=(i + 1) * 1000)
    await company_factory(name="Unlisted Tech", is_listed=False, market_cap=999_999)
    await company_factory(name="Dormant Tech", is_listed=True, status="INACTIVE", market_cap=888_888)
    await company_factory(name="Bakery", sector="Food", is_listed=True, market_cap=777_777)


class TestAutocomplete:

    @pytest.mark.parametrize("query", ["", " ", "a", " b ", None])
    async def test_short_query_never_reaches_backend(self, query):
        gateway = MagicMock()
        assert await autocomplete(gateway, query) == []
        gateway.session.assert_not_called()

    async def test_matches_name_sector_and_cin(self, gateway, company_factory):
        await company_factory(name="Zeta Softworks", sector="Software")
        await company_factory(name="Alpha Mills", sector="Textiles", cin="U17SOFT2001")
        await company_factory(name="Beta Soft Drinks", sector="Beverages")
        await company_factory(name="Gamma Soft", sector="Software", status="INACTIVE")
        await company_factory(name="Delta Steel", sector="Metals")

        results = await autocomplete(gateway, "  SOFT ")
        assert [r["name"] for r in results] == ["Alpha Mills", "Beta Soft Drinks", "Zeta Softworks"]

    async def test_respects_limit(self, gateway, company_factory):
        for i in range(10):
            await company_factory(name=f"Acme {i}")
        assert len(await autocomplete(gateway, "acme")) == gateway.settings.autocomplete_limit
        assert len(await autocomplete(gateway, "acme", limit=3)) == 3

    async def test_backend_error_returns_empty(self, gateway):
        with patch.object(type(gateway), "session", side_effect=RuntimeError("db down")):
            assert await autocomplete(gateway, "acme") == []


class TestAdvancedSearch:

    async def test_listed_tech_sorted_by_market_cap(self, gateway, tech_universe):
        filters = SearchFilters(search_query="tech", sector="all", is_listed=True, sort_by="market_cap")

        page1 = await advanced_search(gateway, filters, page=1, page_size=20)
        assert page1["total"] == 25
        assert page1["page"] == 1
        assert page1["limit"] == 20
        assert len(page1["results"]) == 20
        caps = [r["market_cap"] for r in page1["results"]]
        assert caps == sorted(caps, reverse=True)
        assert caps[0] == 25_000

        page2 = await advanced_search(gateway, filters, page=2, page_size=20)
        assert len(page2["results"]) == 5
        assert page2["total"] == 25

    async def test_pages_concatenate_to_full_result(self, gateway, tech_universe):
        filters = SearchFilters(search_query="tech")
        full = await advanced_search(gateway, filters, page=1, page_size=100)
        total = full["total"]
        size = 7

        seen = []
        pages = 0
        while True:
            page = await advanced_search(gateway, filters, page=pages + 1, page_size=size)
            if not page["results"]:
                break
            pages += 1
            seen.extend(r["id"] for r in page["results"])

        assert pages == math.ceil(total / size)
        assert seen == [r["id"] for r in full["results"]]
        assert len(set(seen)) == total

    async def test_unset_filters_return_active_companies_by_name(self, gateway, tech_universe):
        result = await advanced_search(gateway, SearchFilters(), page_size=100)
        names = [r["name"] for r in result["results"]]
        assert result["total"] == 27
        assert "Dormant Tech" not in names
        assert names == sorted(names)

    @pytest.mark.parametrize("page_size", [0, -2, None])
    async def test_invalid_page_size_falls_back_to_default(self, gateway, tech_universe, page_size):
        default = gateway.settings.search_page_size
        result = await advanced_search(gateway, SearchFilters(), page=2, page_size=page_size)
        assert result["limit"] == default
        assert result["page"] == 2
        assert len(result["results"]) == min(default, 27 - default)
        assert result["total"] == 27

    async def test_page_size_is_capped(self, gateway, tech_universe):
        result = await advanced_search(gateway, SearchFilters(), page=-1, page_size=5000)
        assert result["limit"] == 100
        assert result["page"] == 1
        assert len(result["results"]) == 27

    async def test_unlisted_filter_is_distinct_from_unset(self, gateway, tech_universe):
        result = await advanced_search(gateway, SearchFilters(is_listed=False))
        assert [r["name"] for r in result["results"]] == ["Unlisted Tech"]

    async def test_financial_and_location_filters_compose(self, gateway, company_factory):
        match = await company_factory(name="Both", state="Karnataka", financials=[(500, 50), (900, 90)])
        await company_factory(name="Wrong State", state="Kerala", financials=[(900, 90)])
        await company_factory(name="Too Small", state="Karnataka", financials=[(10, 1)])
        await company_factory(name="No Financials", state="Karnataka")
        async with gateway.session() as session:
            session.add(CompanyAddress(company_id=match, address_type="BRANCH", state="Karnataka"))

        filters = SearchFilters(location="Karnataka", min_revenue=400)
        result = await advanced_search(gateway, filters)
        assert result["total"] == 1
        assert [r["name"] for r in result["results"]] == ["Both"]

    async def test_financial_bounds_apply_to_one_statement(self, gateway, company_factory):
        await company_factory(name="Split Years", financials=[(1000, -5), (10, 50)])
        await company_factory(name="Single Year", financials=[(1000, 50)])

        filters = SearchFilters(min_revenue=500, min_profit=20)
        result = await advanced_search(gateway, filters)
        assert [r["name"] for r in result["results"]] == ["Single Year"]

    async def test_zero_profit_bound_is_applied(self, gateway, company_factory):
        await company_factory(name="Loss Maker", financials=[(100, -10)])
        await company_factory(name="Profitable", financials=[(100, 10)])
        result = await advanced_search(gateway, SearchFilters(min_profit=0))
        assert [r["name"] for r in result["results"]] == ["Profitable"]

    async def test_sort_by_revenue(self, gateway, company_factory):
        await company_factory(name="Mid", financials=[(500, 1)])
        await company_factory(name="Top", financials=[(900, 1), (100, 1)])
        await company_factory(name="Low", financials=[(50, 1)])
        await company_factory(name="Unreported")

        result = await advanced_search(gateway, SearchFilters(sort_by="total_revenue"))
        assert [r["name"] for r in result["results"]] == ["Top", "Mid", "Low", "Unreported"]

    async def test_logs_search_for_known_user(self, gateway, company_factory):
        await company_factory(name="Acme Tech")
        await advanced_search(gateway, SearchFilters(search_query=" acme "), user_id="user-1")
        await advanced_search(gateway, SearchFilters(sector="Technology"), user_id="user-1")
        await advanced_search(gateway, SearchFilters(search_query="acme"))

        logs = await get_user_activity_logs(gateway, "user-1")
        assert len(logs) == 1
        assert logs[0]["activity_type"] == "SEARCH"
        assert logs[0]["search_query"] == "acme"

    async def test_logging_failure_does_not_fail_search(self, gateway, company_factory):
        await company_factory(name="Acme Tech")
        with patch("src.activity.service.log_activity", side_effect=RuntimeError("log down")):
            result = await advanced_search(gateway, SearchFilters(search_query="acme"), user_id="user-1")
        assert result["total"] == 1

    async def test_backend_error_returns_empty_page(self, gateway):
        with patch("src.search.service.build_search_query", side_effect=RuntimeError("boom")):
            result = await advanced_search(gateway, SearchFilters(), page=3, page_size=10)
        assert result == {"results": [], "total": 0, "page": 3, "limit": 10}


class TestFilterOptions:

    async def test_distinct_sorted_values_for_active_companies(self, gateway, company_factory):
        await company_factory(name="A", sector="Technology", annual_revenue_range="10-50 Cr",
                              employee_range="51-200", state="Maharashtra")
        await company_factory(name="B", sector="Healthcare", annual_revenue_range="1-10 Cr",
                              employee_range="11-50", state="Karnataka")
        await company_factory(name="C", sector="Technology", state="Karnataka")
        await company_factory(name="D", sector="Mining", status="INACTIVE", state="Goa")

        options = await get_filter_options(gateway)
        assert options["sectors"] == ["Healthcare", "Technology"]
        assert options["revenue_ranges"] == ["1-10 Cr", "10-50 Cr"]
        assert options["employee_ranges"] == ["11-50", "51-200"]
        assert options["locations"] == ["Karnataka", "Maharashtra"]

    async def test_failure_returns_empty_lists(self, gateway):
        with patch.object(type(gateway), "session", side_effect=RuntimeError("db down")):
            options = await get_filter_options(gateway)
        assert options == {"sectors": [], "revenue_ranges": [], "employee_ranges": [], "locations": []}
