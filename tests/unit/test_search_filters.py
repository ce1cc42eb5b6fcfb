"""
Unit tests for search filter sentinels and query construction.
"""
import pytest
from sqlalchemy.dialects import sqlite

from src.search.filters import SearchFilters
from src.search.service import build_search_query


def _sql(filters: SearchFilters) -> str:
    return str(build_search_query(filters).compile(dialect=sqlite.dialect()))


def _where(filters: SearchFilters) -> str:
    return str(build_search_query(filters).whereclause.compile(dialect=sqlite.dialect()))


class TestSearchFilters:

    def test_sentinels_mean_no_constraint(self):
        filters = SearchFilters(
            search_query="   ",
            sector="all",
            company_type="",
            is_listed="all",
            revenue_range="ALL",
            employee_range=None,
            location=" ",
            min_revenue="",
        )
        assert filters.search_query is None
        assert filters.sector is None
        assert filters.company_type is None
        assert filters.is_listed is None
        assert filters.revenue_range is None
        assert filters.employee_range is None
        assert filters.location is None
        assert filters.min_revenue is None
        assert not filters.has_financial_bounds

    def test_camel_case_aliases(self):
        filters = SearchFilters.model_validate({
            "searchQuery": "tech",
            "companyType": "PUBLIC",
            "isListed": True,
            "revenueRange": "100Cr+",
            "employeeRange": "1000+",
            "minRevenue": 10,
            "maxProfit": 5,
            "sortBy": "market_cap",
        })
        assert filters.search_query == "tech"
        assert filters.company_type == "PUBLIC"
        assert filters.is_listed is True
        assert filters.revenue_range == "100Cr+"
        assert filters.employee_range == "1000+"
        assert filters.min_revenue == 10
        assert filters.max_profit == 5
        assert filters.sort_by == "market_cap"

    def test_field_names_still_populate(self):
        filters = SearchFilters(search_query="tech", sort_by="revenue")
        assert filters.search_query == "tech"
        assert filters.resolved_sort() == ("revenue", "desc")

    def test_false_and_zero_are_real_values(self):
        filters = SearchFilters(is_listed=False, min_profit=0)
        assert filters.is_listed is False
        assert filters.min_profit == 0
        assert filters.has_financial_bounds

    def test_sort_resolution(self):
        assert SearchFilters().resolved_sort() == ("name", "asc")
        assert SearchFilters(sort_by="market_cap").resolved_sort() == ("market_cap", "desc")
        assert SearchFilters(sort_by="total_revenue").resolved_sort() == ("revenue", "desc")
        assert SearchFilters(sort_by="profit").resolved_sort() == ("profit", "desc")
        assert SearchFilters(sort_by="popularity").resolved_sort() == ("name", "asc")
        assert SearchFilters(sort_by="").sort_by == "name"


class TestBuildSearchQuery:

    def test_unset_filters_only_constrain_status(self):
        assert _where(SearchFilters()) == "companies.status = ?"
        sql = _sql(SearchFilters())
        assert "JOIN" not in sql
        assert "ORDER BY companies.name ASC, companies.id ASC" in sql

    def test_text_query_matches_name_sector_and_cin(self):
        where = _where(SearchFilters(search_query="Tech"))
        assert "lower(companies.name_lowercase) LIKE lower(?)" in where
        assert "lower(companies.sector) LIKE lower(?)" in where
        assert "lower(companies.cin) LIKE lower(?)" in where

    def test_listing_status_false_is_applied(self):
        assert "companies.is_listed" in _where(SearchFilters(is_listed=False))
        assert "companies.is_listed" not in _where(SearchFilters(is_listed=None))

    def test_financial_bound_joins_statements(self):
        sql = _sql(SearchFilters(min_revenue=0))
        assert "JOIN" in sql
        assert "financial_statements.total_revenue >=" in sql
        assert "LEFT OUTER JOIN" not in sql

    def test_location_joins_addresses(self):
        sql = _sql(SearchFilters(location="Karnataka"))
        assert "company_addresses.state" in sql
        assert "JOIN" in sql
        assert "SELECT DISTINCT company_addresses.company_id" in sql

    def test_location_and_financials_compose(self):
        sql = _sql(SearchFilters(location="Karnataka", max_profit=100))
        assert "company_addresses.state" in sql
        assert "financial_statements.net_profit <=" in sql

    def test_revenue_sort_without_bounds_uses_outer_join(self):
        sql = _sql(SearchFilters(sort_by="revenue"))
        assert "LEFT OUTER JOIN" in sql
        assert "DESC" in sql

    @pytest.mark.parametrize("sort_by,fragment", [
        ("market_cap", "companies.market_cap DESC"),
        ("founded_date", "companies.founded_date DESC"),
        ("unknown", "companies.name ASC"),
    ])
    def test_sort_columns(self, sort_by, fragment):
        assert fragment in _sql(SearchFilters(sort_by=sort_by))
