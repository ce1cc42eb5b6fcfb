"""Filter record for company advanced search."""

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Sentinel for "no constraint" on a choice field.
ALL = "all"

# sort key -> (ordering column, direction)
SORT_OPTIONS = {
    "name": ("name", "asc"),
    "total_revenue": ("revenue", "desc"),
    "revenue": ("revenue", "desc"),
    "net_profit": ("profit", "desc"),
    "profit": ("profit", "desc"),
    "market_cap": ("market_cap", "desc"),
    "founded_date": ("founded_date", "desc"),
}
DEFAULT_SORT = "name"


class SearchFilters(BaseModel):
    """Filters for advanced company search.

    ``"all"``, ``None`` and blank strings mean "no constraint". ``is_listed`` is
    tri-state: ``None`` leaves listing status open, ``False`` selects unlisted
    companies. A numeric bound of ``0`` is a real bound. Fields are populated by
    name or by their camelCase alias.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    search_query: Optional[str] = Field(None, alias="searchQuery", description="Free text matched against name, sector and CIN")
    sector: Optional[str] = Field(None, description="Exact sector or 'all'")
    company_type: Optional[str] = Field(None, alias="companyType", description="Exact company type or 'all'")
    is_listed: Optional[bool] = Field(None, alias="isListed", description="True, False or unset")
    revenue_range: Optional[str] = Field(None, alias="revenueRange", description="Annual revenue bucket or 'all'")
    employee_range: Optional[str] = Field(None, alias="employeeRange", description="Employee bucket or 'all'")
    location: Optional[str] = Field(None, description="Registered address state or 'all'")
    min_revenue: Optional[float] = Field(None, alias="minRevenue")
    max_revenue: Optional[float] = Field(None, alias="maxRevenue")
    min_profit: Optional[float] = Field(None, alias="minProfit")
    max_profit: Optional[float] = Field(None, alias="maxProfit")
    sort_by: str = Field(DEFAULT_SORT, alias="sortBy", description="name, total_revenue, net_profit, market_cap or founded_date")

    @field_validator("sector", "company_type", "revenue_range", "employee_range", "location", mode="before")
    @classmethod
    def _choice_sentinel(cls, v):
        if v is None:
            return None
        v = str(v).strip()
        if not v or v.lower() == ALL:
            return None
        return v

    @field_validator("search_query", mode="before")
    @classmethod
    def _strip_query(cls, v):
        if v is None:
            return None
        v = str(v).strip()
        return v or None

    @field_validator("is_listed", mode="before")
    @classmethod
    def _listed_sentinel(cls, v):
        if isinstance(v, str) and (not v.strip() or v.strip().lower() == ALL):
            return None
        return v

    @field_validator("min_revenue", "max_revenue", "min_profit", "max_profit", mode="before")
    @classmethod
    def _blank_bound(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("sort_by", mode="before")
    @classmethod
    def _default_sort(cls, v):
        if v is None or not str(v).strip():
            return DEFAULT_SORT
        return str(v).strip()

    @property
    def has_financial_bounds(self) -> bool:
        return any(
            b is not None for b in (self.min_revenue, self.max_revenue, self.min_profit, self.max_profit)
        )

    def resolved_sort(self) -> Tuple[str, str]:
        """Ordering column and direction; unknown keys sort by name."""
        return SORT_OPTIONS.get(self.sort_by, SORT_OPTIONS[DEFAULT_SORT])
