"""Filter record and date windows for market analysis."""
from datetime import date
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

ALL = "all"

# size bucket -> inclusive (min, max) employee count
COMPANY_SIZES: Dict[str, Tuple[Optional[int], Optional[int]]] = {
    "startup": (None, 50),
    "small": (51, 200),
    "medium": (201, 1000),
    "large": (1001, None),
}

# time range -> months back from today; None reaches back to every record
TIME_RANGES: Dict[str, Optional[int]] = {
    "3months": 3,
    "6months": 6,
    "1year": 12,
    "2years": 24,
    "5years": 60,
    ALL: None,
}
DEFAULT_TIME_RANGE = "1year"


def months_before(today: date, months: int) -> date:
    """Same day ``months`` earlier, clamped to the end of a shorter month."""
    index = today.year * 12 + today.month - 1 - months
    year, month = divmod(index, 12)
    month += 1
    for day in (today.day, 30, 29, 28):
        try:
            return date(year, month, day)
        except ValueError:
            continue
    raise ValueError(f"Cannot step {months} months back from {today}")


def size_bucket(employee_count: Optional[int]) -> Optional[str]:
    if employee_count is None:
        return None
    for name, (low, high) in COMPANY_SIZES.items():
        if (low is None or employee_count >= low) and (high is None or employee_count <= high):
            return name
    return None


class MarketFilters(BaseModel):
    """Market analysis filters. ``"all"`` and blanks mean no constraint."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    sector: Optional[str] = None
    company_type: Optional[str] = Field(None, alias="companyType")
    company_size: Optional[str] = Field(None, alias="companySize")
    time_range: str = Field(DEFAULT_TIME_RANGE, alias="timeRange")

    @field_validator("sector", "company_type", "company_size", mode="before")
    @classmethod
    def _choice_sentinel(cls, v):
        if v is None:
            return None
        v = str(v).strip()
        if not v or v.lower() == ALL:
            return None
        return v

    @field_validator("company_size")
    @classmethod
    def _known_size(cls, v):
        # Unknown buckets leave company size open.
        if v is None or v.lower() not in COMPANY_SIZES:
            return None
        return v.lower()

    @field_validator("time_range", mode="before")
    @classmethod
    def _known_range(cls, v):
        v = str(v or "").strip()
        return v if v in TIME_RANGES else DEFAULT_TIME_RANGE

    def since(self, today: date) -> Optional[date]:
        """Earliest funding date inside the selected time range."""
        months = TIME_RANGES[self.time_range]
        return months_before(today, months) if months is not None else None
