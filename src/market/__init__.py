"""
Market Module - Sector, size and funding aggregates across active companies.
"""

from src.market.filters import MarketFilters
from src.market.service import export_market_overview, get_market_overview

__all__ = [
    "MarketFilters",
    "export_market_overview",
    "get_market_overview",
]
