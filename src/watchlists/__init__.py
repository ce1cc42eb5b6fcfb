"""
Watchlists Module - User-owned collections of tracked companies.
"""

from src.watchlists.service import (
    add_company_to_watchlist,
    create_watchlist,
    delete_watchlist,
    get_user_watchlists,
    get_watchlist,
    get_watchlist_stats,
    is_company_in_watchlists,
    remove_company_from_watchlist,
    update_company_notes,
    update_watchlist,
)

__all__ = [
    "add_company_to_watchlist",
    "create_watchlist",
    "delete_watchlist",
    "get_user_watchlists",
    "get_watchlist",
    "get_watchlist_stats",
    "is_company_in_watchlists",
    "remove_company_from_watchlist",
    "update_company_notes",
    "update_watchlist",
]
