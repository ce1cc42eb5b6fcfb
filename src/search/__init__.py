"""
Search Module - Company typeahead and advanced filtered search.
"""

from src.search.debounce import Debouncer
from src.search.filters import SearchFilters
from src.search.service import advanced_search, autocomplete, build_search_query, get_filter_options

__all__ = [
    "Debouncer",
    "SearchFilters",
    "advanced_search",
    "autocomplete",
    "build_search_query",
    "get_filter_options",
]
