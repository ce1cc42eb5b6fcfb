"""
Companies Module - Company records and the detail-page composite.
"""

from src.companies.service import (
    filter_sections,
    flatten_funding_round,
    get_company,
    get_company_detail,
    label_relationship,
    set_company_logo,
)

__all__ = [
    "filter_sections",
    "flatten_funding_round",
    "get_company",
    "get_company_detail",
    "label_relationship",
    "set_company_logo",
]
