"""
Comparison Module - Side-by-side metrics for up to four companies.
"""

from src.comparison.service import MAX_COMPARE, compare_companies, export_comparison

__all__ = [
    "MAX_COMPARE",
    "compare_companies",
    "export_comparison",
]
