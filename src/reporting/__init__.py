"""
Reporting Module - Role-filtered company exports.
"""

from src.reporting.export import build_export, export_company, export_filename

__all__ = [
    "build_export",
    "export_company",
    "export_filename",
]
