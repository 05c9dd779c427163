"""
Pipeline Package

Source-agnostic stages around the reports:
- tables: Tables context and input validation
- checks: Data quality notes (overlapping bands, unmatched orders)
- emit: Print and export report results
"""

from .tables import Tables, prepare_table, empty_table, normalize_header
from .checks import overlapping_freight_bands, unmatched_orders
from .emit import format_report, print_report, export_report, export_reports, EXPORT_FORMATS

__all__ = [
    "Tables",
    "prepare_table",
    "empty_table",
    "normalize_header",
    "overlapping_freight_bands",
    "unmatched_orders",
    "format_report",
    "print_report",
    "export_report",
    "export_reports",
    "EXPORT_FORMATS",
]
