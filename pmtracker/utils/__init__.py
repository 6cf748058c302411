"""
Utility package initialization and exports
"""

from .date_utils import (
    add_days,
    add_months,
    current_month_range,
    format_iso_date,
    is_iso_date,
    parse_iso_date,
    today_iso,
)

__all__ = [
    "add_days",
    "add_months",
    "current_month_range",
    "format_iso_date",
    "is_iso_date",
    "parse_iso_date",
    "today_iso",
]
