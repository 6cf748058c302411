# pmtracker/utils/date_utils.py
"""
Calendar date helpers used by the scheduling engine.

Notes:
- Every date handled here is a naive calendar date; there is no
  time-of-day or timezone handling anywhere in the scheduler.
- Parsing never raises: malformed input yields ``None`` so that one bad
  stored value degrades a single obligation instead of a whole report.
"""

from __future__ import annotations

import logging
import re
from calendar import monthrange
from datetime import date, datetime, timedelta
from typing import Any, Optional, Tuple

from dateutil.relativedelta import relativedelta

logger = logging.getLogger(__name__)

ISO_DATE_FORMAT = "%Y-%m-%d"
ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

__all__ = [
    "ISO_DATE_FORMAT",
    "ISO_DATE_PATTERN",
    "parse_iso_date",
    "format_iso_date",
    "is_iso_date",
    "add_days",
    "add_months",
    "today_iso",
    "current_month_range",
]


def parse_iso_date(value: Any) -> Optional[date]:
    """
    Parse a strict ``YYYY-MM-DD`` string.

    Anything else (other separators, missing zero padding, trailing time
    components, impossible calendar dates such as ``2024-02-30``, non-string
    input) returns ``None``.
    """
    if not isinstance(value, str) or not ISO_DATE_PATTERN.match(value):
        return None

    try:
        return datetime.strptime(value, ISO_DATE_FORMAT).date()
    except ValueError:
        logger.debug(f"Rejected invalid calendar date '{value}'")
        return None


def format_iso_date(d: date) -> str:
    """Format a date as zero-padded ``YYYY-MM-DD``."""
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def is_iso_date(value: Any) -> bool:
    """Return True if ``value`` is a valid strict ISO calendar date string."""
    return parse_iso_date(value) is not None


def add_days(d: date, days: int) -> date:
    """Return ``d`` shifted by ``days`` calendar days."""
    return d + timedelta(days=days)


def add_months(d: date, months: int) -> date:
    """
    Return ``d`` shifted by ``months`` calendar months.

    The day of month is preserved where it exists in the target month and
    clamped to that month's last day otherwise:

        2024-01-31 + 1 -> 2024-02-29
        2023-01-31 + 1 -> 2023-02-28
        2024-03-31 + 1 -> 2024-04-30
    """
    return d + relativedelta(months=months)


def today_iso(today: Optional[date] = None) -> str:
    """Return today's date (or the supplied one) as an ISO string."""
    return format_iso_date(today or date.today())


def current_month_range(today: Optional[date] = None) -> Tuple[date, date]:
    """Return (first_day, last_day) of the month containing ``today``."""
    reference = today or date.today()
    last_day = monthrange(reference.year, reference.month)[1]
    return (
        date(reference.year, reference.month, 1),
        date(reference.year, reference.month, last_day),
    )
