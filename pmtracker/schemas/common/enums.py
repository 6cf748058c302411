# --- File: pmtracker/schemas/common/enums.py ---
"""
All enumeration types used across the application.

These enums represent the core scheduling concepts of the maintenance
tracker (recurrence rules, compliance classification, obligation sources).
"""

from enum import Enum

__all__ = [
    "RecurrenceRule",
    "ComplianceStatus",
    "ObligationSourceType",
]


class RecurrenceRule(str, Enum):
    """
    Recurrence interval of a maintenance obligation.

    Values are the canonical tokens accepted by the API and stored on
    preventative maintenance records.
    """

    WEEKLY = "weekly"
    BI_WEEKLY = "bi-weekly"
    MONTHLY = "monthly"
    BI_MONTHLY = "bi-monthly"
    QUARTERLY = "quarterly"
    SEMI_ANNUAL = "every-6-months"
    ANNUAL = "yearly"
    BI_ANNUAL = "bi-yearly"


class ComplianceStatus(str, Enum):
    """Compliance classification of one occurrence."""

    SCHEDULED_FUTURE = "scheduled"
    COMPLETED_ON_TIME = "completed-on-time"
    COMPLETED_LATE = "completed-late"
    MISSED = "missed"


class ObligationSourceType(str, Enum):
    """Where a maintenance obligation comes from."""

    PM = "pm"
    CALIBRATION = "calibration"
