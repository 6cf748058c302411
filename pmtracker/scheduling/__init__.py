"""
Scheduling core for maintenance obligations.

Pure, stateless functions:
- recurrence: rule parsing and next-due arithmetic
- occurrences: bounded due-date generation inside a window
- reconciliation: ledger join and compliance classification
- compliance: report rows and summary
- calendar_feed: calendar events with stable UIDs
"""

from .calendar_feed import CalendarFeedEvent, build_feed_events, occurrence_uid
from .compliance import (
    ComplianceReport,
    ComplianceRow,
    ComplianceSummary,
    build_compliance_report,
)
from .obligation import MaintenanceObligation, build_asset_label, obligation_key
from .occurrences import (
    FAST_FORWARD_LIMIT,
    TOTAL_STEP_LIMIT,
    generate_due_dates,
    generate_occurrences,
)
from .reconciliation import (
    CompletionRecord,
    Occurrence,
    advance_next_due,
    build_ledger,
    classify_occurrence,
    derive_last_completed,
    reconcile_obligation,
    should_advance_next_due,
)
from .recurrence import (
    next_occurrence,
    parse_recurrence,
    parse_rule_lenient,
    parse_rule_strict,
)

__all__ = [
    "CalendarFeedEvent",
    "ComplianceReport",
    "ComplianceRow",
    "ComplianceSummary",
    "CompletionRecord",
    "FAST_FORWARD_LIMIT",
    "MaintenanceObligation",
    "Occurrence",
    "TOTAL_STEP_LIMIT",
    "advance_next_due",
    "build_asset_label",
    "build_compliance_report",
    "build_feed_events",
    "build_ledger",
    "classify_occurrence",
    "derive_last_completed",
    "generate_due_dates",
    "generate_occurrences",
    "next_occurrence",
    "obligation_key",
    "occurrence_uid",
    "parse_recurrence",
    "parse_rule_lenient",
    "parse_rule_strict",
    "reconcile_obligation",
    "should_advance_next_due",
]
