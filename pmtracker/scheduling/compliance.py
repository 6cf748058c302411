# pmtracker/scheduling/compliance.py
"""
Compliance aggregation.

Reconciles many obligations across a window, flattens the occurrences
into report rows, orders them deterministically and counts them by status.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Iterable, List, Mapping, Optional

from pmtracker.schemas.common.enums import ComplianceStatus, ObligationSourceType
from pmtracker.scheduling.obligation import MaintenanceObligation
from pmtracker.scheduling.reconciliation import CompletionRecord, LedgerKey, reconcile_obligation

__all__ = [
    "ComplianceReport",
    "ComplianceRow",
    "ComplianceSummary",
    "build_compliance_report",
    "row_sort_key",
    "summarize",
]


@dataclass(frozen=True)
class ComplianceRow:
    """One occurrence of one obligation, ready for reporting."""

    source_type: ObligationSourceType
    obligation_id: int
    obligation_key: str
    due_date: str
    status: ComplianceStatus
    location_id: int
    location_name: str
    asset_label: str
    asset_id: Optional[int] = None
    title: Optional[str] = None
    recurrence: Optional[str] = None
    completed_at: Optional[str] = None
    notes: Optional[str] = None

    @property
    def happened(self) -> bool:
        return self.completed_at is not None


@dataclass
class ComplianceSummary:
    """Occurrence counts by status; ``total`` is the sum of the others."""

    total: int = 0
    completed_on_time: int = 0
    completed_late: int = 0
    missed: int = 0
    scheduled: int = 0

    def add(self, status: ComplianceStatus) -> None:
        self.total += 1
        if status == ComplianceStatus.COMPLETED_ON_TIME:
            self.completed_on_time += 1
        elif status == ComplianceStatus.COMPLETED_LATE:
            self.completed_late += 1
        elif status == ComplianceStatus.MISSED:
            self.missed += 1
        else:
            self.scheduled += 1

    def to_dict(self) -> Dict[str, int]:
        return {
            "total": self.total,
            "completed_on_time": self.completed_on_time,
            "completed_late": self.completed_late,
            "missed": self.missed,
            "scheduled": self.scheduled,
        }


@dataclass
class ComplianceReport:
    """Sorted rows plus their status summary."""

    rows: List[ComplianceRow] = field(default_factory=list)
    summary: ComplianceSummary = field(default_factory=ComplianceSummary)


def row_sort_key(row: ComplianceRow) -> Any:
    """(due date, location name, source type, asset label), all lexical."""
    return (row.due_date, row.location_name, row.source_type.value, row.asset_label)


def summarize(rows: Iterable[ComplianceRow]) -> ComplianceSummary:
    summary = ComplianceSummary()
    for row in rows:
        summary.add(row.status)
    return summary


def build_compliance_report(
    obligations: Iterable[MaintenanceObligation],
    window_start: date,
    window_end: date,
    ledger: Mapping[LedgerKey, CompletionRecord],
    today: Optional[date] = None,
) -> ComplianceReport:
    """
    Build the compliance report for a set of obligations.

    Args:
        obligations: Obligations to report on (any mix of sources/locations)
        window_start: Inclusive window start
        window_end: Inclusive window end
        ledger: Completion records keyed by ``(obligation key, due date)``
        today: Reference date for missed / scheduled classification

    Returns:
        ComplianceReport with rows sorted by
        ``(due_date, location_name, source_type, asset_label)``
    """
    rows: List[ComplianceRow] = []

    for obligation in obligations:
        recurrence = obligation.rule.value if obligation.rule else None
        for occurrence in reconcile_obligation(obligation, window_start, window_end, ledger, today):
            rows.append(
                ComplianceRow(
                    source_type=obligation.source_type,
                    obligation_id=obligation.id,
                    obligation_key=obligation.key,
                    due_date=occurrence.due_date,
                    status=occurrence.status,
                    location_id=obligation.location_id,
                    location_name=obligation.location_name,
                    asset_label=obligation.asset_label,
                    asset_id=obligation.asset_id,
                    title=obligation.title,
                    recurrence=recurrence,
                    completed_at=occurrence.completed_at,
                    notes=occurrence.notes,
                )
            )

    rows.sort(key=row_sort_key)
    return ComplianceReport(rows=rows, summary=summarize(rows))
