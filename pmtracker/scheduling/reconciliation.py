# pmtracker/scheduling/reconciliation.py
"""
Completion ledger reconciliation.

Joins generated due dates against the sparse set of recorded completions
and classifies each occurrence. Ledger lookups are exact string matches
on ``(obligation key, ISO due date)``; ISO dates compare lexically in
chronological order, so no date parsing is needed for classification.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from pmtracker.schemas.common.enums import ComplianceStatus, RecurrenceRule
from pmtracker.scheduling.obligation import MaintenanceObligation
from pmtracker.scheduling.occurrences import generate_due_dates
from pmtracker.scheduling.recurrence import next_occurrence
from pmtracker.utils.date_utils import format_iso_date, parse_iso_date, today_iso

__all__ = [
    "CompletionRecord",
    "LedgerKey",
    "Occurrence",
    "advance_next_due",
    "build_ledger",
    "classify_occurrence",
    "derive_last_completed",
    "reconcile_obligation",
    "should_advance_next_due",
]

LedgerKey = Tuple[str, str]


@dataclass(frozen=True)
class CompletionRecord:
    """One ledger entry: the completion of an obligation for one due date."""

    obligation_key: str
    due_date: str
    completed_at: Optional[str] = None
    notes: Optional[str] = None

    @property
    def ledger_key(self) -> LedgerKey:
        return (self.obligation_key, self.due_date)


@dataclass(frozen=True)
class Occurrence:
    """A computed due-date instance of an obligation within a window."""

    obligation_key: str
    due_date: str
    status: ComplianceStatus
    completed_at: Optional[str] = None
    notes: Optional[str] = None

    @property
    def happened(self) -> bool:
        return self.completed_at is not None


def build_ledger(records: Iterable[CompletionRecord]) -> Dict[LedgerKey, CompletionRecord]:
    """Index completion records by ``(obligation key, due date)``."""
    return {record.ledger_key: record for record in records}


def classify_occurrence(
    due_date: str,
    completed_at: Optional[str],
    today: str,
) -> ComplianceStatus:
    """
    Classify one occurrence.

    Args:
        due_date: ISO due date
        completed_at: ISO completion date, or None when not completed
        today: ISO date of "today"

    Returns:
        COMPLETED_ON_TIME / COMPLETED_LATE when completed (compared against
        the due date, never against today), otherwise MISSED when the due
        date is past and SCHEDULED_FUTURE when it is today or later.
    """
    if completed_at:
        if completed_at <= due_date:
            return ComplianceStatus.COMPLETED_ON_TIME
        return ComplianceStatus.COMPLETED_LATE

    if due_date < today:
        return ComplianceStatus.MISSED
    return ComplianceStatus.SCHEDULED_FUTURE


def reconcile_obligation(
    obligation: MaintenanceObligation,
    window_start: date,
    window_end: date,
    ledger: Mapping[LedgerKey, CompletionRecord],
    today: Optional[date] = None,
) -> List[Occurrence]:
    """
    Reconcile one obligation's occurrences in a window against the ledger.

    Args:
        obligation: Obligation to reconcile
        window_start: Inclusive window start
        window_end: Inclusive window end
        ledger: Completion records keyed by ``(obligation key, due date)``
        today: Reference date for missed / scheduled classification

    Returns:
        Occurrences in ascending due-date order
    """
    today_str = today_iso(today)
    occurrences: List[Occurrence] = []

    for due_date in generate_due_dates(obligation, window_start, window_end):
        record = ledger.get((obligation.key, due_date))
        completed_at = record.completed_at if record and record.completed_at else None
        occurrences.append(
            Occurrence(
                obligation_key=obligation.key,
                due_date=due_date,
                status=classify_occurrence(due_date, completed_at, today_str),
                completed_at=completed_at,
                notes=record.notes if record else None,
            )
        )

    return occurrences


def derive_last_completed(records: Iterable[CompletionRecord]) -> Optional[str]:
    """
    Return the latest completion date across records.

    This is the maximum ``completed_at``, not the most recently logged
    one, so an out-of-order historical completion never regresses it.
    """
    completed = [record.completed_at for record in records if record.completed_at]
    return max(completed) if completed else None


def should_advance_next_due(current_next_due: Optional[str], due_date: str) -> bool:
    """
    Decide whether completing ``due_date`` may move the next-due forward.

    Only when the stored next-due is absent (or unusable) or not ahead of
    the completed due date; a schedule is never moved backward.
    """
    current = parse_iso_date(current_next_due)
    if current is None:
        return True
    completed_due = parse_iso_date(due_date)
    if completed_due is None:
        return False
    return current <= completed_due


def advance_next_due(
    current_next_due: Optional[str],
    due_date: str,
    rule: Optional[RecurrenceRule],
) -> Optional[str]:
    """
    Compute the next-due value after completing ``due_date``.

    Returns:
        The advanced ISO next-due, or None when the stored value must be
        left untouched (no rule, bad due date, or guard not satisfied).
    """
    if rule is None:
        return None
    completed_due = parse_iso_date(due_date)
    if completed_due is None or not should_advance_next_due(current_next_due, due_date):
        return None
    return format_iso_date(next_occurrence(completed_due, rule))
