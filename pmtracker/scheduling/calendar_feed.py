# pmtracker/scheduling/calendar_feed.py
"""
Calendar feed events.

Turns compliance rows into all-day calendar events for ICS emission or an
external calendar sync. Event UIDs are derived from the obligation key and
due date only, so regenerating a feed for the same inputs reproduces the
same UIDs and a consumer can safely replace-and-resync.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional
from uuid import UUID, uuid5

from pmtracker.schemas.common.enums import ObligationSourceType
from pmtracker.scheduling.compliance import ComplianceRow

__all__ = ["CalendarFeedEvent", "FEED_UID_NAMESPACE", "build_feed_events", "occurrence_uid"]

FEED_UID_NAMESPACE = UUID("6f1c2b0e-6a53-5d0b-9a63-2f4f3c1d8e71")

_SOURCE_LABELS = {
    ObligationSourceType.PM: "PM",
    ObligationSourceType.CALIBRATION: "Calibration",
}


@dataclass(frozen=True)
class CalendarFeedEvent:
    uid: str
    date: str
    summary: str
    description: Optional[str] = None
    location: Optional[str] = None


def occurrence_uid(obligation_key: str, due_date: str) -> str:
    """Stable UID of one occurrence."""
    return str(uuid5(FEED_UID_NAMESPACE, f"{obligation_key}|{due_date}"))


def _summary(row: ComplianceRow) -> str:
    prefix = _SOURCE_LABELS[row.source_type]
    if row.title:
        return f"{prefix}: {row.title} ({row.asset_label})"
    return f"{prefix}: {row.asset_label}"


def _description(row: ComplianceRow) -> str:
    lines = [f"Status: {row.status.value}"]
    if row.recurrence:
        lines.append(f"Recurrence: {row.recurrence}")
    if row.completed_at:
        lines.append(f"Completed: {row.completed_at}")
    if row.notes:
        lines.append(f"Notes: {row.notes}")
    return "\n".join(lines)


def build_feed_events(rows: Iterable[ComplianceRow]) -> List[CalendarFeedEvent]:
    """Build one all-day event per compliance row, preserving row order."""
    return [
        CalendarFeedEvent(
            uid=occurrence_uid(row.obligation_key, row.due_date),
            date=row.due_date,
            summary=_summary(row),
            description=_description(row),
            location=row.location_name or None,
        )
        for row in rows
    ]
