# --- File: pmtracker/schemas/compliance_report.py ---
"""
Compliance report response schemas.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from pmtracker.schemas.common.base import ApiSchema
from pmtracker.schemas.common.enums import ComplianceStatus, ObligationSourceType

__all__ = [
    "ReportRange",
    "ComplianceSummaryResponse",
    "ComplianceRowResponse",
    "ComplianceReportResponse",
]


class ReportRange(ApiSchema):
    """Resolved reporting window."""

    start: str
    end: str
    location_id: Optional[int] = None


class ComplianceSummaryResponse(ApiSchema):
    total: int = 0
    completed_on_time: int = 0
    completed_late: int = 0
    missed: int = 0
    scheduled: int = 0


class ComplianceRowResponse(ApiSchema):
    """One occurrence in the report."""

    source_type: ObligationSourceType
    obligation_id: int
    due_date: str
    status: ComplianceStatus
    happened: bool
    location_id: int
    location_name: str
    asset_label: str
    asset_id: Optional[int] = None
    title: Optional[str] = None
    recurrence: Optional[str] = None
    completed_at: Optional[str] = None
    notes: Optional[str] = None


class ComplianceReportResponse(ApiSchema):
    range: ReportRange
    summary: ComplianceSummaryResponse
    rows: List[ComplianceRowResponse] = Field(default_factory=list)
