"""
Pydantic schemas for request validation and response serialization.
"""

from pmtracker.schemas.asset import AssetCreate, AssetResponse, AssetUpdate
from pmtracker.schemas.calendar_feed import CalendarFeedEventResponse, CalendarFeedResponse
from pmtracker.schemas.completion import (
    CalibrationCompletionResult,
    CompletionCreate,
    CompletionRecordResponse,
    PmCompletionResult,
)
from pmtracker.schemas.compliance_report import (
    ComplianceReportResponse,
    ComplianceRowResponse,
    ComplianceSummaryResponse,
    ReportRange,
)
from pmtracker.schemas.location import LocationResponse
from pmtracker.schemas.preventative_maintenance import (
    PreventativeMaintenanceCreate,
    PreventativeMaintenanceResponse,
)

__all__ = [
    "AssetCreate",
    "AssetUpdate",
    "AssetResponse",
    "CalendarFeedEventResponse",
    "CalendarFeedResponse",
    "CalibrationCompletionResult",
    "CompletionCreate",
    "CompletionRecordResponse",
    "ComplianceReportResponse",
    "ComplianceRowResponse",
    "ComplianceSummaryResponse",
    "LocationResponse",
    "PmCompletionResult",
    "PreventativeMaintenanceCreate",
    "PreventativeMaintenanceResponse",
    "ReportRange",
]
