from pmtracker.services.reporting.calendar_feed_service import CalendarFeedService
from pmtracker.services.reporting.compliance_report_service import (
    ComplianceReportService,
    resolve_report_window,
)

__all__ = ["CalendarFeedService", "ComplianceReportService", "resolve_report_window"]
