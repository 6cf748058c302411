"""
Calendar feed service.
"""

from datetime import date
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pmtracker.core.exceptions import BaseAppException
from pmtracker.schemas.calendar_feed import CalendarFeedEventResponse, CalendarFeedResponse
from pmtracker.schemas.compliance_report import ReportRange
from pmtracker.scheduling.calendar_feed import build_feed_events
from pmtracker.services.base import BaseService, ServiceResult
from pmtracker.services.reporting.compliance_report_service import (
    ComplianceReportService,
    resolve_report_window,
)
from pmtracker.utils.date_utils import format_iso_date


class CalendarFeedService(BaseService):
    """Calendar events for every occurrence in a window."""

    def __init__(self, db_session: Session):
        super().__init__(db_session)
        self.reports = ComplianceReportService(db_session)

    def build_feed(
        self,
        start: Optional[str] = None,
        end: Optional[str] = None,
        location_id: Optional[int] = None,
        today: Optional[date] = None,
    ) -> ServiceResult[CalendarFeedResponse]:
        try:
            window_start, window_end = resolve_report_window(start, end, today)
            report = self.reports.compute(window_start, window_end, location_id, today=today)
            events = build_feed_events(report.rows)
            return ServiceResult.success(
                CalendarFeedResponse(
                    range=ReportRange(
                        start=format_iso_date(window_start),
                        end=format_iso_date(window_end),
                        location_id=location_id,
                    ),
                    events=[CalendarFeedEventResponse.model_validate(event) for event in events],
                ),
                metadata={"count": len(events)},
            )
        except BaseAppException as e:
            return ServiceResult.from_app_exception(e)
        except SQLAlchemyError as e:
            return self._handle_exception(e, "build calendar feed", location_id)
