"""
Compliance report service.

Resolves the reporting window, loads obligations and the ledger slice for
that window and hands them to the pure aggregator.
"""

from datetime import date
from typing import Iterable, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pmtracker.core.exceptions import BaseAppException, InvalidDateRangeError
from pmtracker.schemas.common.enums import ObligationSourceType
from pmtracker.schemas.compliance_report import (
    ComplianceReportResponse,
    ComplianceRowResponse,
    ComplianceSummaryResponse,
    ReportRange,
)
from pmtracker.scheduling.compliance import ComplianceReport, build_compliance_report
from pmtracker.services.base import BaseService, ServiceResult
from pmtracker.services.maintenance.completion_service import CompletionService
from pmtracker.services.maintenance.obligation_service import ObligationService
from pmtracker.utils.date_utils import current_month_range, format_iso_date, parse_iso_date


def resolve_report_window(
    start: Optional[str] = None,
    end: Optional[str] = None,
    today: Optional[date] = None,
) -> Tuple[date, date]:
    """
    Resolve an inclusive reporting window.

    Missing bounds default to the first/last day of the current month.

    Raises:
        InvalidDateRangeError: If a bound is not YYYY-MM-DD or start > end
    """
    default_start, default_end = current_month_range(today)

    window_start = parse_iso_date(start) if start else default_start
    window_end = parse_iso_date(end) if end else default_end

    if window_start is None or window_end is None:
        raise InvalidDateRangeError(start=start, end=end)
    if window_start > window_end:
        raise InvalidDateRangeError("Start date must be on or before end date", start=start, end=end)
    return window_start, window_end


class ComplianceReportService(BaseService):
    """Builds the occurrence-level compliance report."""

    def __init__(self, db_session: Session):
        super().__init__(db_session)
        self.obligations = ObligationService(db_session)
        self.completions = CompletionService(db_session)

    def compute(
        self,
        window_start: date,
        window_end: date,
        location_id: Optional[int] = None,
        source_types: Optional[Iterable[ObligationSourceType]] = None,
        today: Optional[date] = None,
    ) -> ComplianceReport:
        """Reconcile all matching obligations over an already-resolved window."""
        obligations = self.obligations.list_obligations(location_id, source_types)
        ledger = self.completions.load_ledger(obligations, window_start, window_end)
        return build_compliance_report(obligations, window_start, window_end, ledger, today)

    def build_report(
        self,
        start: Optional[str] = None,
        end: Optional[str] = None,
        location_id: Optional[int] = None,
        source_types: Optional[Iterable[ObligationSourceType]] = None,
        today: Optional[date] = None,
    ) -> ServiceResult[ComplianceReportResponse]:
        """
        Build the compliance report.

        Args:
            start: ISO window start, defaults to the first of this month
            end: ISO window end, defaults to the last of this month
            location_id: Restrict to one location
            source_types: Restrict to PM and/or calibration obligations
            today: Reference date for classification and defaults

        Returns:
            ServiceResult with range, summary and sorted rows
        """
        try:
            window_start, window_end = resolve_report_window(start, end, today)
            report = self.compute(window_start, window_end, location_id, source_types, today)

            self._log_operation(
                "build_report",
                {
                    "start": format_iso_date(window_start),
                    "end": format_iso_date(window_end),
                    "location_id": location_id,
                    "rows": report.summary.total,
                },
            )
            return ServiceResult.success(
                ComplianceReportResponse(
                    range=ReportRange(
                        start=format_iso_date(window_start),
                        end=format_iso_date(window_end),
                        location_id=location_id,
                    ),
                    summary=ComplianceSummaryResponse(**report.summary.to_dict()),
                    rows=[ComplianceRowResponse.model_validate(row) for row in report.rows],
                )
            )
        except BaseAppException as e:
            return ServiceResult.from_app_exception(e)
        except SQLAlchemyError as e:
            return self._handle_exception(e, "build compliance report", location_id)
