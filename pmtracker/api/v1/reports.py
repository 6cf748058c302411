"""
Compliance reporting endpoints.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from pmtracker.api import deps
from pmtracker.schemas.common.enums import ObligationSourceType
from pmtracker.schemas.compliance_report import ComplianceReportResponse
from pmtracker.services.reporting import ComplianceReportService

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get("/pm-compliance", response_model=ComplianceReportResponse)
def pm_compliance_report(
    start: Optional[str] = Query(None, description="Window start (YYYY-MM-DD), default first of month"),
    end: Optional[str] = Query(None, description="Window end (YYYY-MM-DD), default last of month"),
    location_id: Optional[int] = Query(None, alias="locationId"),
    source_type: Optional[ObligationSourceType] = Query(None, alias="sourceType"),
    service: ComplianceReportService = Depends(deps.get_report_service),
):
    """Every occurrence in the window with its compliance status."""
    source_types = [source_type] if source_type else None
    return service.build_report(start, end, location_id, source_types).unwrap()
