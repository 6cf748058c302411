"""
Shared FastAPI dependencies.

Example usage in a router:
    from fastapi import Depends, APIRouter
    from pmtracker.api import deps

    @router.get("/locations")
    def list_locations(service = Depends(deps.get_location_service)):
        ...
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from pmtracker.db.session import get_db
from pmtracker.services.facility import AssetService, LocationService
from pmtracker.services.maintenance import CompletionService, PreventativeMaintenanceService
from pmtracker.services.reporting import CalendarFeedService, ComplianceReportService


def get_location_service(db: Session = Depends(get_db)) -> LocationService:
    return LocationService(db)


def get_asset_service(db: Session = Depends(get_db)) -> AssetService:
    return AssetService(db)


def get_pm_service(db: Session = Depends(get_db)) -> PreventativeMaintenanceService:
    return PreventativeMaintenanceService(db)


def get_completion_service(db: Session = Depends(get_db)) -> CompletionService:
    return CompletionService(db)


def get_report_service(db: Session = Depends(get_db)) -> ComplianceReportService:
    return ComplianceReportService(db)


def get_calendar_feed_service(db: Session = Depends(get_db)) -> CalendarFeedService:
    return CalendarFeedService(db)


__all__ = [
    "get_db",
    "get_location_service",
    "get_asset_service",
    "get_pm_service",
    "get_completion_service",
    "get_report_service",
    "get_calendar_feed_service",
]
