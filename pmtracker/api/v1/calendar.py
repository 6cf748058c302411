"""
Calendar feed endpoint.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from pmtracker.api import deps
from pmtracker.schemas.calendar_feed import CalendarFeedResponse
from pmtracker.services.reporting import CalendarFeedService

router = APIRouter(prefix="/calendar", tags=["Calendar"])


@router.get("/feed", response_model=CalendarFeedResponse)
def calendar_feed(
    start: Optional[str] = Query(None),
    end: Optional[str] = Query(None),
    location_id: Optional[int] = Query(None, alias="locationId"),
    service: CalendarFeedService = Depends(deps.get_calendar_feed_service),
):
    return service.build_feed(start, end, location_id).unwrap()
