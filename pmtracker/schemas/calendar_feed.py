# --- File: pmtracker/schemas/calendar_feed.py ---
"""
Calendar feed response schemas.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from pmtracker.schemas.common.base import ApiSchema
from pmtracker.schemas.compliance_report import ReportRange

__all__ = ["CalendarFeedEventResponse", "CalendarFeedResponse"]


class CalendarFeedEventResponse(ApiSchema):
    uid: str = Field(..., description="Stable identifier of the occurrence")
    date: str
    summary: str
    description: Optional[str] = None
    location: Optional[str] = None


class CalendarFeedResponse(ApiSchema):
    range: ReportRange
    events: List[CalendarFeedEventResponse] = Field(default_factory=list)
