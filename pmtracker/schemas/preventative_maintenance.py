# --- File: pmtracker/schemas/preventative_maintenance.py ---
"""
Preventative maintenance schemas.
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field, field_validator

from pmtracker.schemas.common.base import BaseCreateSchema, BaseResponseSchema
from pmtracker.schemas.common.enums import RecurrenceRule
from pmtracker.utils.date_utils import is_iso_date

__all__ = [
    "PreventativeMaintenanceCreate",
    "PreventativeMaintenanceResponse",
]


class PreventativeMaintenanceCreate(BaseCreateSchema):
    """
    Create a PM task.

    ``recurrence`` accepts canonical tokens only; ``next_due`` becomes both
    the first due date and the fixed schedule anchor.
    """

    title: Optional[str] = Field(None, max_length=255)
    recurrence: RecurrenceRule = Field(..., description="Canonical recurrence token")
    next_due: str = Field(..., description="First due date (YYYY-MM-DD)")
    asset_id: Optional[int] = Field(None, description="Asset at the same location")
    notes: Optional[str] = None

    @field_validator("next_due")
    @classmethod
    def validate_next_due(cls, v: str) -> str:
        if not is_iso_date(v):
            raise ValueError("next_due must be a valid YYYY-MM-DD date")
        return v


class PreventativeMaintenanceResponse(BaseResponseSchema):
    """PM task with derived display and completion fields."""

    location_id: int
    asset_id: Optional[int] = None
    title: Optional[str] = None
    recurrence: str
    schedule_anchor: Optional[str] = None
    next_due: Optional[str] = None
    notes: Optional[str] = None
    asset_label: Optional[str] = None
    last_completed: Optional[str] = Field(
        None,
        description="Latest recorded completion date",
    )
