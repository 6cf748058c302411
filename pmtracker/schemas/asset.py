# --- File: pmtracker/schemas/asset.py ---
"""
Asset schemas.

Calibration fields are free text on input except ``cal_due``, which must
be a valid ISO date when present.
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field, field_validator

from pmtracker.schemas.common.base import (
    BaseCreateSchema,
    BaseResponseSchema,
    validate_optional_iso_date,
)
from pmtracker.schemas.common.enums import RecurrenceRule

__all__ = ["AssetCreate", "AssetUpdate", "AssetResponse"]


class AssetCreate(BaseCreateSchema):
    """Create an asset at a location."""

    aid: Optional[str] = Field(None, max_length=100, description="Asset identification number")
    manufacturer_model: Optional[str] = Field(None, max_length=255)
    equipment_description: Optional[str] = Field(None, max_length=500)
    serial_number: Optional[str] = Field(None, max_length=100)
    owner: Optional[str] = Field(None, max_length=255)
    active_retired: Optional[str] = Field(None, max_length=50)
    cal_due: Optional[str] = Field(None, description="Next calibration due date (YYYY-MM-DD)")
    cal_freq: Optional[str] = Field(
        None,
        max_length=100,
        description="Calibration frequency, e.g. 'Annual' or 'every 6 months'",
    )
    calibration_range: Optional[str] = Field(None, max_length=255)
    sop: Optional[str] = Field(None, max_length=255)
    notes: Optional[str] = None

    @field_validator("cal_due", mode="before")
    @classmethod
    def validate_cal_due(cls, v):
        return validate_optional_iso_date(v, "cal_due")


class AssetUpdate(AssetCreate):
    """
    Partial asset update.

    Only fields present in the request are applied; an empty ``cal_due``
    clears the due date.
    """


class AssetResponse(BaseResponseSchema):
    """Asset with its derived calibration state."""

    location_id: int
    aid: Optional[str] = None
    manufacturer_model: Optional[str] = None
    equipment_description: Optional[str] = None
    serial_number: Optional[str] = None
    owner: Optional[str] = None
    active_retired: Optional[str] = None
    cal_due: Optional[str] = None
    cal_freq: Optional[str] = None
    calibration_anchor: Optional[str] = None
    calibration_range: Optional[str] = None
    sop: Optional[str] = None
    notes: Optional[str] = None
    calibration_rule: Optional[RecurrenceRule] = Field(
        None,
        description="Recurrence parsed from cal_freq, if recognizable",
    )
    last_calibration: Optional[str] = Field(
        None,
        description="Latest recorded calibration completion date",
    )
