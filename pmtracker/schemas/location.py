# --- File: pmtracker/schemas/location.py ---
"""
Location schemas.
"""

from pydantic import Field

from pmtracker.schemas.common.base import BaseResponseSchema

__all__ = ["LocationResponse"]


class LocationResponse(BaseResponseSchema):
    """Location as returned by the API."""

    name: str = Field(..., description="Location name")
