"""
SQLAlchemy models for the maintenance tracker.
"""

from pmtracker.models.base import Base, BaseModel
from pmtracker.models.location import Location
from pmtracker.models.asset import Asset
from pmtracker.models.preventative_maintenance import PreventativeMaintenance
from pmtracker.models.completion_history import (
    CalibrationCompletionHistory,
    PmCompletionHistory,
)

__all__ = [
    "Base",
    "BaseModel",
    "Location",
    "Asset",
    "PreventativeMaintenance",
    "PmCompletionHistory",
    "CalibrationCompletionHistory",
]
