"""
Data access layer.
"""

from pmtracker.repositories.asset_repository import AssetRepository
from pmtracker.repositories.base import BaseRepository
from pmtracker.repositories.completion_history_repository import (
    CalibrationCompletionHistoryRepository,
    CompletionHistoryRepository,
    PmCompletionHistoryRepository,
)
from pmtracker.repositories.location_repository import LocationRepository
from pmtracker.repositories.preventative_maintenance_repository import (
    PreventativeMaintenanceRepository,
)

__all__ = [
    "AssetRepository",
    "BaseRepository",
    "CalibrationCompletionHistoryRepository",
    "CompletionHistoryRepository",
    "LocationRepository",
    "PmCompletionHistoryRepository",
    "PreventativeMaintenanceRepository",
]
