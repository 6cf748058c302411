"""
Obligation source.

Builds scheduling obligations from persisted PM tasks and asset
calibration schedules, resolving display names along the way.
"""

from typing import Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from pmtracker.models import Asset, PreventativeMaintenance
from pmtracker.repositories.asset_repository import AssetRepository
from pmtracker.repositories.location_repository import LocationRepository
from pmtracker.repositories.preventative_maintenance_repository import (
    PreventativeMaintenanceRepository,
)
from pmtracker.schemas.common.enums import ObligationSourceType
from pmtracker.scheduling.obligation import MaintenanceObligation, build_asset_label
from pmtracker.scheduling.recurrence import parse_recurrence
from pmtracker.services.base import BaseService
from pmtracker.services.maintenance.preventative_maintenance_service import pm_asset_label


def location_display_name(location_id: int, names: Dict[int, str]) -> str:
    return names.get(location_id) or f"Location #{location_id}"


def pm_obligation(pm: PreventativeMaintenance, location_name: str) -> MaintenanceObligation:
    """PM task as an obligation anchored on its schedule anchor (or next due)."""
    return MaintenanceObligation(
        id=pm.id,
        source_type=ObligationSourceType.PM,
        location_id=pm.location_id,
        anchor_date=pm.schedule_anchor or pm.next_due,
        rule=parse_recurrence(pm.recurrence),
        asset_id=pm.asset_id,
        title=pm.title,
        location_name=location_name,
        asset_label=pm_asset_label(pm),
    )


def calibration_obligation(asset: Asset, location_name: str) -> Optional[MaintenanceObligation]:
    """
    Asset calibration schedule as an obligation.

    Returns None when the asset has no calibration date to project from.
    """
    anchor = asset.calibration_anchor or asset.cal_due
    if not anchor:
        return None

    return MaintenanceObligation(
        id=asset.id,
        source_type=ObligationSourceType.CALIBRATION,
        location_id=asset.location_id,
        anchor_date=anchor,
        rule=parse_recurrence(asset.cal_freq, lenient=True),
        asset_id=asset.id,
        location_name=location_name,
        asset_label=build_asset_label(
            asset.id,
            asset.aid,
            asset.manufacturer_model,
            asset.equipment_description,
        ),
    )


class ObligationService(BaseService):
    """Loads maintenance obligations for reporting."""

    def __init__(self, db_session: Session):
        super().__init__(db_session)
        self.location_repository = LocationRepository(db_session)
        self.asset_repository = AssetRepository(db_session)
        self.pm_repository = PreventativeMaintenanceRepository(db_session)

    def list_obligations(
        self,
        location_id: Optional[int] = None,
        source_types: Optional[Iterable[ObligationSourceType]] = None,
    ) -> List[MaintenanceObligation]:
        """
        All obligations, optionally filtered by location and source type.

        Args:
            location_id: Restrict to one location
            source_types: Sources to include; all when None

        Returns:
            PM obligations followed by calibration obligations
        """
        wanted = set(source_types) if source_types else set(ObligationSourceType)
        names = self.location_repository.name_map()
        obligations: List[MaintenanceObligation] = []

        if ObligationSourceType.PM in wanted:
            for pm in self.pm_repository.list_pms(location_id):
                obligations.append(
                    pm_obligation(pm, location_display_name(pm.location_id, names))
                )

        if ObligationSourceType.CALIBRATION in wanted:
            for asset in self.asset_repository.list_with_calibration(location_id):
                obligation = calibration_obligation(
                    asset, location_display_name(asset.location_id, names)
                )
                if obligation is not None:
                    obligations.append(obligation)

        self._log_operation(
            "list_obligations",
            {"location_id": location_id, "count": len(obligations)},
            level="debug",
        )
        return obligations
