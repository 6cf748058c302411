"""
Preventative maintenance service.

CRUD for PM tasks. ``schedule_anchor`` is fixed to the first due date at
creation; ``last_completed`` is derived from the completion ledger.
"""

from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pmtracker.core.exceptions import BaseAppException
from pmtracker.models import PreventativeMaintenance
from pmtracker.repositories.asset_repository import AssetRepository
from pmtracker.repositories.completion_history_repository import PmCompletionHistoryRepository
from pmtracker.repositories.location_repository import LocationRepository
from pmtracker.repositories.preventative_maintenance_repository import (
    PreventativeMaintenanceRepository,
)
from pmtracker.schemas.preventative_maintenance import (
    PreventativeMaintenanceCreate,
    PreventativeMaintenanceResponse,
)
from pmtracker.scheduling.obligation import build_asset_label
from pmtracker.services.base import BaseService, ServiceResult


def pm_asset_label(pm: PreventativeMaintenance) -> str:
    asset = pm.asset
    if asset is None:
        return build_asset_label(pm.asset_id)
    return build_asset_label(
        asset.id,
        asset.aid,
        asset.manufacturer_model,
        asset.equipment_description,
    )


def build_pm_response(
    pm: PreventativeMaintenance,
    last_completed: Optional[str] = None,
) -> PreventativeMaintenanceResponse:
    response = PreventativeMaintenanceResponse.model_validate(pm)
    response.asset_label = pm_asset_label(pm)
    response.last_completed = last_completed
    return response


class PreventativeMaintenanceService(BaseService):
    """PM task management scoped to locations."""

    def __init__(self, db_session: Session):
        super().__init__(db_session)
        self.repository = PreventativeMaintenanceRepository(db_session)
        self.location_repository = LocationRepository(db_session)
        self.asset_repository = AssetRepository(db_session)
        self.history_repository = PmCompletionHistoryRepository(db_session)

    def list_for_location(
        self,
        location_id: int,
    ) -> ServiceResult[List[PreventativeMaintenanceResponse]]:
        try:
            self.location_repository.get_by_id(location_id)
            pms = self.repository.list_pms(location_id)
            latest = self.history_repository.max_completed_by_obligation([pm.id for pm in pms])
            return ServiceResult.success(
                [build_pm_response(pm, latest.get(pm.id)) for pm in pms],
                metadata={"count": len(pms)},
            )
        except BaseAppException as e:
            return ServiceResult.from_app_exception(e)
        except SQLAlchemyError as e:
            return self._handle_exception(e, "list preventative maintenances", location_id)

    def create_pm(
        self,
        location_id: int,
        data: PreventativeMaintenanceCreate,
    ) -> ServiceResult[PreventativeMaintenanceResponse]:
        """
        Create a PM task at a location.

        Args:
            location_id: Owning location
            data: Validated PM fields; an asset must belong to the same location

        Returns:
            ServiceResult with the created task
        """
        try:
            with self.transaction():
                self.location_repository.get_by_id(location_id)
                if data.asset_id is not None:
                    self.asset_repository.get_in_location(data.asset_id, location_id)

                pm = PreventativeMaintenance(
                    location_id=location_id,
                    asset_id=data.asset_id,
                    title=data.title,
                    recurrence=data.recurrence.value,
                    schedule_anchor=data.next_due,
                    next_due=data.next_due,
                    notes=data.notes,
                )
                self.repository.create(pm, commit=False)

            self.db.refresh(pm)
            self._log_operation(
                "create_pm",
                {"pm_id": pm.id, "location_id": location_id, "recurrence": pm.recurrence},
            )
            return ServiceResult.success(build_pm_response(pm), message="Preventative maintenance created")
        except BaseAppException as e:
            return ServiceResult.from_app_exception(e)
        except SQLAlchemyError as e:
            return self._handle_exception(e, "create preventative maintenance", location_id)

    def delete_pm(self, pm_id: int) -> ServiceResult[None]:
        """Delete a PM task together with its completion history."""
        try:
            with self.transaction():
                self.repository.delete(pm_id, commit=False)
            self._log_operation("delete_pm", {"pm_id": pm_id})
            return ServiceResult.success(message="Preventative maintenance deleted")
        except BaseAppException as e:
            return ServiceResult.from_app_exception(e)
        except SQLAlchemyError as e:
            return self._handle_exception(e, "delete preventative maintenance", pm_id)
