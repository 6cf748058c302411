"""
Asset service.

Asset CRUD. The calibration anchor is fixed from the first calibration due
date, whether it arrives at creation or in a later update; ``last_calibration`` is always derived
from the calibration ledger.
"""

from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pmtracker.core.exceptions import BaseAppException
from pmtracker.models import Asset
from pmtracker.repositories.asset_repository import AssetRepository
from pmtracker.repositories.completion_history_repository import (
    CalibrationCompletionHistoryRepository,
)
from pmtracker.repositories.location_repository import LocationRepository
from pmtracker.schemas.asset import AssetCreate, AssetResponse, AssetUpdate
from pmtracker.scheduling.recurrence import parse_recurrence
from pmtracker.services.base import BaseService, ServiceResult


def build_asset_response(asset: Asset, last_calibration: Optional[str] = None) -> AssetResponse:
    response = AssetResponse.model_validate(asset)
    response.calibration_rule = parse_recurrence(asset.cal_freq, lenient=True)
    response.last_calibration = last_calibration
    return response


class AssetService(BaseService):
    """Asset CRUD scoped to locations."""

    def __init__(self, db_session: Session):
        super().__init__(db_session)
        self.repository = AssetRepository(db_session)
        self.location_repository = LocationRepository(db_session)
        self.calibration_history = CalibrationCompletionHistoryRepository(db_session)

    def list_assets(self) -> ServiceResult[List[AssetResponse]]:
        try:
            assets = self.repository.list_assets()
            latest = self.calibration_history.max_completed_by_obligation(
                [asset.id for asset in assets]
            )
            return ServiceResult.success(
                [build_asset_response(asset, latest.get(asset.id)) for asset in assets],
                metadata={"count": len(assets)},
            )
        except SQLAlchemyError as e:
            return self._handle_exception(e, "list assets")

    def list_for_location(self, location_id: int) -> ServiceResult[List[AssetResponse]]:
        try:
            self.location_repository.get_by_id(location_id)
            assets = self.repository.list_for_location(location_id)
            latest = self.calibration_history.max_completed_by_obligation(
                [asset.id for asset in assets]
            )
            return ServiceResult.success(
                [build_asset_response(asset, latest.get(asset.id)) for asset in assets],
                metadata={"count": len(assets)},
            )
        except BaseAppException as e:
            return ServiceResult.from_app_exception(e)
        except SQLAlchemyError as e:
            return self._handle_exception(e, "list assets", location_id)

    def get_asset(self, asset_id: int) -> ServiceResult[AssetResponse]:
        try:
            asset = self.repository.get_by_id(asset_id)
            return ServiceResult.success(
                build_asset_response(asset, self.calibration_history.max_completed_at(asset.id))
            )
        except BaseAppException as e:
            return ServiceResult.from_app_exception(e)
        except SQLAlchemyError as e:
            return self._handle_exception(e, "get asset", asset_id)

    def create_asset(self, location_id: int, data: AssetCreate) -> ServiceResult[AssetResponse]:
        """
        Create an asset at a location.

        Args:
            location_id: Owning location
            data: Asset fields

        Returns:
            ServiceResult with the created asset
        """
        try:
            with self.transaction():
                self.location_repository.get_by_id(location_id)
                asset = Asset(
                    location_id=location_id,
                    calibration_anchor=data.cal_due,
                    **data.model_dump(),
                )
                self.repository.create(asset, commit=False)

            self.db.refresh(asset)
            self._log_operation("create_asset", {"asset_id": asset.id, "location_id": location_id})
            return ServiceResult.success(build_asset_response(asset), message="Asset created")
        except BaseAppException as e:
            return ServiceResult.from_app_exception(e)
        except SQLAlchemyError as e:
            return self._handle_exception(e, "create asset", location_id)

    def update_asset(self, asset_id: int, data: AssetUpdate) -> ServiceResult[AssetResponse]:
        """
        Apply the fields present in ``data`` to an asset.

        Setting the first calibration due date also fixes the calibration
        anchor; an existing anchor is never moved.
        """
        try:
            with self.transaction():
                asset = self.repository.get_for_update(asset_id)
                changes = data.model_dump(exclude_unset=True)
                if changes.get("cal_due") and not asset.calibration_anchor:
                    changes["calibration_anchor"] = changes["cal_due"]
                self.repository.update(asset, changes, commit=False)

            self.db.refresh(asset)
            self._log_operation(
                "update_asset",
                {"asset_id": asset_id, "fields": sorted(changes)},
            )
            return ServiceResult.success(
                build_asset_response(asset, self.calibration_history.max_completed_at(asset.id)),
                message="Asset updated",
            )
        except BaseAppException as e:
            return ServiceResult.from_app_exception(e)
        except SQLAlchemyError as e:
            return self._handle_exception(e, "update asset", asset_id)

    def delete_asset(self, asset_id: int) -> ServiceResult[None]:
        """Delete an asset and its calibration history; linked PM tasks become unassigned."""
        try:
            with self.transaction():
                self.repository.delete(asset_id, commit=False)
            self._log_operation("delete_asset", {"asset_id": asset_id})
            return ServiceResult.success(message="Asset deleted")
        except BaseAppException as e:
            return ServiceResult.from_app_exception(e)
        except SQLAlchemyError as e:
            return self._handle_exception(e, "delete asset", asset_id)
