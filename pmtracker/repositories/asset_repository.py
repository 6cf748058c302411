# pmtracker/repositories/asset_repository.py
"""
Asset Repository.

Asset lookups per location, including the calibration-bearing subset
used as the calibration obligation source.
"""

from typing import List, Optional

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from pmtracker.core.exceptions import AssetNotFoundError
from pmtracker.models import Asset
from pmtracker.repositories.base.base_repository import BaseRepository


class AssetRepository(BaseRepository[Asset]):
    """Repository for tracked equipment."""

    def __init__(self, session: Session):
        """Initialize repository with session."""
        super().__init__(Asset, session)

    def not_found(self, id):
        return AssetNotFoundError(id)

    def list_assets(self) -> List[Asset]:
        return self.find_all(order_by=["location_id", "id"])

    def list_for_location(self, location_id: int) -> List[Asset]:
        return self.find_by_criteria({"location_id": location_id}, order_by=["id"])

    def list_with_calibration(self, location_id: Optional[int] = None) -> List[Asset]:
        """
        Assets carrying any calibration schedule data.

        Args:
            location_id: Restrict to one location

        Returns:
            Assets with a due date, anchor or frequency, ordered by id
        """
        stmt = select(Asset).where(
            or_(
                Asset.cal_due.isnot(None),
                Asset.calibration_anchor.isnot(None),
                Asset.cal_freq.isnot(None),
            )
        )
        if location_id is not None:
            stmt = stmt.where(Asset.location_id == location_id)
        return list(self.db.execute(stmt.order_by(Asset.id)).scalars())

    def get_in_location(self, asset_id: int, location_id: int) -> Asset:
        """Get an asset, requiring it to belong to ``location_id``."""
        asset = self.find_by_id(asset_id)
        if asset is None or asset.location_id != location_id:
            raise AssetNotFoundError(
                asset_id,
                message=f"Asset not found for this location (ID: {asset_id})",
            )
        return asset
