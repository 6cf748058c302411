"""
Location service.
"""

from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pmtracker.repositories.location_repository import LocationRepository
from pmtracker.schemas.location import LocationResponse
from pmtracker.services.base import BaseService, ServiceResult


class LocationService(BaseService):
    """Read access to facility locations."""

    def __init__(self, db_session: Session):
        super().__init__(db_session)
        self.repository = LocationRepository(db_session)

    def list_locations(self) -> ServiceResult[List[LocationResponse]]:
        try:
            locations = self.repository.list_locations()
            return ServiceResult.success(
                [LocationResponse.model_validate(location) for location in locations],
                metadata={"count": len(locations)},
            )
        except SQLAlchemyError as e:
            return self._handle_exception(e, "list locations")
