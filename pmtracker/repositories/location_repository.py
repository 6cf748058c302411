# pmtracker/repositories/location_repository.py
"""
Location Repository.
"""

from typing import Dict, Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from pmtracker.core.exceptions import LocationNotFoundError
from pmtracker.models import Location
from pmtracker.repositories.base.base_repository import BaseRepository


class LocationRepository(BaseRepository[Location]):
    """Repository for facility locations."""

    def __init__(self, session: Session):
        """Initialize repository with session."""
        super().__init__(Location, session)

    def not_found(self, id):
        return LocationNotFoundError(id)

    def list_locations(self) -> List[Location]:
        return self.find_all(order_by=["id"])

    def name_map(self, location_ids: Optional[Iterable[int]] = None) -> Dict[int, str]:
        """Map location id -> name, optionally restricted to ``location_ids``."""
        stmt = select(Location.id, Location.name)
        if location_ids is not None:
            stmt = stmt.where(Location.id.in_(list(location_ids)))
        return {row.id: row.name for row in self.db.execute(stmt)}
