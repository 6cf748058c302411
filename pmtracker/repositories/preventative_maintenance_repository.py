# pmtracker/repositories/preventative_maintenance_repository.py
"""
Preventative Maintenance Repository.
"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from pmtracker.core.exceptions import PreventativeMaintenanceNotFoundError
from pmtracker.models import PreventativeMaintenance
from pmtracker.repositories.base.base_repository import BaseRepository


class PreventativeMaintenanceRepository(BaseRepository[PreventativeMaintenance]):
    """Repository for recurring PM tasks."""

    def __init__(self, session: Session):
        """Initialize repository with session."""
        super().__init__(PreventativeMaintenance, session)

    def not_found(self, id):
        return PreventativeMaintenanceNotFoundError(id)

    def list_pms(self, location_id: Optional[int] = None) -> List[PreventativeMaintenance]:
        """PM tasks with their assets loaded, ordered by next due then id."""
        stmt = select(PreventativeMaintenance).options(
            joinedload(PreventativeMaintenance.asset)
        )
        if location_id is not None:
            stmt = stmt.where(PreventativeMaintenance.location_id == location_id)
        stmt = stmt.order_by(PreventativeMaintenance.next_due, PreventativeMaintenance.id)
        return list(self.db.execute(stmt).scalars())
