# pmtracker/models/location.py
"""
Location model.

A facility site that owns assets and preventative maintenance records.
"""

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from pmtracker.models.base.base_model import BaseModel
from pmtracker.models.base.mixins import TimestampMixin


class Location(BaseModel, TimestampMixin):
    """Facility location."""

    __tablename__ = "locations"

    name = Column(
        String(255),
        nullable=False,
        unique=True,
        comment="Display name",
    )

    assets = relationship(
        "Asset",
        back_populates="location",
        cascade="all, delete-orphan",
    )
    preventative_maintenances = relationship(
        "PreventativeMaintenance",
        back_populates="location",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Location(id={self.id}, name='{self.name}')>"
