# pmtracker/models/preventative_maintenance.py
"""
Preventative maintenance model.

A recurring PM task at a location, optionally tied to an asset.
"""

from sqlalchemy import Column, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from pmtracker.models.base.base_model import BaseModel
from pmtracker.models.base.mixins import LocationScopedMixin, TimestampMixin


class PreventativeMaintenance(BaseModel, LocationScopedMixin, TimestampMixin):
    """
    Recurring preventative maintenance task.

    ``schedule_anchor`` is set once and never moves; ``next_due`` advances
    as occurrences are completed.
    """

    __tablename__ = "preventative_maintenances"

    asset_id = Column(
        Integer,
        ForeignKey("assets.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    title = Column(String(255), nullable=True)
    recurrence = Column(String(50), nullable=False, comment="Canonical recurrence token")
    schedule_anchor = Column(String(10), nullable=True)
    next_due = Column(String(10), nullable=True)
    notes = Column(Text, nullable=True)

    location = relationship("Location", back_populates="preventative_maintenances")
    asset = relationship("Asset", back_populates="preventative_maintenances")
    completion_history = relationship(
        "PmCompletionHistory",
        back_populates="preventative_maintenance",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        Index("idx_pm_location_next_due", "location_id", "next_due"),
    )

    def __repr__(self) -> str:
        return (
            f"<PreventativeMaintenance(id={self.id}, title='{self.title}', "
            f"recurrence='{self.recurrence}')>"
        )
