# pmtracker/models/completion_history.py
"""
Completion ledger models.

One row per (obligation, due date). The unique constraints are what make
re-logging a due date an update rather than a second row.
"""

from sqlalchemy import Column, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from pmtracker.models.base.base_model import BaseModel
from pmtracker.models.base.mixins import TimestampMixin


class PmCompletionHistory(BaseModel, TimestampMixin):
    """Completion of one preventative maintenance occurrence."""

    __tablename__ = "pm_completion_history"

    preventative_maintenance_id = Column(
        Integer,
        ForeignKey("preventative_maintenances.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    due_date = Column(String(10), nullable=False)
    completed_at = Column(String(10), nullable=True)
    notes = Column(Text, nullable=True)

    preventative_maintenance = relationship(
        "PreventativeMaintenance",
        back_populates="completion_history",
    )

    __table_args__ = (
        UniqueConstraint(
            "preventative_maintenance_id",
            "due_date",
            name="uq_pm_completion_due",
        ),
    )

    @property
    def obligation_id(self) -> int:
        return self.preventative_maintenance_id

    def __repr__(self) -> str:
        return (
            f"<PmCompletionHistory(pm_id={self.preventative_maintenance_id}, "
            f"due_date='{self.due_date}', completed_at='{self.completed_at}')>"
        )


class CalibrationCompletionHistory(BaseModel, TimestampMixin):
    """Completion of one calibration occurrence of an asset."""

    __tablename__ = "calibration_completion_history"

    asset_id = Column(
        Integer,
        ForeignKey("assets.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    due_date = Column(String(10), nullable=False)
    completed_at = Column(String(10), nullable=True)
    notes = Column(Text, nullable=True)

    asset = relationship("Asset", back_populates="calibration_history")

    __table_args__ = (
        UniqueConstraint("asset_id", "due_date", name="uq_calibration_completion_due"),
    )

    @property
    def obligation_id(self) -> int:
        return self.asset_id

    def __repr__(self) -> str:
        return (
            f"<CalibrationCompletionHistory(asset_id={self.asset_id}, "
            f"due_date='{self.due_date}', completed_at='{self.completed_at}')>"
        )
