# pmtracker/models/asset.py
"""
Asset model.

Equipment tracked at a location. The calibration obligation of an asset
lives directly on this row: ``cal_due`` is the advancing next due date,
``calibration_anchor`` the fixed date generation projects from, and
``cal_freq`` the free-text frequency as entered by staff.
"""

from sqlalchemy import Column, Index, String, Text
from sqlalchemy.orm import relationship

from pmtracker.models.base.base_model import BaseModel
from pmtracker.models.base.mixins import LocationScopedMixin, TimestampMixin


class Asset(BaseModel, LocationScopedMixin, TimestampMixin):
    """Tracked equipment with an optional calibration schedule."""

    __tablename__ = "assets"

    aid = Column(String(100), nullable=True, comment="Asset identification number")
    manufacturer_model = Column(String(255), nullable=True)
    equipment_description = Column(String(500), nullable=True)
    serial_number = Column(String(100), nullable=True)
    owner = Column(String(255), nullable=True)
    active_retired = Column(String(50), nullable=True, comment="Active / Retired status text")

    # Calibration schedule (ISO YYYY-MM-DD strings)
    cal_due = Column(String(10), nullable=True, comment="Next calibration due date")
    cal_freq = Column(String(100), nullable=True, comment="Calibration frequency text")
    calibration_anchor = Column(
        String(10),
        nullable=True,
        comment="Reference due date recurrence is projected from",
    )
    calibration_range = Column(String(255), nullable=True)

    sop = Column(String(255), nullable=True, comment="Standard operating procedure reference")
    notes = Column(Text, nullable=True)

    location = relationship("Location", back_populates="assets")
    preventative_maintenances = relationship(
        "PreventativeMaintenance",
        back_populates="asset",
    )
    calibration_history = relationship(
        "CalibrationCompletionHistory",
        back_populates="asset",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        Index("idx_asset_location_cal_due", "location_id", "cal_due"),
    )

    def __repr__(self) -> str:
        return f"<Asset(id={self.id}, aid='{self.aid}', location_id={self.location_id})>"
