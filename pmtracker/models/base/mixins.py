# --- File: pmtracker/models/base/mixins.py ---
"""
Reusable model mixins.
"""

from sqlalchemy import Column, DateTime, ForeignKey, Integer
from sqlalchemy.orm import declared_attr
from sqlalchemy.sql import func


class TimestampMixin:
    """
    Mixin for automatic timestamp tracking.

    Provides created_at and updated_at fields with
    automatic timestamp management.
    """

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        comment="Record creation timestamp (UTC)"
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
        comment="Record last update timestamp (UTC)"
    )


class LocationScopedMixin:
    """Mixin for records owned by a location."""

    @declared_attr
    def location_id(cls):
        return Column(
            Integer,
            ForeignKey("locations.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
            comment="Owning location",
        )
