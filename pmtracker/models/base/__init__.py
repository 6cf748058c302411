from pmtracker.models.base.base_model import Base, BaseModel
from pmtracker.models.base.mixins import LocationScopedMixin, TimestampMixin

__all__ = ["Base", "BaseModel", "LocationScopedMixin", "TimestampMixin"]
