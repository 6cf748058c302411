"""SQLAlchemy Base class for all models."""
from pmtracker.models.base.base_model import Base


def import_models():
    """Import all models to register them with SQLAlchemy."""
    from pmtracker.models import (  # noqa: F401
        Asset,
        CalibrationCompletionHistory,
        Location,
        PmCompletionHistory,
        PreventativeMaintenance,
    )


# Import models on module load
import_models()
