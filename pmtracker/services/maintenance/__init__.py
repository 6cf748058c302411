from pmtracker.services.maintenance.completion_service import CompletionService
from pmtracker.services.maintenance.obligation_service import ObligationService
from pmtracker.services.maintenance.preventative_maintenance_service import (
    PreventativeMaintenanceService,
)

__all__ = ["CompletionService", "ObligationService", "PreventativeMaintenanceService"]
