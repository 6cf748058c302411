"""
Preventative maintenance endpoints and the PM completion ledger.
"""
from typing import List

from fastapi import APIRouter, Depends, Response, status

from pmtracker.api import deps
from pmtracker.schemas.completion import (
    CompletionCreate,
    CompletionRecordResponse,
    PmCompletionResult,
)
from pmtracker.services.maintenance import CompletionService, PreventativeMaintenanceService

router = APIRouter(prefix="/preventative-maintenances", tags=["Preventative Maintenance"])


@router.delete("/{pm_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_pm(
    pm_id: int,
    service: PreventativeMaintenanceService = Depends(deps.get_pm_service),
):
    service.delete_pm(pm_id).unwrap()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{pm_id}/completion-history", response_model=List[CompletionRecordResponse])
def list_completion_history(
    pm_id: int,
    service: CompletionService = Depends(deps.get_completion_service),
):
    return service.list_pm_history(pm_id).unwrap()


@router.post(
    "/{pm_id}/completion-history",
    response_model=PmCompletionResult,
    status_code=status.HTTP_201_CREATED,
)
def log_completion(
    pm_id: int,
    payload: CompletionCreate,
    service: CompletionService = Depends(deps.get_completion_service),
):
    """Log completion of one due date; re-logging the same date updates it."""
    return service.log_pm_completion(
        pm_id,
        payload.due_date,
        payload.completed_at,
        payload.notes,
    ).unwrap()
