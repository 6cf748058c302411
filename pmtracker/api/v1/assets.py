"""
Asset endpoints and the calibration ledger.
"""
from typing import List

from fastapi import APIRouter, Depends, Response, status

from pmtracker.api import deps
from pmtracker.schemas.asset import AssetResponse, AssetUpdate
from pmtracker.schemas.completion import (
    CalibrationCompletionResult,
    CompletionCreate,
    CompletionRecordResponse,
)
from pmtracker.services.facility import AssetService
from pmtracker.services.maintenance import CompletionService

router = APIRouter(prefix="/assets", tags=["Assets"])


@router.get("", response_model=List[AssetResponse])
def list_assets(service: AssetService = Depends(deps.get_asset_service)):
    return service.list_assets().unwrap()


@router.get("/{asset_id}", response_model=AssetResponse)
def get_asset(asset_id: int, service: AssetService = Depends(deps.get_asset_service)):
    return service.get_asset(asset_id).unwrap()


@router.patch("/{asset_id}", response_model=AssetResponse)
def update_asset(
    asset_id: int,
    payload: AssetUpdate,
    service: AssetService = Depends(deps.get_asset_service),
):
    """Update asset fields; only fields present in the body change."""
    return service.update_asset(asset_id, payload).unwrap()


@router.delete("/{asset_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_asset(
    asset_id: int,
    service: AssetService = Depends(deps.get_asset_service),
):
    service.delete_asset(asset_id).unwrap()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{asset_id}/calibration-history", response_model=List[CompletionRecordResponse])
def list_calibration_history(
    asset_id: int,
    service: CompletionService = Depends(deps.get_completion_service),
):
    return service.list_calibration_history(asset_id).unwrap()


@router.post(
    "/{asset_id}/calibration-history",
    response_model=CalibrationCompletionResult,
    status_code=status.HTTP_201_CREATED,
)
def log_calibration(
    asset_id: int,
    payload: CompletionCreate,
    service: CompletionService = Depends(deps.get_completion_service),
):
    """Log a calibration for one due date; re-logging the same date updates it."""
    return service.log_calibration_completion(
        asset_id,
        payload.due_date,
        payload.completed_at,
        payload.notes,
    ).unwrap()
