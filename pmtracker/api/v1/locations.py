"""
Location endpoints, including the location-scoped asset and PM collections.
"""
from typing import List

from fastapi import APIRouter, Depends, status

from pmtracker.api import deps
from pmtracker.schemas.asset import AssetCreate, AssetResponse
from pmtracker.schemas.location import LocationResponse
from pmtracker.schemas.preventative_maintenance import (
    PreventativeMaintenanceCreate,
    PreventativeMaintenanceResponse,
)
from pmtracker.services.facility import AssetService, LocationService
from pmtracker.services.maintenance import PreventativeMaintenanceService

router = APIRouter(prefix="/locations", tags=["Locations"])


@router.get("", response_model=List[LocationResponse])
def list_locations(service: LocationService = Depends(deps.get_location_service)):
    return service.list_locations().unwrap()


@router.get("/{location_id}/assets", response_model=List[AssetResponse])
def list_location_assets(
    location_id: int,
    service: AssetService = Depends(deps.get_asset_service),
):
    return service.list_for_location(location_id).unwrap()


@router.post(
    "/{location_id}/assets",
    response_model=AssetResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_location_asset(
    location_id: int,
    payload: AssetCreate,
    service: AssetService = Depends(deps.get_asset_service),
):
    return service.create_asset(location_id, payload).unwrap()


@router.get(
    "/{location_id}/preventative-maintenances",
    response_model=List[PreventativeMaintenanceResponse],
)
def list_location_pms(
    location_id: int,
    service: PreventativeMaintenanceService = Depends(deps.get_pm_service),
):
    return service.list_for_location(location_id).unwrap()


@router.post(
    "/{location_id}/preventative-maintenances",
    response_model=PreventativeMaintenanceResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_location_pm(
    location_id: int,
    payload: PreventativeMaintenanceCreate,
    service: PreventativeMaintenanceService = Depends(deps.get_pm_service),
):
    return service.create_pm(location_id, payload).unwrap()
