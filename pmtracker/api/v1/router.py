"""
API v1 Router - Main Entry Point
Aggregates all v1 API endpoints of the maintenance tracker.
"""
from fastapi import APIRouter

from pmtracker.api.v1 import assets, calendar, health, locations, preventative_maintenances, reports

router = APIRouter(
    responses={
        400: {"description": "Bad Request"},
        404: {"description": "Not Found"},
        422: {"description": "Validation Error"},
        500: {"description": "Internal Server Error"},
    }
)

router.include_router(health.router)
router.include_router(locations.router)
router.include_router(assets.router)
router.include_router(preventative_maintenances.router)
router.include_router(reports.router)
router.include_router(calendar.router)
