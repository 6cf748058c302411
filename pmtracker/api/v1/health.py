"""
Health check endpoint.
"""
from fastapi import APIRouter

from pmtracker.config.settings import settings

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check():
    """Liveness probe."""
    return {
        "status": "ok",
        "service": settings.APP_NAME,
        "version": settings.API_VERSION,
        "environment": settings.ENVIRONMENT,
    }
