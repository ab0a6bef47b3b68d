"""
OrgChart Interchange API - Health Router
========================================
Health check endpoint.
"""

from fastapi import APIRouter, Depends
from datetime import datetime

from api.deps import get_import_settings
from api.schemas import HealthStatus
from api import __version__
from orgchart.config import ImportSettings

router = APIRouter(prefix="/api/v1", tags=["Health"])


@router.get("/health", response_model=HealthStatus)
def health_check(settings: ImportSettings = Depends(get_import_settings)):
    """
    Health check endpoint.

    Returns API status, version and the active match threshold.
    """
    return HealthStatus(
        status="ok",
        version=__version__,
        match_threshold=settings.match_threshold,
        timestamp=datetime.utcnow()
    )
