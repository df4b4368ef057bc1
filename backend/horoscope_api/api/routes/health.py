"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /api/health/ always returns 200 if process is up (liveness)
    - GET /api/health/ready returns 503 if the store does not answer a ping (readiness)
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from horoscope_api.api.dependencies import get_store
from horoscope_api.config import Settings, get_settings
from horoscope_api.core.repository_protocols import HoroscopeStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {"status": "healthy", "service": "horoscope-api", "version": "1.0.0"}


@router.get("/ready")
async def readiness_check(
    store: HoroscopeStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """Readiness probe — includes store connectivity."""
    if not await store.ping():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "store_unavailable"},
        )
    return {"status": "ready", "checks": {settings.store_backend: "healthy"}}
