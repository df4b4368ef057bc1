"""Horoscope Routes — submit and read daily/weekly horoscopes.

Invariants:
    - Body validated by HoroscopeSubmit before the service runs (400 on failure)
    - sign_id path parameter must be an integer 1–12 (400 otherwise)
    - ?date= must be YYYY-MM-DD when present; absent means today in settings.default_timezone
    - ?type= selects weekly only when exactly "weekly"

Design Decisions:
    - Paths and payload shapes kept compatible with existing mobile/web clients
    - Errors raised as HoroscopeError subclasses; api/error_handlers.py renders them
"""

import logging

from fastapi import APIRouter, Depends, Path, Query

from horoscope_api.api.dependencies import get_service
from horoscope_api.core.dates import parse_iso_date
from horoscope_api.core.domain_types import MAX_SIGN_ID, MIN_SIGN_ID
from horoscope_api.core.resolve_key import parse_kind
from horoscope_api.schemas.horoscope import (
    HoroscopeResponse, HoroscopeSubmit, SubmitResponse,
)
from horoscope_api.services.horoscope_service import HoroscopeService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/horoscopes", tags=["horoscopes"])


@router.post("", response_model=SubmitResponse)
async def submit_horoscope(
    body: HoroscopeSubmit, service: HoroscopeService = Depends(get_service),
):
    """Insert or update the daily and/or weekly horoscope for a sign."""
    return await service.submit(body)


@router.get("/{sign_id}", response_model=HoroscopeResponse)
async def get_horoscope(
    sign_id: int = Path(ge=MIN_SIGN_ID, le=MAX_SIGN_ID),
    date: str | None = Query(None, description="YYYY-MM-DD, defaults to today"),
    kind: str | None = Query(None, alias="type"),
    service: HoroscopeService = Depends(get_service),
):
    """Fetch one sign's daily or weekly horoscope."""
    on_date = parse_iso_date(date) if date else None
    return await service.fetch_one(sign_id, on_date, parse_kind(kind))


@router.get("", response_model=list[HoroscopeResponse])
async def list_horoscopes(
    date: str | None = Query(None, description="YYYY-MM-DD, defaults to today"),
    kind: str | None = Query(None, alias="type"),
    service: HoroscopeService = Depends(get_service),
):
    """Fetch every sign's horoscope for a date or week, sign_id ascending."""
    on_date = parse_iso_date(date) if date else None
    return await service.fetch_all(on_date, parse_kind(kind))
