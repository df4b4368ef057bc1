"""Request Dependencies — hand the startup-built store and a per-request service to routes.

Invariants:
    - The store is created once in the lifespan and read from app.state, never built here
    - HoroscopeService is constructed per request (stateless)

Design Decisions:
    - Dependencies over module globals: tests swap the store via dependency_overrides
"""

from fastapi import Depends, Request

from horoscope_api.config import Settings, get_settings
from horoscope_api.core.dates import today_in
from horoscope_api.core.repository_protocols import HoroscopeStore
from horoscope_api.services.horoscope_service import HoroscopeService


def get_store(request: Request) -> HoroscopeStore:
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise RuntimeError("Horoscope store not initialized")
    return store


def get_service(
    store: HoroscopeStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> HoroscopeService:
    return HoroscopeService(store, lambda: today_in(settings.default_timezone))
