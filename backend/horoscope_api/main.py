"""Horoscope API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map HoroscopeError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Store built on startup and closed on shutdown via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Store kept on app.state and injected through api/dependencies.py
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from horoscope_api.api.error_handlers import register_error_handlers
from horoscope_api.api.routes import health, horoscopes
from horoscope_api.config import get_settings
from horoscope_api.infrastructure.observability import setup_logging
from horoscope_api.infrastructure.store_factory import build_store

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.store = await build_store(settings)
    logger.info("Horoscope API started")
    yield
    await app.state.store.close()
    logger.info("Horoscope API shutting down")


app = FastAPI(
    title="Horoscope API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
)

app.include_router(health.router)
app.include_router(horoscopes.router)

register_error_handlers(app)
