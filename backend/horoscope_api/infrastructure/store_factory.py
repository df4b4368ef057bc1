"""Store Factory — selects and prepares the HoroscopeStore once at startup.

Invariants:
    - The service never branches on backend type; only this module does
    - The returned store is connected/initialized before the first request
"""

import logging

from pymongo import AsyncMongoClient

from horoscope_api.config import Settings
from horoscope_api.core.repository_protocols import HoroscopeStore
from horoscope_api.infrastructure.database import DatabaseSessionManager
from horoscope_api.infrastructure.mongo_store import MongoHoroscopeStore
from horoscope_api.infrastructure.sql_store import SqlHoroscopeStore

logger = logging.getLogger(__name__)


async def build_store(settings: Settings) -> HoroscopeStore:
    """Build the configured backend (schema for SQL comes from alembic)."""
    if settings.store_backend == "mongo":
        client = AsyncMongoClient(settings.mongodb_url, tz_aware=True)
        store = MongoHoroscopeStore(client, settings.mongodb_database)
        await store.ensure_indexes()
        logger.info(f"Using mongo store (database={settings.mongodb_database})")
        return store

    db = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info(f"Using SQL store (dialect={db.dialect_name})")
    return SqlHoroscopeStore(db)
