"""Service test fixtures — async SQLite store, fake Mongo store, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database with both tables
    - get_store/get_service dependencies overridden; the lifespan never runs
    - "today" pinned to FIXED_TODAY (Wednesday 2024-06-12) for default-date requests

Design Decisions:
    - SQLite in-memory: fast, no external dependency, supports ON CONFLICT ... RETURNING
    - Mongo backend exercised through tests/services/mock_mongo.py, no server needed
"""

from datetime import date

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine

from horoscope_api.api.dependencies import get_service, get_store
from horoscope_api.db.base import Base
from horoscope_api.infrastructure.database import DatabaseSessionManager
from horoscope_api.infrastructure.mongo_store import MongoHoroscopeStore
from horoscope_api.infrastructure.sql_store import SqlHoroscopeStore
from horoscope_api.main import app
from horoscope_api.models import DailyHoroscope, WeeklyHoroscope  # noqa: F401
from horoscope_api.services.horoscope_service import HoroscopeService
from tests.services.mock_mongo import FakeMongoClient

FIXED_TODAY = date(2024, 6, 12)


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def sql_store(test_engine):
    return SqlHoroscopeStore(DatabaseSessionManager.from_engine(test_engine))


@pytest.fixture
def mongo_client():
    return FakeMongoClient()


@pytest.fixture
async def mongo_store(mongo_client):
    store = MongoHoroscopeStore(mongo_client, "astrologer")
    await store.ensure_indexes()
    return store


@pytest.fixture
def service(sql_store):
    return HoroscopeService(sql_store, lambda: FIXED_TODAY)


@pytest.fixture
async def client(sql_store):
    """FastAPI test client backed by the SQLite store."""
    app.dependency_overrides[get_store] = lambda: sql_store
    app.dependency_overrides[get_service] = (
        lambda: HoroscopeService(sql_store, lambda: FIXED_TODAY)
    )

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
