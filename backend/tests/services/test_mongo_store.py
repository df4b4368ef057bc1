"""Mongo Store — document-backend upsert semantics against the in-memory client.

Invariants:
    - ensure_indexes creates one unique (sign_id, period) index per collection,
      under the server default name, and is a no-op when it already exists
    - Upserts keyed by ISO date strings; upserted_id decides CREATED vs UPDATED
    - created_at set only on insert, overwritten fields on every upsert
    - _id never leaks out of reads; PyMongoError becomes StoreError
    - A duplicate-key race on upsert is re-issued once
"""

import asyncio
from datetime import date

import pytest
from pymongo.errors import AutoReconnect

from horoscope_api.core.domain_types import (
    RecordFields, RecordKey, RecordKind, SignId, UpsertOutcome,
)
from horoscope_api.core.errors import StoreError
from horoscope_api.infrastructure.mongo_store import MongoHoroscopeStore

DAILY_KEY = RecordKey(RecordKind.DAILY, SignId(1), date(2024, 6, 12))
WEEKLY_KEY = RecordKey(RecordKind.WEEKLY, SignId(1), date(2024, 6, 10))


def _collection(mongo_client, name):
    return mongo_client["astrologer"][name]


async def test_ensure_indexes_creates_unique_compound_indexes(mongo_store, mongo_client):
    daily = _collection(mongo_client, "daily_horoscopes")
    weekly = _collection(mongo_client, "weekly_horoscopes")
    assert daily.indexes[0]["keys"] == [("sign_id", 1), ("horoscope_date", 1)]
    assert weekly.indexes[0]["keys"] == [("sign_id", 1), ("week_start_date", 1)]
    assert daily.indexes[0]["unique"] and weekly.indexes[0]["unique"]


async def test_upsert_creates_then_updates(mongo_store, mongo_client):
    first = await mongo_store.upsert(DAILY_KEY, RecordFields("Aries", "♈", "Good day"))
    second = await mongo_store.upsert(DAILY_KEY, RecordFields("Aries", "♈", "Great day"))

    assert first is UpsertOutcome.CREATED
    assert second is UpsertOutcome.UPDATED
    docs = _collection(mongo_client, "daily_horoscopes").docs
    assert len(docs) == 1
    assert docs[0]["daily_horoscope"] == "Great day"
    assert docs[0]["horoscope_date"] == "2024-06-12"


async def test_created_at_kept_on_update(mongo_store, mongo_client):
    await mongo_store.upsert(WEEKLY_KEY, RecordFields("Aries", "♈", "v1"))
    doc = _collection(mongo_client, "weekly_horoscopes").docs[0]
    created_at = doc["created_at"]

    await mongo_store.upsert(WEEKLY_KEY, RecordFields("Aries", "♈", "v2"))
    assert doc["created_at"] == created_at
    assert doc["updated_at"] >= created_at


async def test_get_hides_object_id(mongo_store):
    await mongo_store.upsert(WEEKLY_KEY, RecordFields("Aries", "♈", "Good week"))
    record = await mongo_store.get(WEEKLY_KEY)
    assert record.to_response() == {
        "id": 1,
        "sign_name": "Aries",
        "symbol": "♈",
        "daily_horoscope": "",
        "weekly_horoscope": "Good week",
        "horoscope_date": "2024-06-10",
    }


async def test_get_missing_returns_none(mongo_store):
    assert await mongo_store.get(DAILY_KEY) is None


async def test_list_by_period_sorted(mongo_store):
    for sign_id in (9, 3, 5):
        key = RecordKey(RecordKind.WEEKLY, SignId(sign_id), date(2024, 6, 10))
        await mongo_store.upsert(key, RecordFields(f"Sign {sign_id}", "*", "week"))
    records = await mongo_store.list_by_period(RecordKind.WEEKLY, date(2024, 6, 10))
    assert [r.sign_id for r in records] == [3, 5, 9]


async def test_list_by_period_empty(mongo_store):
    assert await mongo_store.list_by_period(RecordKind.DAILY, date(2024, 6, 12)) == []


async def test_duplicate_key_race_retried_once(mongo_store, mongo_client):
    collection = _collection(mongo_client, "daily_horoscopes")
    collection.duplicate_on_next_upsert = True

    outcome = await mongo_store.upsert(DAILY_KEY, RecordFields("Aries", "♈", "Good day"))

    assert outcome is UpsertOutcome.CREATED
    assert collection.update_calls == 2
    assert len(collection.docs) == 1


async def test_driver_error_becomes_store_error(mongo_store, mongo_client):
    _collection(mongo_client, "daily_horoscopes").fail_with = AutoReconnect("connection reset")

    with pytest.raises(StoreError) as exc:
        await mongo_store.upsert(DAILY_KEY, RecordFields("Aries", "♈", "Good day"))
    assert "connection reset" not in exc.value.message
    assert exc.value.context.kind == "daily"

    with pytest.raises(StoreError):
        await mongo_store.get(DAILY_KEY)
    with pytest.raises(StoreError):
        await mongo_store.list_by_period(RecordKind.DAILY, date(2024, 6, 12))


async def test_ping_and_close(mongo_store, mongo_client):
    assert await mongo_store.ping() is True
    mongo_client["astrologer"].ping_fails = True
    assert await mongo_store.ping() is False

    await mongo_store.close()
    assert mongo_client.closed


async def test_indexes_use_server_default_names(mongo_store, mongo_client):
    daily = _collection(mongo_client, "daily_horoscopes")
    weekly = _collection(mongo_client, "weekly_horoscopes")
    assert daily.indexes[0]["name"] == "sign_id_1_horoscope_date_1"
    assert weekly.indexes[0]["name"] == "sign_id_1_week_start_date_1"


async def test_ensure_indexes_accepts_existing_default_indexes(mongo_client):
    existing = _collection(mongo_client, "daily_horoscopes")
    await existing.create_index(
        [("sign_id", 1), ("horoscope_date", 1)], unique=True,
    )
    store = MongoHoroscopeStore(mongo_client, "astrologer")

    await store.ensure_indexes()
    await store.ensure_indexes()

    assert len(existing.indexes) == 1
    assert len(_collection(mongo_client, "weekly_horoscopes").indexes) == 1


async def test_ensure_indexes_conflict_is_store_error(mongo_client):
    await _collection(mongo_client, "daily_horoscopes").create_index(
        [("sign_id", 1), ("horoscope_date", 1)], unique=True, name="legacy_sign_date",
    )
    store = MongoHoroscopeStore(mongo_client, "astrologer")
    with pytest.raises(StoreError) as exc:
        await store.ensure_indexes()
    assert exc.value.operation == "create_index"


async def test_concurrent_upserts_leave_one_consistent_document(mongo_store, mongo_client):
    writers = range(10)
    outcomes = await asyncio.gather(*(
        mongo_store.upsert(DAILY_KEY, RecordFields(f"name-{i}", f"sym-{i}", f"text-{i}"))
        for i in writers
    ))

    assert outcomes.count(UpsertOutcome.CREATED) == 1
    assert outcomes.count(UpsertOutcome.UPDATED) == len(writers) - 1
    docs = _collection(mongo_client, "daily_horoscopes").docs
    assert len(docs) == 1
    winner = docs[0]["daily_horoscope"].removeprefix("text-")
    assert docs[0]["sign_name"] == f"name-{winner}"
    assert docs[0]["symbol"] == f"sym-{winner}"
