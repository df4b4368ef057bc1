"""Mongo Horoscope Store — document-collection realization of HoroscopeStore.

Invariants:
    - Collections daily_horoscopes / weekly_horoscopes each carry a unique compound
      index on (sign_id, period field), created by ensure_indexes() at startup
    - Index names are the server defaults (sign_id_1_<period field>_1), so databases
      already indexed by earlier deployments accept ensure_indexes as a no-op
    - upsert is one update_one(filter, {$set, $setOnInsert}, upsert=True) per key
    - Dates stored as ISO YYYY-MM-DD strings; _id is never projected
    - All PyMongoError subclasses mapped to StoreError

Design Decisions:
    - Concurrent first-time upserts on one key can race to insert; the loser gets
      DuplicateKeyError and is re-issued once, which then lands as an update
    - Client lifecycle owned by the store (closed in the lifespan shutdown)
"""

import logging
from datetime import date, datetime, timezone

from pymongo import ASCENDING
from pymongo.errors import DuplicateKeyError, PyMongoError

from horoscope_api.core.domain_types import (
    HoroscopeRecord, RecordFields, RecordKey, RecordKind, SignId, UpsertOutcome,
)
from horoscope_api.core.errors import ErrorContext, StoreError

logger = logging.getLogger(__name__)

COLLECTIONS: dict[RecordKind, str] = {
    RecordKind.DAILY: "daily_horoscopes",
    RecordKind.WEEKLY: "weekly_horoscopes",
}


class MongoHoroscopeStore:
    """HoroscopeStore over two collections with unique compound indexes."""

    def __init__(self, client, database_name: str):
        self.client = client
        self.database = client[database_name]

    def _collection(self, kind: RecordKind):
        return self.database[COLLECTIONS[kind]]

    async def ensure_indexes(self) -> None:
        """Create the unique (sign_id, period) index on both collections."""
        try:
            for kind in RecordKind:
                await self._collection(kind).create_index(
                    [("sign_id", ASCENDING), (kind.period_field, ASCENDING)],
                    unique=True,
                )
        except PyMongoError as e:
            logger.error(f"Mongo index creation failed: {e}")
            raise StoreError("Index creation failed", "create_index")
        logger.info("Mongo indexes ensured")

    async def upsert(self, key: RecordKey, fields: RecordFields) -> UpsertOutcome:
        period = key.period.isoformat()
        now = datetime.now(timezone.utc)
        query = {"sign_id": key.sign_id, key.kind.period_field: period}
        update = {
            "$set": {
                "sign_name": fields.sign_name,
                "symbol": fields.symbol,
                key.kind.text_field: fields.text,
                key.kind.period_field: period,
                "updated_at": now,
            },
            "$setOnInsert": {"created_at": now},
        }
        collection = self._collection(key.kind)
        try:
            try:
                result = await collection.update_one(query, update, upsert=True)
            except DuplicateKeyError:
                result = await collection.update_one(query, update, upsert=True)
        except PyMongoError as e:
            logger.error(
                f"Mongo upsert failed: {e}",
                extra={"sign_id": key.sign_id, "kind": key.kind.value, "period": period},
            )
            raise StoreError(
                "Database write failed", "upsert",
                ErrorContext(sign_id=key.sign_id, kind=key.kind.value, period=period),
            )

        outcome = (
            UpsertOutcome.CREATED if result.upserted_id is not None
            else UpsertOutcome.UPDATED
        )
        logger.info(
            f"Upserted {key.kind.value} horoscope",
            extra={
                "sign_id": key.sign_id, "kind": key.kind.value,
                "period": period, "outcome": outcome.value,
            },
        )
        return outcome

    async def get(self, key: RecordKey) -> HoroscopeRecord | None:
        query = {"sign_id": key.sign_id, key.kind.period_field: key.period.isoformat()}
        try:
            doc = await self._collection(key.kind).find_one(
                query, projection={"_id": 0},
            )
        except PyMongoError as e:
            logger.error(f"Mongo fetch failed: {e}")
            raise StoreError("Database fetch failed", "find_one")
        return _to_record(key.kind, doc) if doc else None

    async def list_by_period(
        self, kind: RecordKind, period: date,
    ) -> list[HoroscopeRecord]:
        try:
            cursor = self._collection(kind).find(
                {kind.period_field: period.isoformat()}, projection={"_id": 0},
            ).sort("sign_id", ASCENDING)
            docs = await cursor.to_list(length=None)
        except PyMongoError as e:
            logger.error(f"Mongo fetch all failed: {e}")
            raise StoreError("Database fetch failed", "find")
        return [_to_record(kind, doc) for doc in docs]

    async def ping(self) -> bool:
        try:
            await self.database.command("ping")
            return True
        except PyMongoError as e:
            logger.error(f"Mongo health check failed: {e}")
            return False

    async def close(self) -> None:
        await self.client.close()


def _to_record(kind: RecordKind, doc: dict) -> HoroscopeRecord:
    return HoroscopeRecord(
        kind=kind,
        sign_id=SignId(doc["sign_id"]),
        period=date.fromisoformat(doc[kind.period_field]),
        sign_name=doc.get("sign_name", ""),
        symbol=doc.get("symbol", ""),
        text=doc.get(kind.text_field) or "",
    )
