"""SQL Horoscope Store — relational realization of HoroscopeStore.

Invariants:
    - upsert is ONE statement: INSERT ... ON CONFLICT (sign_id, period) DO UPDATE
      ... RETURNING revision, committed on its own (daily and weekly never share a
      transaction)
    - revision == 1 after the statement means the row was created, otherwise updated
    - list_by_period orders by sign_id ascending

Design Decisions:
    - Dialect-specific insert constructs (postgresql, sqlite) both expose
      on_conflict_do_update; other dialects are rejected at construction
    - One table per RecordKind, described by _KindTable so query code is shared
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

from horoscope_api.core.domain_types import (
    HoroscopeRecord, RecordFields, RecordKey, RecordKind, SignId, UpsertOutcome,
)
from horoscope_api.infrastructure.database import DatabaseSessionManager
from horoscope_api.models import DailyHoroscope, WeeklyHoroscope

logger = logging.getLogger(__name__)

_INSERT_BY_DIALECT = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


@dataclass(frozen=True)
class _KindTable:
    model: type
    period_column: str
    text_column: str


_TABLES: dict[RecordKind, _KindTable] = {
    RecordKind.DAILY: _KindTable(DailyHoroscope, "horoscope_date", "daily_horoscope"),
    RecordKind.WEEKLY: _KindTable(WeeklyHoroscope, "week_start_date", "weekly_horoscope"),
}


class SqlHoroscopeStore:
    """HoroscopeStore over two tables with composite unique keys."""

    def __init__(self, db: DatabaseSessionManager):
        insert_fn = _INSERT_BY_DIALECT.get(db.dialect_name)
        if insert_fn is None:
            raise ValueError(
                f"SQL dialect '{db.dialect_name}' has no supported upsert "
                f"(use one of: {', '.join(sorted(_INSERT_BY_DIALECT))})"
            )
        self.db = db
        self._insert = insert_fn

    async def upsert(self, key: RecordKey, fields: RecordFields) -> UpsertOutcome:
        table = _TABLES[key.kind]
        model = table.model
        now = datetime.now(timezone.utc)
        stmt = self._insert(model).values(
            sign_id=key.sign_id,
            sign_name=fields.sign_name,
            symbol=fields.symbol,
            revision=1,
            created_at=now,
            updated_at=now,
            **{table.period_column: key.period, table.text_column: fields.text},
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[model.sign_id, getattr(model, table.period_column)],
            set_={
                "sign_name": stmt.excluded.sign_name,
                "symbol": stmt.excluded.symbol,
                table.text_column: getattr(stmt.excluded, table.text_column),
                "revision": model.revision + 1,
                "updated_at": stmt.excluded.updated_at,
            },
        ).returning(model.revision)

        async with self.db.session() as session:
            revision = (await session.execute(stmt)).scalar_one()
            await session.commit()

        outcome = UpsertOutcome.CREATED if revision == 1 else UpsertOutcome.UPDATED
        logger.info(
            f"Upserted {key.kind.value} horoscope",
            extra={
                "sign_id": key.sign_id, "kind": key.kind.value,
                "period": key.period.isoformat(), "outcome": outcome.value,
            },
        )
        return outcome

    async def get(self, key: RecordKey) -> HoroscopeRecord | None:
        table = _TABLES[key.kind]
        model = table.model
        query = (
            select(model)
            .where(model.sign_id == key.sign_id)
            .where(getattr(model, table.period_column) == key.period)
        )
        async with self.db.session() as session:
            row = (await session.execute(query)).scalar_one_or_none()
        return _to_record(key.kind, row) if row else None

    async def list_by_period(
        self, kind: RecordKind, period: date,
    ) -> list[HoroscopeRecord]:
        table = _TABLES[kind]
        model = table.model
        query = (
            select(model)
            .where(getattr(model, table.period_column) == period)
            .order_by(model.sign_id.asc())
        )
        async with self.db.session() as session:
            rows = (await session.execute(query)).scalars().all()
        return [_to_record(kind, row) for row in rows]

    async def ping(self) -> bool:
        return await self.db.health_check()

    async def close(self) -> None:
        await self.db.dispose()


def _to_record(kind: RecordKind, row) -> HoroscopeRecord:
    table = _TABLES[kind]
    return HoroscopeRecord(
        kind=kind,
        sign_id=SignId(row.sign_id),
        period=getattr(row, table.period_column),
        sign_name=row.sign_name,
        symbol=row.symbol,
        text=getattr(row, table.text_column) or "",
    )
