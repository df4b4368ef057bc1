"""Horoscope Service — submit, fetch-one, and fetch-all over an injected HoroscopeStore.

Invariants:
    - Stateless: holds only the injected store and "today" provider, no cached records
    - submit writes DAILY only when daily text is non-empty, WEEKLY only when weekly
      text is non-empty; each kind is an independent upsert
    - A failure in one kind never hides the other kind's outcome (PartialWriteError)
    - Reads always return the uniform shape (both text fields, "" for the other kind)

Design Decisions:
    - Missing dates resolved through the injected today() so the zone is fixed by
      settings, not by the host clock
    - Backend choice never visible here; the store is a Protocol
"""

import logging
from datetime import date
from typing import Callable

from horoscope_api.core.domain_types import RecordFields, RecordKind, SignId
from horoscope_api.core.errors import (
    PartialWriteError, RecordNotFoundError, StoreError,
)
from horoscope_api.core.repository_protocols import HoroscopeStore
from horoscope_api.core.resolve_key import resolve_key, resolve_period
from horoscope_api.schemas.horoscope import HoroscopeSubmit

logger = logging.getLogger(__name__)

SUBMIT_MESSAGE = "Horoscope(s) inserted/updated successfully"


class HoroscopeService:
    """Routes requests to the daily or weekly record and shapes responses."""

    def __init__(self, store: HoroscopeStore, today: Callable[[], date]):
        self.store = store
        self.today = today

    async def submit(self, body: HoroscopeSubmit) -> dict:
        """Upsert whichever kinds carry text; returns per-kind outcomes."""
        texts = {
            RecordKind.DAILY: body.daily_horoscope,
            RecordKind.WEEKLY: body.weekly_horoscope,
        }
        results: dict[str, dict] = {}
        failures: list[StoreError] = []

        for kind, text in texts.items():
            if not text:
                continue
            key = resolve_key(kind, SignId(body.sign_id), body.horoscope_date)
            fields = RecordFields(
                sign_name=body.sign_name, symbol=body.symbol, text=text,
            )
            try:
                outcome = await self.store.upsert(key, fields)
            except StoreError as e:
                failures.append(e)
                results[kind.value] = {"error": e.to_response()["error"]}
                continue
            results[kind.value] = {
                "message": f"{kind.value.capitalize()} horoscope inserted/updated successfully",
                "outcome": outcome.value,
                "period": key.period.isoformat(),
            }

        if failures:
            if len(failures) == len(results):
                raise failures[0]
            failed = [k for k, r in results.items() if "error" in r]
            raise PartialWriteError(failed, results)

        if not results:
            logger.info(
                "Submit carried no horoscope text; nothing written",
                extra={"sign_id": body.sign_id},
            )
        return {"message": SUBMIT_MESSAGE, "results": results}

    async def fetch_one(
        self, sign_id: int, on_date: date | None, kind: RecordKind,
    ) -> dict:
        key = resolve_key(kind, SignId(sign_id), on_date or self.today())
        record = await self.store.get(key)
        if record is None:
            raise RecordNotFoundError(kind.value, sign_id, key.period.isoformat())
        return record.to_response()

    async def fetch_all(self, on_date: date | None, kind: RecordKind) -> list[dict]:
        period = resolve_period(kind, on_date or self.today())
        records = await self.store.list_by_period(kind, period)
        return [record.to_response() for record in records]
