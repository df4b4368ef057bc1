"""Horoscope Service — submit routing, partial failures, and uniform reads.

Invariants:
    - Only kinds with non-empty text are written
    - Weekly submissions within one week hit the same record
    - One failing kind is reported next to the other kind's success
    - Missing dates resolve through the injected today()
"""

from datetime import date

import pytest

from horoscope_api.core.domain_types import RecordKey, RecordKind, SignId
from horoscope_api.core.errors import PartialWriteError, RecordNotFoundError, StoreError
from horoscope_api.schemas.horoscope import HoroscopeSubmit
from horoscope_api.services.horoscope_service import HoroscopeService
from tests.services.fake_stores import FailingKindStore


def _submit(**overrides) -> HoroscopeSubmit:
    body = {
        "sign_id": 1,
        "sign_name": "Aries",
        "symbol": "♈",
        "horoscope_date": "2024-06-12",
    }
    body.update(overrides)
    return HoroscopeSubmit(**body)


# ─── submit ──────────────────────────────────────────────────────

async def test_submit_daily_only(service, sql_store):
    result = await service.submit(_submit(daily_horoscope="Good day"))

    assert result["message"] == "Horoscope(s) inserted/updated successfully"
    assert set(result["results"]) == {"daily"}
    assert result["results"]["daily"]["outcome"] == "created"
    assert result["results"]["daily"]["period"] == "2024-06-12"
    weekly_key = RecordKey(RecordKind.WEEKLY, SignId(1), date(2024, 6, 10))
    assert await sql_store.get(weekly_key) is None


async def test_submit_weekly_keyed_by_monday(service):
    result = await service.submit(_submit(weekly_horoscope="Good week"))
    assert set(result["results"]) == {"weekly"}
    assert result["results"]["weekly"]["period"] == "2024-06-10"


async def test_submit_both_kinds(service):
    result = await service.submit(
        _submit(daily_horoscope="Good day", weekly_horoscope="Good week"),
    )
    assert set(result["results"]) == {"daily", "weekly"}


async def test_submit_without_text_writes_nothing(service, sql_store):
    result = await service.submit(_submit())
    assert result == {"message": "Horoscope(s) inserted/updated successfully", "results": {}}
    assert await sql_store.list_by_period(RecordKind.DAILY, date(2024, 6, 12)) == []
    assert await sql_store.list_by_period(RecordKind.WEEKLY, date(2024, 6, 10)) == []


async def test_submit_same_content_twice_is_idempotent(service, sql_store):
    await service.submit(_submit(daily_horoscope="first"))
    second = await service.submit(_submit(daily_horoscope="second", sign_name="Ram"))

    assert second["results"]["daily"]["outcome"] == "updated"
    records = await sql_store.list_by_period(RecordKind.DAILY, date(2024, 6, 12))
    assert len(records) == 1
    assert records[0].text == "second"
    assert records[0].sign_name == "Ram"


async def test_two_dates_same_week_share_weekly_record(service, sql_store):
    await service.submit(_submit(weekly_horoscope="from wednesday"))
    await service.submit(_submit(
        weekly_horoscope="from sunday", symbol="A", horoscope_date="2024-06-16",
    ))

    records = await sql_store.list_by_period(RecordKind.WEEKLY, date(2024, 6, 10))
    assert len(records) == 1
    assert records[0].text == "from sunday"
    assert records[0].symbol == "A"


async def test_partial_failure_reports_each_kind(sql_store):
    store = FailingKindStore(sql_store, {RecordKind.WEEKLY})
    service = HoroscopeService(store, lambda: date(2024, 6, 12))

    with pytest.raises(PartialWriteError) as exc:
        await service.submit(_submit(daily_horoscope="Good day", weekly_horoscope="Good week"))

    results = exc.value.results
    assert results["daily"]["outcome"] == "created"
    assert results["weekly"]["error"]["code"] == "STORE_ERROR"
    assert exc.value.failed == ["weekly"]
    daily_key = RecordKey(RecordKind.DAILY, SignId(1), date(2024, 6, 12))
    assert (await sql_store.get(daily_key)).text == "Good day"


async def test_total_failure_raises_store_error(sql_store):
    store = FailingKindStore(sql_store, {RecordKind.DAILY, RecordKind.WEEKLY})
    service = HoroscopeService(store, lambda: date(2024, 6, 12))

    with pytest.raises(StoreError) as exc:
        await service.submit(_submit(daily_horoscope="Good day", weekly_horoscope="Good week"))
    assert not isinstance(exc.value, PartialWriteError)


# ─── fetch_one / fetch_all ───────────────────────────────────────

async def test_fetch_one_daily(service):
    await service.submit(_submit(daily_horoscope="Good day"))
    assert await service.fetch_one(1, date(2024, 6, 12), RecordKind.DAILY) == {
        "id": 1,
        "sign_name": "Aries",
        "symbol": "♈",
        "daily_horoscope": "Good day",
        "weekly_horoscope": "",
        "horoscope_date": "2024-06-12",
    }


async def test_fetch_one_weekly_from_any_day_of_week(service):
    await service.submit(_submit(weekly_horoscope="Good week"))
    result = await service.fetch_one(1, date(2024, 6, 14), RecordKind.WEEKLY)
    assert result["weekly_horoscope"] == "Good week"
    assert result["horoscope_date"] == "2024-06-10"


async def test_fetch_one_missing_raises_not_found(service):
    with pytest.raises(RecordNotFoundError):
        await service.fetch_one(4, date(2024, 6, 12), RecordKind.DAILY)


async def test_fetch_one_defaults_to_today(service):
    await service.submit(_submit(daily_horoscope="Today"))
    result = await service.fetch_one(1, None, RecordKind.DAILY)
    assert result["horoscope_date"] == "2024-06-12"


async def test_fetch_all_empty(service):
    assert await service.fetch_all(date(2030, 1, 1), RecordKind.DAILY) == []


async def test_fetch_all_weekly_defaults_to_this_week(service):
    await service.submit(_submit(sign_id=2, sign_name="Taurus", symbol="♉", weekly_horoscope="w2"))
    await service.submit(_submit(weekly_horoscope="w1"))

    results = await service.fetch_all(None, RecordKind.WEEKLY)
    assert [r["id"] for r in results] == [1, 2]
    assert all(r["horoscope_date"] == "2024-06-10" for r in results)
