"""Record Key Resolution — maps (kind, sign, date) to the canonical record key.

Invariants:
    - DAILY keys keep the date unchanged; WEEKLY keys use week_start(date)
    - Same inputs always yield the same key (pure, no IO)
    - parse_kind returns WEEKLY only for the exact string "weekly"
"""

from datetime import date

from horoscope_api.core.dates import week_start
from horoscope_api.core.domain_types import RecordKey, RecordKind, SignId


def resolve_period(kind: RecordKind, d: date) -> date:
    """Period value used to key and list records of this kind."""
    if kind is RecordKind.WEEKLY:
        return week_start(d)
    return d


def resolve_key(kind: RecordKind, sign_id: SignId, d: date) -> RecordKey:
    return RecordKey(kind=kind, sign_id=sign_id, period=resolve_period(kind, d))


def parse_kind(raw: str | None) -> RecordKind:
    """Interpret the `type` query parameter; anything but "weekly" is daily."""
    if raw == RecordKind.WEEKLY.value:
        return RecordKind.WEEKLY
    return RecordKind.DAILY
