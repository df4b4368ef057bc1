"""Boundary Protocols — contract between the service and the persistence shell.

Invariants:
    - Core NEVER imports from infrastructure — dependency arrows point inward only
    - upsert is a single native conflict-resolving write per key (never read-then-write)
    - list_by_period returns records sorted by sign_id ascending, [] when none match

Design Decisions:
    - Protocol over ABC: structural subtyping, the SQL and document stores share
      no base class
    - Async in Protocol: implementations do IO, the resolver that builds keys does not
"""

from datetime import date
from typing import Protocol

from horoscope_api.core.domain_types import (
    HoroscopeRecord, RecordFields, RecordKey, RecordKind, UpsertOutcome,
)


class HoroscopeStore(Protocol):
    """Contract for daily/weekly horoscope persistence — implemented by shell."""
    async def upsert(self, key: RecordKey, fields: RecordFields) -> UpsertOutcome: ...
    async def get(self, key: RecordKey) -> HoroscopeRecord | None: ...
    async def list_by_period(
        self, kind: RecordKind, period: date,
    ) -> list[HoroscopeRecord]: ...
    async def ping(self) -> bool: ...
    async def close(self) -> None: ...
