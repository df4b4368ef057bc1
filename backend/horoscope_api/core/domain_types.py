"""Domain Types — rich types for signs, record kinds, keys and stored records.

Invariants:
    - RecordKey.period is the exact date for DAILY and a Monday for WEEKLY
    - RecordFields.text is never None (absent content is "")
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType for SignId: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
    - Frozen dataclasses for keys: hashable, safe to share across awaits
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

SignId = NewType("SignId", int)   # 1–12

MIN_SIGN_ID: int = 1
MAX_SIGN_ID: int = 12


# ─── Enums ───────────────────────────────────────────────────────

class RecordKind(str, Enum):
    """Which logical record a request targets."""
    DAILY = "daily"
    WEEKLY = "weekly"

    @property
    def period_field(self) -> str:
        """Name of the period column/field for this kind."""
        return "horoscope_date" if self is RecordKind.DAILY else "week_start_date"

    @property
    def text_field(self) -> str:
        return f"{self.value}_horoscope"


class UpsertOutcome(str, Enum):
    """Informational result of an upsert."""
    CREATED = "created"
    UPDATED = "updated"


# ─── Value Objects ───────────────────────────────────────────────

@dataclass(frozen=True)
class RecordKey:
    """Canonical natural key of a stored record."""
    kind: RecordKind
    sign_id: SignId
    period: date


@dataclass(frozen=True)
class RecordFields:
    """Editable fields overwritten on every upsert."""
    sign_name: str
    symbol: str
    text: str = ""


@dataclass(frozen=True)
class HoroscopeRecord:
    """A stored daily or weekly horoscope as read back from a store."""
    kind: RecordKind
    sign_id: SignId
    period: date
    sign_name: str
    symbol: str
    text: str = ""

    def to_response(self) -> dict:
        """Uniform response shape: both text fields present regardless of kind."""
        return {
            "id": self.sign_id,
            "sign_name": self.sign_name,
            "symbol": self.symbol,
            "daily_horoscope": self.text if self.kind is RecordKind.DAILY else "",
            "weekly_horoscope": self.text if self.kind is RecordKind.WEEKLY else "",
            "horoscope_date": self.period.isoformat(),
        }
