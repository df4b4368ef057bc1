"""Horoscope Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - HoroscopeSubmit.sign_id is an integer in 1–12 (booleans rejected, numeric strings coerced)
    - sign_name and symbol stripped and non-empty, no length cap (stored as TEXT)
    - horoscope_date is a strict YYYY-MM-DD calendar date
    - Missing or null horoscope texts normalize to "" (never None past this boundary)

Design Decisions:
    - Validation here runs before the service: a bad body never reaches the store
    - horoscope_date parsed by core.dates.parse_iso_date so body and query share one rule
"""

from datetime import date

from pydantic import BaseModel, Field, field_validator

from horoscope_api.core.dates import parse_iso_date
from horoscope_api.core.domain_types import MAX_SIGN_ID, MIN_SIGN_ID
from horoscope_api.core.errors import InputValidationError


class HoroscopeSubmit(BaseModel):
    """POST /api/horoscopes body — upserts whichever kinds carry text."""
    sign_id: int = Field(ge=MIN_SIGN_ID, le=MAX_SIGN_ID)
    sign_name: str = Field(min_length=1)
    symbol: str = Field(min_length=1)
    daily_horoscope: str = ""
    weekly_horoscope: str = ""
    horoscope_date: date

    @field_validator("sign_id", mode="before")
    @classmethod
    def reject_bool(cls, v):
        # lax int mode would read JSON true/false as 1/0
        if isinstance(v, bool):
            raise ValueError("sign_id must be an integer, not a boolean")
        return v

    @field_validator("sign_name", "symbol", mode="before")
    @classmethod
    def strip_required(cls, v):
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError("cannot be empty or whitespace")
        return v

    @field_validator("daily_horoscope", "weekly_horoscope", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        return "" if v is None else v

    @field_validator("horoscope_date", mode="before")
    @classmethod
    def parse_date(cls, v):
        try:
            return parse_iso_date(v, "horoscope_date")
        except InputValidationError as e:
            raise ValueError(e.message)


class KindResult(BaseModel):
    """Per-kind upsert outcome inside SubmitResponse.results."""
    message: str
    outcome: str
    period: str


class SubmitResponse(BaseModel):
    message: str
    results: dict[str, KindResult]


class HoroscopeResponse(BaseModel):
    """Uniform record shape for daily and weekly reads."""
    id: int
    sign_name: str
    symbol: str
    daily_horoscope: str
    weekly_horoscope: str
    horoscope_date: str
