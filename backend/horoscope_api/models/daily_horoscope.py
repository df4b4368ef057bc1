"""DailyHoroscope ORM — one sign's horoscope text for one calendar date.

Invariants:
    - (sign_id, horoscope_date) is unique (uq_daily_horoscopes_sign_date)
    - daily_horoscope is non-nullable; absent content is ""
    - revision is 1 on insert and incremented by every conflicting upsert

Design Decisions:
    - Surrogate integer id plus natural unique key: the upsert targets the natural key
    - revision lets one INSERT ... ON CONFLICT ... RETURNING report created vs. updated
"""

from datetime import date, datetime, timezone

from sqlalchemy import Date, DateTime, Integer, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from horoscope_api.db.base import Base


class DailyHoroscope(Base):
    """Daily record keyed by (sign_id, horoscope_date)."""
    __tablename__ = "daily_horoscopes"
    __table_args__ = (
        UniqueConstraint(
            "sign_id", "horoscope_date", name="uq_daily_horoscopes_sign_date",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    sign_id: Mapped[int] = mapped_column(Integer, nullable=False)
    sign_name: Mapped[str] = mapped_column(Text, nullable=False)
    symbol: Mapped[str] = mapped_column(Text, nullable=False)
    daily_horoscope: Mapped[str] = mapped_column(Text, nullable=False, default="")
    horoscope_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    revision: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
