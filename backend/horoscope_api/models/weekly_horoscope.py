"""WeeklyHoroscope ORM — one sign's horoscope text for one Monday-start week.

Invariants:
    - (sign_id, week_start_date) is unique (uq_weekly_horoscopes_sign_week)
    - week_start_date is always a Monday (computed by core.dates.week_start)
    - weekly_horoscope is non-nullable; absent content is ""
"""

from datetime import date, datetime, timezone

from sqlalchemy import Date, DateTime, Integer, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from horoscope_api.db.base import Base


class WeeklyHoroscope(Base):
    """Weekly record keyed by (sign_id, week_start_date)."""
    __tablename__ = "weekly_horoscopes"
    __table_args__ = (
        UniqueConstraint(
            "sign_id", "week_start_date", name="uq_weekly_horoscopes_sign_week",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    sign_id: Mapped[int] = mapped_column(Integer, nullable=False)
    sign_name: Mapped[str] = mapped_column(Text, nullable=False)
    symbol: Mapped[str] = mapped_column(Text, nullable=False)
    weekly_horoscope: Mapped[str] = mapped_column(Text, nullable=False, default="")
    week_start_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
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
