"""ORM Models — SQLAlchemy declarative models for the relational store.

Invariants:
    - All models inherit from Base (db/base.py)
    - Daily and weekly records live in independent tables (no shared key space)

Design Decisions:
    - One file per table for locality
    - All models imported here so Base.metadata is complete before create_all/autogenerate
"""

from horoscope_api.models.daily_horoscope import DailyHoroscope  # noqa: F401
from horoscope_api.models.weekly_horoscope import WeeklyHoroscope  # noqa: F401
