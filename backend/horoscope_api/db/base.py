"""SQLAlchemy Declarative Base — shared base class for the horoscope tables.

Invariants:
    - DailyHoroscope and WeeklyHoroscope inherit from Base
    - Base.metadata is the single source of truth for alembic and test fixtures
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all horoscope ORM models."""
    pass
