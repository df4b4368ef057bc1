"""Database Infrastructure — SQLAlchemy declarative Base for the relational store.

Invariants:
    - Single async engine per process (owned by DatabaseSessionManager)
    - Tables are created by alembic, never implicitly at import time
"""
