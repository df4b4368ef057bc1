"""Root conftest — shared test configuration."""

import os

# Ensure tests never reach a real database or cluster
os.environ.setdefault("STORE_BACKEND", "sql")
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("MONGODB_URL", "mongodb://localhost:27017")
os.environ.setdefault("DEFAULT_TIMEZONE", "UTC")
