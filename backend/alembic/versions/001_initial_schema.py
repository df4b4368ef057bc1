"""Initial schema — daily_horoscopes and weekly_horoscopes.

Revision ID: 001_initial
Revises: None
Create Date: 2024-06-10

Each table has a composite unique constraint on its natural key, which the
store's INSERT ... ON CONFLICT upsert targets.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "daily_horoscopes",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("sign_id", sa.Integer, nullable=False),
        sa.Column("sign_name", sa.Text, nullable=False),
        sa.Column("symbol", sa.Text, nullable=False),
        sa.Column("daily_horoscope", sa.Text, nullable=False, server_default=""),
        sa.Column("horoscope_date", sa.Date, nullable=False),
        sa.Column("revision", sa.Integer, nullable=False, server_default="1"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("sign_id", "horoscope_date", name="uq_daily_horoscopes_sign_date"),
    )
    op.create_index(
        "ix_daily_horoscopes_horoscope_date", "daily_horoscopes", ["horoscope_date"],
    )

    op.create_table(
        "weekly_horoscopes",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("sign_id", sa.Integer, nullable=False),
        sa.Column("sign_name", sa.Text, nullable=False),
        sa.Column("symbol", sa.Text, nullable=False),
        sa.Column("weekly_horoscope", sa.Text, nullable=False, server_default=""),
        sa.Column("week_start_date", sa.Date, nullable=False),
        sa.Column("revision", sa.Integer, nullable=False, server_default="1"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("sign_id", "week_start_date", name="uq_weekly_horoscopes_sign_week"),
    )
    op.create_index(
        "ix_weekly_horoscopes_week_start_date", "weekly_horoscopes", ["week_start_date"],
    )


def downgrade() -> None:
    op.drop_index("ix_weekly_horoscopes_week_start_date", table_name="weekly_horoscopes")
    op.drop_table("weekly_horoscopes")
    op.drop_index("ix_daily_horoscopes_horoscope_date", table_name="daily_horoscopes")
    op.drop_table("daily_horoscopes")
