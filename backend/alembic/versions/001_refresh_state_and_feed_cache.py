"""Add refresh_state (cooldown timestamp per source) and feed_cache (last good payload).

Revision ID: 001
Revises:
Create Date: (run alembic upgrade head)

- refresh_state: last_refresh_epoch shared by all instances; never decreases.
- feed_cache: last good items per source, served during cooldown and on upstream failure.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "refresh_state",
        sa.Column("source", sa.String(32), primary_key=True),
        sa.Column("last_refresh_epoch", sa.BigInteger(), nullable=True),
        sa.Column("last_outcome", sa.String(32), nullable=True),
        sa.Column("last_error", sa.String(64), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_table(
        "feed_cache",
        sa.Column("cache_key", sa.String(64), primary_key=True),
        sa.Column("payload_json", sa.Text(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )


def downgrade() -> None:
    op.drop_table("feed_cache")
    op.drop_table("refresh_state")
