"""Create feedback_counters and votes tables

Revision ID: 7c2e91d4a0b3
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from collections.abc import Sequence

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "7c2e91d4a0b3"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

CATEGORIES = ("Breathing", "Body Scan", "Loving-Kindness", "Mindfulness")


def upgrade() -> None:
    """Create counter and vote tables, seed zeroed counters."""
    counters = op.create_table(
        "feedback_counters",
        sa.Column("category", sa.String(50), primary_key=True),
        sa.Column("likes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("dislikes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
        sa.CheckConstraint("likes >= 0", name="ck_feedback_likes_non_negative"),
        sa.CheckConstraint("dislikes >= 0", name="ck_feedback_dislikes_non_negative"),
    )
    op.bulk_insert(
        counters,
        [{"category": c, "likes": 0, "dislikes": 0} for c in CATEGORIES],
    )

    op.create_table(
        "votes",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_ip", sa.String(64), nullable=False),
        sa.Column("meditation_type", sa.String(50), nullable=False),
        sa.Column("is_like", sa.Boolean(), nullable=False),
        sa.Column("device_type", sa.String(20)),
        sa.Column("browser", sa.String(50)),
        sa.Column("os", sa.String(50)),
        sa.Column("country", sa.String(100)),
        sa.Column("region", sa.String(100)),
        sa.Column("city", sa.String(100)),
        sa.Column("session", postgresql.JSONB(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
        sa.UniqueConstraint("user_ip", "meditation_type", name="uq_votes_ip_type"),
    )
    op.create_index("ix_votes_created_at", "votes", ["created_at"])


def downgrade() -> None:
    """Drop vote and counter tables."""
    op.drop_index("ix_votes_created_at", table_name="votes")
    op.drop_table("votes")
    op.drop_table("feedback_counters")
