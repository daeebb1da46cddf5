"""initial board schema

Revision ID: 5c1e0b7a9d42
Revises:
Create Date: 2026-10-18 09:12:40.512233

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "5c1e0b7a9d42"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create post, post_like and report tables."""
    op.create_table(
        "post",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("category", sa.String(length=32), nullable=False),
        sa.Column("timestamp", sa.BigInteger(), nullable=False),
        sa.Column("expires_at", sa.BigInteger(), nullable=False),
        sa.Column("anonymous_user_id", sa.String(length=64), nullable=False),
        sa.Column("likes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_post_expires_at", "post", ["expires_at"])
    op.create_index("ix_post_active_timestamp", "post", ["is_active", "timestamp"])
    op.create_index("ix_post_anonymous_user_id", "post", ["anonymous_user_id"])

    op.create_table(
        "post_like",
        sa.Column("post_id", sa.String(length=32), nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.ForeignKeyConstraint(["post_id"], ["post.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("post_id", "user_id"),
    )

    op.create_table(
        "report",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("post_id", sa.String(length=32), nullable=False),
        sa.Column("reported_by", sa.String(length=64), nullable=False),
        sa.Column("reason", sa.Text(), nullable=False),
        sa.Column("timestamp", sa.BigInteger(), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="pending"),
        sa.Column("admin_action", sa.BigInteger(), nullable=True),
        sa.CheckConstraint(
            "status IN ('pending', 'approved', 'rejected')",
            name="ck_report_status",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_report_post_id", "report", ["post_id"])
    op.create_index("ix_report_status", "report", ["status"])


def downgrade() -> None:
    """Drop the board tables."""
    op.drop_index("ix_report_status", table_name="report")
    op.drop_index("ix_report_post_id", table_name="report")
    op.drop_table("report")
    op.drop_table("post_like")
    op.drop_index("ix_post_anonymous_user_id", table_name="post")
    op.drop_index("ix_post_active_timestamp", table_name="post")
    op.drop_index("ix_post_expires_at", table_name="post")
    op.drop_table("post")
