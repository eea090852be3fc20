"""add user_badges table

Revision ID: 0002
Revises: 0001
Create Date: 2026-10-19

Achievements derived from check-in history.
Unique constraint (user_id, badge_type, badge_level) keeps awards idempotent.
Append-only; downgrade drops cleanly.
"""
from alembic import op
import sqlalchemy as sa

revision = "0002"
down_revision = "0001"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "user_badges",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("badge_type", sa.String(64), nullable=False),
        sa.Column("badge_level", sa.String(16), nullable=False),
        sa.Column("badge_data", sa.Text(), nullable=True),
        sa.Column(
            "earned_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_index("ix_user_badges_user_id", "user_badges", ["user_id"])
    op.create_unique_constraint(
        "uq_user_badge_type_level",
        "user_badges",
        ["user_id", "badge_type", "badge_level"],
    )


def downgrade() -> None:
    op.drop_constraint("uq_user_badge_type_level", "user_badges", type_="unique")
    op.drop_index("ix_user_badges_user_id", table_name="user_badges")
    op.drop_table("user_badges")
