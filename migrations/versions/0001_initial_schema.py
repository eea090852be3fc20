"""initial schema: smarty_checkins

Revision ID: 0001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "smarty_checkins",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("checkin_date", sa.Date(), nullable=False),
        # Morning half
        sa.Column("morning_completed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("morning_completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("sleep_hours", sa.Float(), nullable=True),
        sa.Column("sleep_quality", sa.Integer(), nullable=True),
        sa.Column("readiness_score", sa.Integer(), nullable=True),
        sa.Column("soreness_rating", sa.Integer(), nullable=True),
        sa.Column("mood_rating", sa.Integer(), nullable=True),
        # Night half
        sa.Column("night_completed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("night_completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("steps_value", sa.Integer(), nullable=True),
        sa.Column("steps_bucket", sa.Integer(), nullable=True),
        sa.Column("hydration_liters", sa.Float(), nullable=True),
        sa.Column("protein_level", sa.Integer(), nullable=True),
        sa.Column("day_strain", sa.Integer(), nullable=True),
        # Derived
        sa.Column("sleep_score", sa.Integer(), nullable=True),
        sa.Column("readiness_score_norm", sa.Integer(), nullable=True),
        sa.Column("soreness_score", sa.Integer(), nullable=True),
        sa.Column("mood_score", sa.Integer(), nullable=True),
        sa.Column("movement_score", sa.Integer(), nullable=True),
        sa.Column("hydration_score", sa.Integer(), nullable=True),
        sa.Column("protein_score_norm", sa.Integer(), nullable=True),
        sa.Column("day_strain_score", sa.Integer(), nullable=True),
        sa.Column("daily_smarty_score", sa.Integer(), nullable=True),
        sa.Column("score_category", sa.String(16), nullable=True),
        sa.Column("status", sa.String(32), nullable=False, server_default="missed"),
        sa.Column("morning_modal_shown", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("night_modal_shown", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_smarty_checkins_user_id", "smarty_checkins", ["user_id"])
    op.create_index("ix_smarty_checkins_checkin_date", "smarty_checkins", ["checkin_date"])
    op.create_check_constraint(
        "ck_smarty_checkins_score_category",
        "smarty_checkins",
        "score_category IS NULL OR score_category IN ('red', 'orange', 'yellow', 'green')",
    )


def downgrade() -> None:
    op.drop_constraint("ck_smarty_checkins_score_category", "smarty_checkins", type_="check")
    op.drop_index("ix_smarty_checkins_checkin_date", table_name="smarty_checkins")
    op.drop_index("ix_smarty_checkins_user_id", table_name="smarty_checkins")
    op.drop_table("smarty_checkins")
