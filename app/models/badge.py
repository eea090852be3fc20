"""
UserBadge — achievements earned from check-in history.

Append-only. One row per (user_id, badge_type, badge_level); the unique
constraint keeps a badge from being awarded twice.

badge_data: JSON-encoded dict stored as Text (streak length, day counts...).
"""
from datetime import datetime
from sqlalchemy import Integer, String, Text, DateTime, func, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class UserBadge(Base):
    __tablename__ = "user_badges"
    __table_args__ = (
        UniqueConstraint("user_id", "badge_type", "badge_level", name="uq_user_badge_type_level"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    badge_type: Mapped[str] = mapped_column(String(64), nullable=False)
    badge_level: Mapped[str] = mapped_column(String(16), nullable=False)
    badge_data: Mapped[str | None] = mapped_column(Text, nullable=True)
    earned_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
