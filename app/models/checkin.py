"""
SmartyCheckin — one row per user per civil day (morning + night halves).

Raw answers are stored as submitted; the *_score columns are derived by
app/services/scoring.py whenever either half is submitted.

No unique constraint on (user_id, checkin_date): duplicate rows for a day
are tolerated on read (the later one in fetch order wins).
"""
from datetime import datetime, date
from sqlalchemy import Integer, String, Float, Boolean, DateTime, Date, func
from sqlalchemy.orm import Mapped, mapped_column
import enum

from app.db.base import Base


class ScoreCategory(str, enum.Enum):
    red = "red"
    orange = "orange"
    yellow = "yellow"
    green = "green"


class CheckinStatus(str, enum.Enum):
    complete = "complete"
    incomplete_morning_only = "incomplete_morning_only"
    incomplete_night_only = "incomplete_night_only"
    missed = "missed"


class SmartyCheckin(Base):
    __tablename__ = "smarty_checkins"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    checkin_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)

    # Morning half
    morning_completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    morning_completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    sleep_hours: Mapped[float | None] = mapped_column(Float, nullable=True)
    sleep_quality: Mapped[int | None] = mapped_column(Integer, nullable=True)
    readiness_score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    soreness_rating: Mapped[int | None] = mapped_column(Integer, nullable=True)
    mood_rating: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # Night half
    night_completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    night_completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    steps_value: Mapped[int | None] = mapped_column(Integer, nullable=True)
    steps_bucket: Mapped[int | None] = mapped_column(Integer, nullable=True)
    hydration_liters: Mapped[float | None] = mapped_column(Float, nullable=True)
    protein_level: Mapped[int | None] = mapped_column(Integer, nullable=True)
    day_strain: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # Derived component scores (0-10)
    sleep_score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    readiness_score_norm: Mapped[int | None] = mapped_column(Integer, nullable=True)
    soreness_score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    mood_score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    movement_score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    hydration_score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    protein_score_norm: Mapped[int | None] = mapped_column(Integer, nullable=True)
    day_strain_score: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # Daily result (0-100)
    daily_smarty_score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    score_category: Mapped[str | None] = mapped_column(String(16), nullable=True)
    status: Mapped[str] = mapped_column(
        String(32), nullable=False, default=CheckinStatus.missed.value
    )

    morning_modal_shown: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    night_modal_shown: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
