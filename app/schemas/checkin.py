"""
Check-in request / response schemas.

GET  /checkins/scores        → ScoresByDateResponse  ({scoresByDate, isLoading})
GET  /checkins/today         → CheckinOut
POST /checkins/morning       → MorningCheckinRequest → SubmitCheckinResponse
POST /checkins/night         → NightCheckinRequest   → SubmitCheckinResponse
POST /checkins/modal-shown   → ModalShownRequest     → CheckinOut
GET  /checkins/stats         → CheckinStatsResponse
GET  /checkins/badges        → list[BadgeOut]
GET  /checkins/window        → WindowStatusResponse
"""
from __future__ import annotations

import enum
from datetime import datetime
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.models.checkin import ScoreCategory


# ---------------------------------------------------------------------------
# Day-keyed scores (camelCase on the wire)
# ---------------------------------------------------------------------------

class DayStatusOut(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    score: Optional[float] = None
    category: Optional[ScoreCategory] = None
    morning_completed: bool = False
    night_completed: bool = False


class ScoresByDateResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    scores_by_date: dict[str, DayStatusOut] = Field(
        description="One entry per civil day (YYYY-MM-DD).",
    )
    is_loading: bool = False


# ---------------------------------------------------------------------------
# Submissions
# ---------------------------------------------------------------------------

UserId = Annotated[str, Field(min_length=1, max_length=64, examples=["user-123"])]


class MorningCheckinRequest(BaseModel):
    user_id: UserId
    sleep_hours: Annotated[float, Field(ge=0, le=24)]
    sleep_quality: Annotated[int, Field(ge=1, le=5)]
    readiness_score: Annotated[int, Field(ge=0, le=10)]
    soreness_rating: Annotated[int, Field(ge=0, le=10)]
    mood_rating: Annotated[int, Field(ge=1, le=5)]


class NightCheckinRequest(BaseModel):
    user_id: UserId
    steps_value: Optional[Annotated[int, Field(ge=0)]] = None
    steps_bucket: Annotated[int, Field(ge=1, le=5)]
    hydration_liters: Annotated[float, Field(ge=0, le=20)]
    protein_level: Annotated[int, Field(ge=0, le=4)]
    day_strain: Annotated[int, Field(ge=0, le=10)]


class ModalKind(str, enum.Enum):
    morning = "morning"
    night = "night"


class ModalShownRequest(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    user_id: UserId
    kind: ModalKind


class CheckinOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    checkin_date: str
    status: str
    morning_completed: bool
    night_completed: bool
    morning_modal_shown: bool
    night_modal_shown: bool
    sleep_score: Optional[int] = None
    readiness_score_norm: Optional[int] = None
    soreness_score: Optional[int] = None
    mood_score: Optional[int] = None
    movement_score: Optional[int] = None
    hydration_score: Optional[int] = None
    protein_score_norm: Optional[int] = None
    day_strain_score: Optional[int] = None
    daily_smarty_score: Optional[int] = None
    score_category: Optional[str] = None


class SubmitCheckinResponse(BaseModel):
    checkin: CheckinOut
    new_badges: list[str] = Field(description="Labels of badges earned by this submission.")


# ---------------------------------------------------------------------------
# Stats, badges, window
# ---------------------------------------------------------------------------

class CheckinStatsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    current_streak: int
    best_streak: int
    average_score: int
    completion_rate: int = Field(description="Percentage of complete check-ins. Range: 0–100.")
    total_checkins: int


class BadgeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    badge_type: str
    badge_level: str
    badge_data: Optional[dict] = None
    earned_at: Optional[str] = None


class WindowStatusResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    is_morning_window: bool
    is_night_window: bool
    morning_window_start: str
    morning_window_end: str
    night_window_start: str
    night_window_end: str
    current_time: datetime
    next_window: Optional[str] = None
    time_until_next_window: str


class CalendarTodayResponse(BaseModel):
    day: str = Field(examples=["2026-10-19"])
    hour: int = Field(ge=0, le=23)
    timezone: str
    utc_offset: int
