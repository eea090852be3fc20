"""
Check-ins router.

GET  /checkins/scores        — day-keyed scores for a user
GET  /checkins/today         — today's (civil) check-in row
POST /checkins/morning       — submit the morning half
POST /checkins/night         — submit the night half
POST /checkins/modal-shown   — flag today's reminder modal as shown
GET  /checkins/stats         — streaks, average score, completion rate
GET  /checkins/badges        — badges earned
GET  /checkins/window        — current morning/night window status
"""
from __future__ import annotations

import json
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.clock import CivilCalendar, get_calendar
from app.core.errors import CheckinNotFoundError
from app.db.base import get_db
from app.models.badge import UserBadge
from app.models.checkin import SmartyCheckin
from app.schemas.common import ErrorResponse, ValidationErrorResponse
from app.schemas.checkin import (
    BadgeOut,
    CheckinOut,
    CheckinStatsResponse,
    DayStatusOut,
    ModalShownRequest,
    MorningCheckinRequest,
    NightCheckinRequest,
    ScoresByDateResponse,
    SubmitCheckinResponse,
    WindowStatusResponse,
)
from app.services.badges import list_badges
from app.services.checkin_window import get_window_status
from app.services.checkins import (
    SubmitResult,
    get_today_checkin,
    mark_modal_shown,
    submit_morning,
    submit_night,
)
from app.services.scores import CheckinStore, DailyScoreLoader, ScoresSnapshot, SqlCheckinStore
from app.services.stats import get_checkin_stats

router = APIRouter(prefix="/checkins", tags=["checkins"])


def get_checkin_store(db: Session = Depends(get_db)) -> CheckinStore:
    return SqlCheckinStore(db)


# ---------------------------------------------------------------------------
# Serialization helpers
# ---------------------------------------------------------------------------

def _snapshot_to_response(snap: ScoresSnapshot) -> ScoresByDateResponse:
    return ScoresByDateResponse(
        scores_by_date={
            day: DayStatusOut(
                score=status.score,
                category=status.category,
                morning_completed=status.morning_completed,
                night_completed=status.night_completed,
            )
            for day, status in snap.scores_by_date.items()
        },
        is_loading=snap.is_loading,
    )


def _checkin_to_response(c: SmartyCheckin) -> CheckinOut:
    return CheckinOut(
        id=c.id,
        user_id=c.user_id,
        checkin_date=str(c.checkin_date),
        status=c.status,
        morning_completed=c.morning_completed,
        night_completed=c.night_completed,
        morning_modal_shown=c.morning_modal_shown,
        night_modal_shown=c.night_modal_shown,
        sleep_score=c.sleep_score,
        readiness_score_norm=c.readiness_score_norm,
        soreness_score=c.soreness_score,
        mood_score=c.mood_score,
        movement_score=c.movement_score,
        hydration_score=c.hydration_score,
        protein_score_norm=c.protein_score_norm,
        day_strain_score=c.day_strain_score,
        daily_smarty_score=c.daily_smarty_score,
        score_category=c.score_category,
    )


def _submit_to_response(result: SubmitResult) -> SubmitCheckinResponse:
    return SubmitCheckinResponse(
        checkin=_checkin_to_response(result.checkin),
        new_badges=[b.label for b in result.new_badges],
    )


def _badge_to_response(b: UserBadge) -> BadgeOut:
    return BadgeOut(
        id=b.id,
        badge_type=b.badge_type,
        badge_level=b.badge_level,
        badge_data=json.loads(b.badge_data) if b.badge_data else None,
        earned_at=b.earned_at.isoformat() if b.earned_at else None,
    )


# ---------------------------------------------------------------------------
# Scores
# ---------------------------------------------------------------------------

@router.get(
    "/scores",
    response_model=ScoresByDateResponse,
    summary="Day-keyed check-in scores for a user",
    responses={200: {"description": "Always 200; a failed fetch yields an empty map."}},
)
def checkin_scores(
    user_id: Optional[str] = Query(
        default=None,
        description="Owner of the check-ins. Empty or missing returns an empty map.",
        examples=["user-123"],
    ),
    store: CheckinStore = Depends(get_checkin_store),
):
    """
    Return `{scoresByDate, isLoading}` where each key is a civil day
    (`YYYY-MM-DD`) and each value carries the daily score, its category
    and the morning/night completion flags.

    Two rows on the same day collapse to one entry: the later one in
    fetch order wins. Store failures are logged and surface as an empty map.
    """
    snap = DailyScoreLoader(store).load(user_id)
    return _snapshot_to_response(snap)


# ---------------------------------------------------------------------------
# Today + submissions
# ---------------------------------------------------------------------------

@router.get(
    "/today",
    response_model=CheckinOut,
    summary="Today's check-in",
    responses={404: {"model": ErrorResponse, "description": "No check-in row for today yet."}},
)
def checkin_today(
    user_id: str = Query(min_length=1, max_length=64),
    db: Session = Depends(get_db),
    calendar: CivilCalendar = Depends(get_calendar),
):
    checkin = get_today_checkin(db, user_id, calendar)
    if checkin is None:
        raise CheckinNotFoundError(user_id=user_id, day=calendar.today())
    return _checkin_to_response(checkin)


@router.post(
    "/morning",
    response_model=SubmitCheckinResponse,
    summary="Submit the morning check-in",
    responses={422: {"model": ValidationErrorResponse}},
)
def checkin_morning(
    payload: MorningCheckinRequest,
    db: Session = Depends(get_db),
    calendar: CivilCalendar = Depends(get_calendar),
):
    """Store sleep, readiness, soreness and mood; recompute scores and badges."""
    answers = payload.model_dump(exclude={"user_id"})
    return _submit_to_response(submit_morning(db, payload.user_id, answers, calendar))


@router.post(
    "/night",
    response_model=SubmitCheckinResponse,
    summary="Submit the night check-in",
    responses={422: {"model": ValidationErrorResponse}},
)
def checkin_night(
    payload: NightCheckinRequest,
    db: Session = Depends(get_db),
    calendar: CivilCalendar = Depends(get_calendar),
):
    """
    Store steps, hydration, protein and day strain; recompute scores.

    Once both halves are in, the Daily Smarty Score and category are set.
    """
    answers = payload.model_dump(exclude={"user_id"})
    return _submit_to_response(submit_night(db, payload.user_id, answers, calendar))


@router.post("/modal-shown", response_model=CheckinOut, summary="Flag a reminder modal as shown")
def checkin_modal_shown(
    payload: ModalShownRequest,
    db: Session = Depends(get_db),
    calendar: CivilCalendar = Depends(get_calendar),
):
    return _checkin_to_response(mark_modal_shown(db, payload.user_id, payload.kind, calendar))


# ---------------------------------------------------------------------------
# Stats, badges, window
# ---------------------------------------------------------------------------

@router.get("/stats", response_model=CheckinStatsResponse, summary="Check-in statistics")
def checkin_stats(
    user_id: str = Query(min_length=1, max_length=64),
    days: int = Query(default=90, ge=1, le=365, description="Look-back window in civil days."),
    db: Session = Depends(get_db),
    calendar: CivilCalendar = Depends(get_calendar),
):
    stats = get_checkin_stats(db, user_id, days=days, calendar=calendar)
    return CheckinStatsResponse.model_validate(stats)


@router.get("/badges", response_model=list[BadgeOut], summary="Badges earned by a user")
def checkin_badges(
    user_id: str = Query(min_length=1, max_length=64),
    db: Session = Depends(get_db),
):
    return [_badge_to_response(b) for b in list_badges(db, user_id)]


@router.get("/window", response_model=WindowStatusResponse, summary="Morning/night window status")
def checkin_window(calendar: CivilCalendar = Depends(get_calendar)):
    return WindowStatusResponse.model_validate(get_window_status(calendar))
