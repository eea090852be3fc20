"""
Check-in submission: today's row, morning/night answers, modal flags.

"Today" is always the civil day from the CivilCalendar, so a user in any
timezone writes to the same row as the server-side jobs expect.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from app.core.clock import CivilCalendar, get_calendar
from app.models.checkin import SmartyCheckin
from app.services.badges import BadgeAward, award_badges
from app.services.scoring import calculate_checkin_scores

logger = logging.getLogger(__name__)

MORNING_FIELDS = ("sleep_hours", "sleep_quality", "readiness_score", "soreness_rating", "mood_rating")
NIGHT_FIELDS = ("steps_value", "steps_bucket", "hydration_liters", "protein_level", "day_strain")


@dataclass
class SubmitResult:
    checkin: SmartyCheckin
    new_badges: list[BadgeAward]


def _today(calendar: Optional[CivilCalendar]) -> date:
    return (calendar or get_calendar()).today_date()


def get_today_checkin(
    db: Session, user_id: str, calendar: Optional[CivilCalendar] = None
) -> Optional[SmartyCheckin]:
    return (
        db.query(SmartyCheckin)
        .filter(SmartyCheckin.user_id == user_id, SmartyCheckin.checkin_date == _today(calendar))
        .order_by(SmartyCheckin.id.asc())
        .first()
    )


def get_or_create_today_checkin(
    db: Session, user_id: str, calendar: Optional[CivilCalendar] = None
) -> SmartyCheckin:
    checkin = get_today_checkin(db, user_id, calendar)
    if checkin is not None:
        return checkin
    checkin = SmartyCheckin(
        user_id=user_id,
        checkin_date=_today(calendar),
        morning_completed=False,
        night_completed=False,
        morning_modal_shown=False,
        night_modal_shown=False,
    )
    db.add(checkin)
    db.commit()
    db.refresh(checkin)
    return checkin


def _apply_scores(checkin: SmartyCheckin) -> None:
    for name, value in calculate_checkin_scores(checkin).items():
        setattr(checkin, name, value)


def _submit(
    db: Session,
    user_id: str,
    answers: dict,
    fields: tuple[str, ...],
    half: str,
    calendar: Optional[CivilCalendar],
) -> SubmitResult:
    calendar = calendar or get_calendar()
    checkin = get_or_create_today_checkin(db, user_id, calendar)
    for name in fields:
        if name in answers:
            setattr(checkin, name, answers[name])
    setattr(checkin, f"{half}_completed", True)
    setattr(checkin, f"{half}_completed_at", calendar.now())
    _apply_scores(checkin)
    db.commit()
    db.refresh(checkin)
    logger.info(
        "%s check-in saved for user %s on %s (status=%s score=%s)",
        half.capitalize(), user_id, checkin.checkin_date, checkin.status, checkin.daily_smarty_score,
    )
    return SubmitResult(checkin=checkin, new_badges=award_badges(db, user_id))


def submit_morning(
    db: Session, user_id: str, answers: dict, calendar: Optional[CivilCalendar] = None
) -> SubmitResult:
    return _submit(db, user_id, answers, MORNING_FIELDS, "morning", calendar)


def submit_night(
    db: Session, user_id: str, answers: dict, calendar: Optional[CivilCalendar] = None
) -> SubmitResult:
    return _submit(db, user_id, answers, NIGHT_FIELDS, "night", calendar)


def mark_modal_shown(
    db: Session, user_id: str, kind: str, calendar: Optional[CivilCalendar] = None
) -> SmartyCheckin:
    """kind is "morning" or "night"."""
    checkin = get_or_create_today_checkin(db, user_id, calendar)
    setattr(checkin, f"{kind}_modal_shown", True)
    db.commit()
    db.refresh(checkin)
    return checkin
