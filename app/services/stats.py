"""
Check-in statistics over a user's recent history.

Records are expected newest first (the store's order):
  current_streak  — leading run of `complete` days
  best_streak     — longest run of `complete` days anywhere in the window
  average_score   — mean of the daily scores that exist (rounded half up)
  completion_rate — % of check-ins that are `complete` (rounded half up)
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal
from typing import Optional, Sequence

from sqlalchemy.orm import Session

from app.core.clock import CivilCalendar, get_calendar
from app.core.config import settings
from app.models.checkin import CheckinStatus, SmartyCheckin
from app.services.scores import CheckinRecord
from app.services.scoring import round_half_up


@dataclass
class CheckinStats:
    current_streak: int
    best_streak: int
    average_score: int
    completion_rate: int
    total_checkins: int


def calculate_stats(records: Sequence[CheckinRecord]) -> CheckinStats:
    if not records:
        return CheckinStats(0, 0, 0, 0, 0)

    complete = [r.status == CheckinStatus.complete.value for r in records]

    current_streak = 0
    for is_complete in complete:
        if not is_complete:
            break
        current_streak += 1

    best_streak = 0
    run = 0
    for is_complete in complete:
        run = run + 1 if is_complete else 0
        best_streak = max(best_streak, run)

    scored = [Decimal(str(r.daily_score)) for r in records if r.daily_score is not None]
    average_score = round_half_up(sum(scored) / len(scored)) if scored else 0

    completion_rate = round_half_up(Decimal(sum(complete)) * 100 / len(records))

    return CheckinStats(
        current_streak=current_streak,
        best_streak=best_streak,
        average_score=average_score,
        completion_rate=completion_rate,
        total_checkins=len(records),
    )


def recent_checkins(
    db: Session,
    user_id: str,
    days: Optional[int] = None,
    calendar: Optional[CivilCalendar] = None,
) -> list[SmartyCheckin]:
    calendar = calendar or get_calendar()
    window = days if days is not None else settings.STATS_LOOKBACK_DAYS
    since: date = calendar.today_date() - timedelta(days=window)
    return (
        db.query(SmartyCheckin)
        .filter(SmartyCheckin.user_id == user_id, SmartyCheckin.checkin_date >= since)
        .order_by(SmartyCheckin.checkin_date.desc(), SmartyCheckin.id.asc())
        .all()
    )


def get_checkin_stats(
    db: Session,
    user_id: str,
    days: Optional[int] = None,
    calendar: Optional[CivilCalendar] = None,
) -> CheckinStats:
    rows = recent_checkins(db, user_id, days=days, calendar=calendar)
    return calculate_stats([CheckinRecord.from_row(r) for r in rows])
