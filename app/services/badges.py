"""
Badges — achievements derived from the latest 90 check-ins (newest first).

  consistency_champion  bronze/silver/gold  7 / 30 / 90 consecutive complete days
  hydration_hero        bronze  >=5 of last 7   hydration_score >= 8
                        silver  >=20 of last 30
  step_machine          bronze  >=10 of last 14 movement_score >= 8
                        silver  >=22 of last 30
  protein_pro           bronze  >=10 of last 14 protein_score_norm >= 8
                        silver  >=22 of last 30
  recovery_master       special >=5 of last 7 with sleep_score >= 8,
                                readiness_score_norm >= 7, soreness_rating <= 4
  comeback_award        special latest-7 average daily score beats the
                                previous 7 by >= 15 (needs 14 check-ins)

Each (badge_type, badge_level) is awarded at most once per user.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Sequence

from sqlalchemy.orm import Session

from app.models.badge import UserBadge
from app.models.checkin import CheckinStatus, SmartyCheckin
from app.services.scoring import round_half_up

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 90
SCORE_THRESHOLD = 8
COMEBACK_MIN_IMPROVEMENT = 15

_STREAK_LEVELS = [(7, "bronze"), (30, "silver"), (90, "gold")]

# (badge_type, score field, [(window, min_days, level), ...])
_THRESHOLD_BADGES = [
    ("hydration_hero", "hydration_score", [(7, 5, "bronze"), (30, 20, "silver")]),
    ("step_machine", "movement_score", [(14, 10, "bronze"), (30, 22, "silver")]),
    ("protein_pro", "protein_score_norm", [(14, 10, "bronze"), (30, 22, "silver")]),
]

BADGE_LABELS = {
    "consistency_champion": "Consistency Champion",
    "hydration_hero": "Hydration Hero",
    "step_machine": "Step Machine",
    "protein_pro": "Protein Pro",
    "recovery_master": "Recovery Master",
    "comeback_award": "Comeback Award",
}


@dataclass
class BadgeAward:
    badge_type: str
    badge_level: str
    data: dict = field(default_factory=dict)

    @property
    def label(self) -> str:
        name = BADGE_LABELS.get(self.badge_type, self.badge_type)
        if self.badge_level == "special":
            return name
        return f"{name} ({self.badge_level.capitalize()})"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _consecutive_complete(checkins: Sequence[Any]) -> int:
    streak = 0
    for c in checkins:
        if c.status != CheckinStatus.complete.value:
            break
        streak += 1
    return streak


def _days_at_or_above(checkins: Sequence[Any], field_name: str, days: int) -> int:
    return sum(
        1 for c in checkins[:days]
        if (getattr(c, field_name) or 0) >= SCORE_THRESHOLD
    )


def _is_recovery_day(c: Any) -> bool:
    return (
        (c.sleep_score or 0) >= 8
        and (c.readiness_score_norm or 0) >= 7
        and c.soreness_rating is not None
        and c.soreness_rating <= 4
    )


def _average_daily(checkins: Sequence[Any]) -> float | None:
    scores = [c.daily_smarty_score for c in checkins if c.daily_smarty_score is not None]
    if not scores:
        return None
    return sum(scores) / len(scores)


# ---------------------------------------------------------------------------
# Evaluation (pure)
# ---------------------------------------------------------------------------

def evaluate_badges(checkins: Sequence[Any], existing: Iterable[tuple[str, str]] = ()) -> list[BadgeAward]:
    """Return the badges `checkins` qualify for that are not in `existing`."""
    owned = set(existing)
    history = list(checkins)[:HISTORY_LIMIT]
    awards: list[BadgeAward] = []

    def award(badge_type: str, level: str, data: dict) -> None:
        if (badge_type, level) in owned:
            return
        owned.add((badge_type, level))
        awards.append(BadgeAward(badge_type, level, data))

    if not history:
        return awards

    streak = _consecutive_complete(history)
    for needed, level in _STREAK_LEVELS:
        if streak >= needed:
            award("consistency_champion", level, {"streak": needed})

    for badge_type, field_name, tiers in _THRESHOLD_BADGES:
        for window, min_days, level in tiers:
            count = _days_at_or_above(history, field_name, window)
            if count >= min_days:
                award(badge_type, level, {"days": count})

    recovery_days = sum(1 for c in history[:7] if _is_recovery_day(c))
    if recovery_days >= 5:
        award("recovery_master", "special", {"days": recovery_days})

    if len(history) >= 14:
        current_avg = _average_daily(history[:7])
        previous_avg = _average_daily(history[7:14])
        if current_avg is not None and previous_avg is not None:
            if current_avg - previous_avg >= COMEBACK_MIN_IMPROVEMENT:
                award("comeback_award", "special", {
                    "improvement": round_half_up(current_avg - previous_avg),
                    "current_avg": round_half_up(current_avg),
                    "previous_avg": round_half_up(previous_avg),
                })

    return awards


# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------

def list_badges(db: Session, user_id: str) -> list[UserBadge]:
    return (
        db.query(UserBadge)
        .filter(UserBadge.user_id == user_id)
        .order_by(UserBadge.earned_at.desc(), UserBadge.id.desc())
        .all()
    )


def award_badges(db: Session, user_id: str) -> list[BadgeAward]:
    """Evaluate the user's history and persist any new badges. Commits once."""
    checkins = (
        db.query(SmartyCheckin)
        .filter(SmartyCheckin.user_id == user_id)
        .order_by(SmartyCheckin.checkin_date.desc())
        .limit(HISTORY_LIMIT)
        .all()
    )
    existing = [(b.badge_type, b.badge_level) for b in list_badges(db, user_id)]
    awards = evaluate_badges(checkins, existing)
    for a in awards:
        db.add(UserBadge(
            user_id=user_id,
            badge_type=a.badge_type,
            badge_level=a.badge_level,
            badge_data=json.dumps(a.data),
        ))
    if awards:
        db.commit()
        logger.info("Awarded %d badge(s) to user %s: %s", len(awards), user_id, [a.label for a in awards])
    return awards
