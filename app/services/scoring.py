"""
Check-in scoring — turns raw morning/night answers into component scores,
the Daily Smarty Score and its colour category.

Component scores are 0-10. The daily score is the weighted mean of the
seven components scaled to 0-100:

    sleep 15% | readiness 15% | movement 20% | hydration 15%
    protein 15% | mood 10% | day strain 10%

Category bands: <40 red, <60 orange, <80 yellow, otherwise green.

The daily score is only produced once BOTH halves are in and every
component is known. Pure functions; the caller persists the result.
"""
from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from app.models.checkin import CheckinStatus, ScoreCategory, SmartyCheckin

_RATING_SCORES = {1: 2, 2: 4, 3: 6, 4: 8, 5: 10}
_PROTEIN_SCORES = {0: 2, 1: 4, 2: 6, 3: 8, 4: 10}
_STEPS_BUCKET_MIDPOINTS = {1: 1000, 2: 3500, 3: 6500, 4: 9000, 5: 11000}
_DEFAULT_MAPPED_SCORE = 6
_DEFAULT_STEPS = 5000
_DEFAULT_STEPS_BUCKET = 3
_DEFAULT_DAY_STRAIN = 5

DAILY_WEIGHTS = {
    "sleep": Decimal("0.15"),
    "readiness": Decimal("0.15"),
    "movement": Decimal("0.20"),
    "hydration": Decimal("0.15"),
    "protein": Decimal("0.15"),
    "mood": Decimal("0.10"),
    "day_strain": Decimal("0.10"),
}


def round_half_up(value) -> int:
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


# ---------------------------------------------------------------------------
# Morning components
# ---------------------------------------------------------------------------

def sleep_hours_score(hours: float) -> int:
    if hours < 5.0:
        return 2
    if hours < 6.0:
        return 4
    if hours < 7.0:
        return 7
    if hours <= 9.0:
        return 10
    return 7  # oversleeping


def sleep_quality_score(quality: int) -> int:
    return _RATING_SCORES.get(quality, _DEFAULT_MAPPED_SCORE)


def sleep_score(hours: float, quality: int) -> int:
    return round_half_up(Decimal(sleep_hours_score(hours) + sleep_quality_score(quality)) / 2)


def soreness_score(rating: int) -> int:
    return max(0, min(10, 10 - rating))


def mood_score(rating: int) -> int:
    return _RATING_SCORES.get(rating, _DEFAULT_MAPPED_SCORE)


# ---------------------------------------------------------------------------
# Night components
# ---------------------------------------------------------------------------

def steps_from_bucket(bucket: Optional[int]) -> int:
    return _STEPS_BUCKET_MIDPOINTS.get(bucket, _DEFAULT_STEPS)


def movement_score(steps: int) -> int:
    if steps < 2000:
        return 2
    if steps < 5000:
        return 4
    if steps < 8000:
        return 7
    if steps < 10000:
        return 9
    return 10


def hydration_score(liters: float) -> int:
    if liters < 1.0:
        return 2
    if liters < 1.5:
        return 4
    if liters < 2.0:
        return 7
    if liters < 2.5:
        return 9
    return 10


def protein_score(level: int) -> int:
    return _PROTEIN_SCORES.get(level, _DEFAULT_MAPPED_SCORE)


def day_strain_score(strain: int) -> int:
    if strain <= 2:
        return 5
    if strain <= 4:
        return 8
    if strain <= 7:
        return 10
    return 7  # 8-10: overreaching


# ---------------------------------------------------------------------------
# Daily result
# ---------------------------------------------------------------------------

def daily_score(
    *,
    sleep: int,
    readiness: int,
    movement: int,
    hydration: int,
    protein: int,
    mood: int,
    day_strain: int,
) -> int:
    components = {
        "sleep": sleep,
        "readiness": readiness,
        "movement": movement,
        "hydration": hydration,
        "protein": protein,
        "mood": mood,
        "day_strain": day_strain,
    }
    weighted = sum(DAILY_WEIGHTS[name] * Decimal(value) for name, value in components.items())
    return round_half_up(weighted * 10)


def score_category(score: int) -> ScoreCategory:
    if score < 40:
        return ScoreCategory.red
    if score < 60:
        return ScoreCategory.orange
    if score < 80:
        return ScoreCategory.yellow
    return ScoreCategory.green


def checkin_status(morning_completed: bool, night_completed: bool) -> CheckinStatus:
    if morning_completed and night_completed:
        return CheckinStatus.complete
    if morning_completed:
        return CheckinStatus.incomplete_morning_only
    if night_completed:
        return CheckinStatus.incomplete_night_only
    return CheckinStatus.missed


def calculate_checkin_scores(checkin: SmartyCheckin) -> dict:
    """
    Compute the column updates for a stored check-in.

    Morning components need sleep hours + quality; night components are
    filled with defaults when optional answers are missing. Previously
    stored components are reused for the daily score.
    """
    updates: dict = {}

    if checkin.morning_completed and checkin.sleep_hours is not None and checkin.sleep_quality is not None:
        updates["sleep_score"] = sleep_score(checkin.sleep_hours, checkin.sleep_quality)
        updates["readiness_score_norm"] = checkin.readiness_score
        if checkin.soreness_rating is not None:
            updates["soreness_score"] = soreness_score(checkin.soreness_rating)
        if checkin.mood_rating is not None:
            updates["mood_score"] = mood_score(checkin.mood_rating)

    if checkin.night_completed:
        steps = checkin.steps_value or steps_from_bucket(checkin.steps_bucket or _DEFAULT_STEPS_BUCKET)
        updates["movement_score"] = movement_score(steps)
        updates["hydration_score"] = hydration_score(checkin.hydration_liters or 0)
        updates["protein_score_norm"] = protein_score(checkin.protein_level or 0)
        updates["day_strain_score"] = day_strain_score(checkin.day_strain or _DEFAULT_DAY_STRAIN)

    updates["status"] = checkin_status(checkin.morning_completed, checkin.night_completed).value

    if checkin.morning_completed and checkin.night_completed:
        def pick(field: str):
            value = updates.get(field)
            return value if value is not None else getattr(checkin, field)

        components = {
            "sleep": pick("sleep_score"),
            "readiness": pick("readiness_score_norm"),
            "movement": pick("movement_score"),
            "hydration": pick("hydration_score"),
            "protein": pick("protein_score_norm"),
            "mood": pick("mood_score"),
            "day_strain": pick("day_strain_score"),
        }
        if all(v is not None for v in components.values()):
            score = daily_score(**components)
            updates["daily_smarty_score"] = score
            updates["score_category"] = score_category(score).value

    return updates
