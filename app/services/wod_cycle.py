"""
Workout-of-the-Day cycle — fixed 28-day periodization.

The cycle is anchored to the calendar: settings.WOD_CYCLE_START is day 1
of cycle 1 and the table simply repeats every 28 days. No state, no
rotation; any date maps to the same slot on every client and on the
generation job. Recovery days (10 and 28) carry no difficulty.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Optional

from app.core.clock import CivilCalendar, get_calendar
from app.core.config import settings

CYCLE_LENGTH = 28
RECOVERY = "RECOVERY"

_BEGINNER = ("Beginner", (1, 2))
_INTERMEDIATE = ("Intermediate", (3, 4))
_ADVANCED = ("Advanced", (5, 6))
_NONE = (None, None)

# day -> (category, (difficulty, star range))
PERIODIZATION: list[tuple[str, tuple]] = [
    ("CARDIO", _BEGINNER),
    ("STRENGTH", _ADVANCED),
    ("MOBILITY & STABILITY", _INTERMEDIATE),
    ("CHALLENGE", _ADVANCED),
    ("STRENGTH", _INTERMEDIATE),
    ("PILATES", _ADVANCED),
    ("CALORIE BURNING", _INTERMEDIATE),
    ("METABOLIC", _BEGINNER),
    ("CHALLENGE", _ADVANCED),
    (RECOVERY, _NONE),
    ("CARDIO", _INTERMEDIATE),
    ("STRENGTH", _INTERMEDIATE),
    ("MOBILITY & STABILITY", _ADVANCED),
    ("CHALLENGE", _INTERMEDIATE),
    ("STRENGTH", _INTERMEDIATE),
    ("PILATES", _BEGINNER),
    ("CALORIE BURNING", _ADVANCED),
    ("METABOLIC", _INTERMEDIATE),
    ("CARDIO", _ADVANCED),
    ("STRENGTH", _BEGINNER),
    ("MOBILITY & STABILITY", _BEGINNER),
    ("CHALLENGE", _INTERMEDIATE),
    ("STRENGTH", _ADVANCED),
    ("PILATES", _INTERMEDIATE),
    ("CALORIE BURNING", _BEGINNER),
    ("METABOLIC", _ADVANCED),
    ("CHALLENGE", _INTERMEDIATE),
    (RECOVERY, _NONE),
]

FORMATS_BY_CATEGORY: dict[str, list[str]] = {
    "STRENGTH": ["REPS & SETS"],
    "MOBILITY & STABILITY": ["REPS & SETS"],
    "PILATES": ["REPS & SETS"],
    "CARDIO": ["CIRCUIT", "EMOM", "FOR TIME", "AMRAP", "TABATA"],
    "METABOLIC": ["CIRCUIT", "AMRAP", "EMOM", "FOR TIME", "TABATA"],
    "CALORIE BURNING": ["CIRCUIT", "TABATA", "AMRAP", "FOR TIME", "EMOM"],
    "CHALLENGE": ["CIRCUIT", "TABATA", "AMRAP", "EMOM", "FOR TIME", "MIX"],
    RECOVERY: ["CIRCUIT", "REPS & SETS"],
}
DEFAULT_FORMATS = ["CIRCUIT"]


@dataclass
class Periodization:
    day: int
    category: str
    difficulty: Optional[str]
    difficulty_stars: Optional[tuple[int, int]]


@dataclass
class WODInfo:
    day: date
    day_in_cycle: int
    cycle_number: int
    category: str
    difficulty: Optional[str]
    difficulty_stars: Optional[tuple[int, int]]
    formats: list[str] = field(default_factory=list)
    is_recovery_day: bool = False


def _anchor() -> date:
    return date.fromisoformat(settings.WOD_CYCLE_START)


def _as_date(day: date | str) -> date:
    return date.fromisoformat(day) if isinstance(day, str) else day


def day_in_cycle(day: date | str) -> int:
    """1-28; dates before the anchor wrap backwards correctly."""
    return (_as_date(day) - _anchor()).days % CYCLE_LENGTH + 1


def cycle_number(day: date | str) -> int:
    return (_as_date(day) - _anchor()).days // CYCLE_LENGTH + 1


def periodization_for_day(n: int) -> Periodization:
    index = max(0, min(CYCLE_LENGTH - 1, n - 1))
    category, (difficulty, stars) = PERIODIZATION[index]
    return Periodization(day=index + 1, category=category, difficulty=difficulty, difficulty_stars=stars)


def wod_info_for_date(day: date | str) -> WODInfo:
    target = _as_date(day)
    slot = periodization_for_day(day_in_cycle(target))
    return WODInfo(
        day=target,
        day_in_cycle=slot.day,
        cycle_number=cycle_number(target),
        category=slot.category,
        difficulty=slot.difficulty,
        difficulty_stars=slot.difficulty_stars,
        formats=list(FORMATS_BY_CATEGORY.get(slot.category, DEFAULT_FORMATS)),
        is_recovery_day=slot.category == RECOVERY,
    )


def upcoming_schedule(start: date | str, days: int = CYCLE_LENGTH) -> list[WODInfo]:
    first = _as_date(start)
    return [wod_info_for_date(first + timedelta(days=i)) for i in range(days)]


def today_wod(calendar: Optional[CivilCalendar] = None) -> WODInfo:
    return wod_info_for_date((calendar or get_calendar()).today_date())


def stars_to_level(stars: int) -> str:
    if stars <= 2:
        return "Beginner"
    if stars <= 4:
        return "Intermediate"
    return "Advanced"
