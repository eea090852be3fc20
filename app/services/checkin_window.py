"""
Check-in windows in civil time.

    morning  07:00-09:00
    night    19:00-21:00

Start inclusive, end exclusive; hours come from settings. Outside a window,
`next_window` names the upcoming one and `time_until_next_window` is
"{h}h {m}m" (or "{m}m" under an hour). Inside a window both are empty.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from app.core.clock import CivilCalendar, get_calendar
from app.core.config import settings

MINUTES_PER_DAY = 24 * 60


@dataclass
class WindowStatus:
    is_morning_window: bool
    is_night_window: bool
    morning_window_start: str
    morning_window_end: str
    night_window_start: str
    night_window_end: str
    current_time: datetime
    next_window: Optional[str]
    time_until_next_window: str


def _hhmm(hour: int) -> str:
    return f"{hour:02d}:00"


def in_window(minutes: int, start_hour: int, end_hour: int) -> bool:
    return start_hour * 60 <= minutes < end_hour * 60


def format_duration(minutes: int) -> str:
    hours, mins = divmod(minutes, 60)
    return f"{hours}h {mins}m" if hours > 0 else f"{mins}m"


def next_window(minutes: int) -> tuple[Optional[str], str]:
    morning_start = settings.MORNING_WINDOW_START * 60
    morning_end = settings.MORNING_WINDOW_END * 60
    night_start = settings.NIGHT_WINDOW_START * 60
    night_end = settings.NIGHT_WINDOW_END * 60

    if minutes < morning_start:
        return "morning", format_duration(morning_start - minutes)
    if morning_end <= minutes < night_start:
        return "night", format_duration(night_start - minutes)
    if minutes >= night_end:
        return "morning", format_duration(MINUTES_PER_DAY - minutes + morning_start)
    return None, ""


def get_window_status(calendar: Optional[CivilCalendar] = None) -> WindowStatus:
    now = (calendar or get_calendar()).now()
    minutes = now.hour * 60 + now.minute
    upcoming, until = next_window(minutes)
    return WindowStatus(
        is_morning_window=in_window(minutes, settings.MORNING_WINDOW_START, settings.MORNING_WINDOW_END),
        is_night_window=in_window(minutes, settings.NIGHT_WINDOW_START, settings.NIGHT_WINDOW_END),
        morning_window_start=_hhmm(settings.MORNING_WINDOW_START),
        morning_window_end=_hhmm(settings.MORNING_WINDOW_END),
        night_window_start=_hhmm(settings.NIGHT_WINDOW_START),
        night_window_end=_hhmm(settings.NIGHT_WINDOW_END),
        current_time=now,
        next_window=upcoming,
        time_until_next_window=until,
    )
