"""
Civil calendar: the single source of "what day / hour is it".

Every day boundary in the service (check-in rows, WOD of the day, streaks)
is evaluated in one fixed civil timezone, `settings.CIVIL_TIMEZONE`
(Europe/Nicosia by default), never in the host's local zone. DST is taken
from the zoneinfo database, not from a hard-coded offset.

The clock is injected (`TimeSource`) so tests can pin an instant.

Public API
----------
CivilCalendar(tz_name, clock)
    .today()             -> "YYYY-MM-DD"
    .current_hour()      -> 0..23
    .now()               -> aware datetime in the civil zone
    .date_of(instant)    -> "YYYY-MM-DD" of an arbitrary instant
    .utc_offset_hours()  -> 2 (winter) / 3 (summer)
    .civil_hour_to_utc(hour), .utc_hour_to_civil(hour)
today(), current_hour()  -> module-level accessors on the default calendar
"""
from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Optional, Protocol
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from app.core.config import settings
from app.core.errors import UnknownTimezoneError

DAY_FORMAT = "%Y-%m-%d"


# ---------------------------------------------------------------------------
# Time sources
# ---------------------------------------------------------------------------

class TimeSource(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    """Wall clock, always UTC-aware."""

    def now(self) -> datetime:
        return datetime.now(tz=timezone.utc)


class FixedClock:
    """A clock that only moves when told to."""

    def __init__(self, instant: datetime):
        self._instant = _as_aware(instant)

    def now(self) -> datetime:
        return self._instant

    def set(self, instant: datetime) -> None:
        self._instant = _as_aware(instant)

    def advance(self, **kwargs) -> None:
        self._instant = self._instant + timedelta(**kwargs)


def _as_aware(instant: datetime) -> datetime:
    # Naive instants are read as UTC.
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant


# ---------------------------------------------------------------------------
# Calendar
# ---------------------------------------------------------------------------

class CivilCalendar:
    def __init__(self, tz_name: Optional[str] = None, clock: Optional[TimeSource] = None):
        self.tz_name = tz_name or settings.CIVIL_TIMEZONE
        try:
            self.tz = ZoneInfo(self.tz_name)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise UnknownTimezoneError(self.tz_name) from exc
        self.clock: TimeSource = clock or SystemClock()

    def now(self) -> datetime:
        return _as_aware(self.clock.now()).astimezone(self.tz)

    def today(self) -> str:
        return self.now().strftime(DAY_FORMAT)

    def today_date(self) -> date:
        return self.now().date()

    def current_hour(self) -> int:
        return self.now().hour

    def date_of(self, instant: datetime) -> str:
        return _as_aware(instant).astimezone(self.tz).strftime(DAY_FORMAT)

    def utc_offset_hours(self) -> int:
        offset = self.now().utcoffset() or timedelta(0)
        return int(offset.total_seconds() // 3600)

    def civil_hour_to_utc(self, hour: int) -> int:
        return (hour - self.utc_offset_hours()) % 24

    def utc_hour_to_civil(self, hour: int) -> int:
        return (hour + self.utc_offset_hours()) % 24


_default_calendar: Optional[CivilCalendar] = None


def get_calendar() -> CivilCalendar:
    """Default calendar; also used as a FastAPI dependency."""
    global _default_calendar
    if _default_calendar is None:
        _default_calendar = CivilCalendar()
    return _default_calendar


def today() -> str:
    return get_calendar().today()


def current_hour() -> int:
    return get_calendar().current_hour()
