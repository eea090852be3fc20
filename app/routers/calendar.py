"""
Calendar router.

GET /calendar/today — civil day and hour every client should agree on
"""
from fastapi import APIRouter, Depends

from app.core.clock import CivilCalendar, get_calendar
from app.schemas.checkin import CalendarTodayResponse

router = APIRouter(prefix="/calendar", tags=["calendar"])


@router.get("/today", response_model=CalendarTodayResponse, summary="Civil day and hour")
def calendar_today(calendar: CivilCalendar = Depends(get_calendar)):
    """
    Return the current day (`YYYY-MM-DD`) and hour (0–23) in the service's
    civil timezone, independent of the caller's device timezone.
    """
    return CalendarTodayResponse(
        day=calendar.today(),
        hour=calendar.current_hour(),
        timezone=calendar.tz_name,
        utc_offset=calendar.utc_offset_hours(),
    )
