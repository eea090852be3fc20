"""
WOD router — 28-day periodization lookups.

GET /wod/today             — slot for the civil today
GET /wod/date/{day}        — slot for any date
GET /wod/schedule          — the next N days
"""
from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.core.clock import CivilCalendar, get_calendar
from app.core.errors import InvalidScheduleRangeError
from app.schemas.common import ErrorResponse
from app.schemas.wod import WODInfoResponse
from app.services.wod_cycle import WODInfo, today_wod, upcoming_schedule, wod_info_for_date

router = APIRouter(prefix="/wod", tags=["wod"])

SCHEDULE_MAX_DAYS = 90


def _wod_to_response(w: WODInfo) -> WODInfoResponse:
    return WODInfoResponse(
        day=str(w.day),
        day_in_cycle=w.day_in_cycle,
        cycle_number=w.cycle_number,
        category=w.category,
        difficulty=w.difficulty,
        difficulty_stars=w.difficulty_stars,
        formats=w.formats,
        is_recovery_day=w.is_recovery_day,
    )


@router.get("/today", response_model=WODInfoResponse, summary="Today's WOD slot")
def wod_today(calendar: CivilCalendar = Depends(get_calendar)):
    return _wod_to_response(today_wod(calendar))


@router.get("/date/{day}", response_model=WODInfoResponse, summary="WOD slot for a date")
def wod_for_date(day: date):
    return _wod_to_response(wod_info_for_date(day))


@router.get(
    "/schedule",
    response_model=list[WODInfoResponse],
    summary="Upcoming WOD schedule",
    responses={422: {"model": ErrorResponse, "description": "days outside 1–90."}},
)
def wod_schedule(
    start: Optional[date] = Query(
        default=None,
        description="First day of the schedule. Defaults to the civil today.",
        examples=["2026-10-19"],
    ),
    days: int = Query(default=28),
    calendar: CivilCalendar = Depends(get_calendar),
):
    if not 1 <= days <= SCHEDULE_MAX_DAYS:
        raise InvalidScheduleRangeError(max_days=SCHEDULE_MAX_DAYS, received=days)
    first = start or calendar.today_date()
    return [_wod_to_response(w) for w in upcoming_schedule(first, days)]
