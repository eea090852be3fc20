"""
Tests for the morning/night check-in windows (civil time, winter UTC+2).
"""
from datetime import datetime, timezone

import pytest

from app.core.clock import CivilCalendar, FixedClock
from app.services.checkin_window import format_duration, get_window_status


def _status_at(utc_hour: int, utc_minute: int = 0):
    instant = datetime(2026, 1, 20, utc_hour, utc_minute, tzinfo=timezone.utc)
    return get_window_status(CivilCalendar("Europe/Nicosia", FixedClock(instant)))


class TestWindows:
    def test_inside_morning_window(self):
        s = _status_at(5, 30)   # 07:30 civil
        assert s.is_morning_window is True
        assert s.is_night_window is False
        assert s.next_window is None
        assert s.time_until_next_window == ""

    def test_morning_end_is_exclusive(self):
        s = _status_at(7, 0)    # 09:00 civil
        assert s.is_morning_window is False
        assert s.next_window == "night"
        assert s.time_until_next_window == "10h 0m"

    def test_before_morning(self):
        s = _status_at(4, 0)    # 06:00 civil
        assert s.next_window == "morning"
        assert s.time_until_next_window == "1h 0m"

    def test_under_an_hour(self):
        s = _status_at(4, 45)   # 06:45 civil
        assert s.time_until_next_window == "15m"

    def test_between_windows(self):
        s = _status_at(7, 15)   # 09:15 civil
        assert s.next_window == "night"
        assert s.time_until_next_window == "9h 45m"

    def test_inside_night_window(self):
        s = _status_at(17, 0)   # 19:00 civil
        assert s.is_night_window is True
        assert s.next_window is None

    def test_after_night_wraps_to_tomorrow_morning(self):
        s = _status_at(20, 30)  # 22:30 civil
        assert s.next_window == "morning"
        assert s.time_until_next_window == "8h 30m"

    def test_bounds_and_current_time(self):
        s = _status_at(10, 0)
        assert (s.morning_window_start, s.morning_window_end) == ("07:00", "09:00")
        assert (s.night_window_start, s.night_window_end) == ("19:00", "21:00")
        assert s.current_time.hour == 12


@pytest.mark.parametrize("minutes,expected", [(0, "0m"), (59, "59m"), (60, "1h 0m"), (605, "10h 5m")])
def test_format_duration(minutes, expected):
    assert format_duration(minutes) == expected
