"""
Tests for error handling: structured error responses, HTTP status codes,
and the custom exception classes.
"""
import pytest
from app.core.errors import (
    CheckinFetchError,
    CheckinNotFoundError,
    InvalidScheduleRangeError,
    UnknownTimezoneError,
)
from app.schemas.common import ErrorDetail, ValidationErrorResponse
from datetime import date


# ---------------------------------------------------------------------------
# Unit tests on exception classes
# ---------------------------------------------------------------------------

class TestExceptionClasses:
    def test_checkin_fetch_error(self):
        err = CheckinFetchError("user-1", reason="connection reset")
        assert err.http_status == 502
        assert err.code == "CHECKIN_FETCH_FAILED"
        assert "user-1" in err.message
        assert err.user_id == "user-1"
        assert err.reason == "connection reset"
        d = err.to_dict()
        assert d["details"] == {"user_id": "user-1", "reason": "connection reset"}

    def test_checkin_fetch_error_without_reason(self):
        err = CheckinFetchError("user-1")
        assert err.details == {"user_id": "user-1"}

    def test_unknown_timezone_error(self):
        err = UnknownTimezoneError("Mars/Olympus")
        assert err.http_status == 500
        assert err.code == "UNKNOWN_TIMEZONE"
        assert err.details["timezone"] == "Mars/Olympus"

    def test_checkin_not_found_error(self):
        err = CheckinNotFoundError(user_id="user-1", day=date(2026, 2, 20))
        assert err.http_status == 404
        assert err.code == "CHECKIN_NOT_FOUND"
        assert "2026-02-20" in err.message
        assert err.to_dict()["details"]["day"] == "2026-02-20"

    def test_invalid_schedule_range_error(self):
        err = InvalidScheduleRangeError(max_days=90, received=120)
        assert err.http_status == 422
        assert err.code == "INVALID_SCHEDULE_RANGE"
        assert "90" in err.message
        assert "120" in err.message
        d = err.to_dict()
        assert d["details"]["max_days"] == 90
        assert d["details"]["received"] == 120

    def test_to_dict_without_details(self):
        err = CheckinFetchError("user-1")
        err.details = {}
        d = err.to_dict()
        assert "code" in d
        assert "message" in d
        # details should not be in dict when empty
        assert "details" not in d


# ---------------------------------------------------------------------------
# Integration tests on HTTP error responses
# ---------------------------------------------------------------------------

class TestValidationErrors:
    def test_missing_user_returns_validation_error(self, client):
        r = client.post("/checkins/morning", json={"sleep_hours": 7, "sleep_quality": 3,
                                                   "readiness_score": 5, "soreness_rating": 2,
                                                   "mood_rating": 3})
        assert r.status_code == 422
        body = r.json()
        assert body["code"] == "VALIDATION_ERROR"
        assert isinstance(body["details"]["errors"], list)
        fields = [e["field"] for e in body["details"]["errors"]]
        assert any("user_id" in f for f in fields)

    def test_out_of_range_bucket(self, client):
        r = client.post("/checkins/night", json={"user_id": "u", "steps_bucket": 9,
                                                 "hydration_liters": 2, "protein_level": 2,
                                                 "day_strain": 4})
        assert r.status_code == 422
        fields = [e["field"] for e in r.json()["details"]["errors"]]
        assert any("steps_bucket" in f for f in fields)

    def test_errors_match_documented_envelope(self, client):
        r = client.post("/checkins/night", json={"user_id": "u", "steps_bucket": 0})
        assert r.status_code == 422
        body = ValidationErrorResponse.model_validate(r.json())
        assert body.code == "VALIDATION_ERROR"
        assert {e.field for e in body.details.errors} >= {"steps_bucket", "hydration_liters"}
        assert all(isinstance(e, ErrorDetail) for e in body.details.errors)

    def test_invalid_day_format(self, client):
        r = client.get("/wod/date/not-a-date")
        assert r.status_code == 422
        assert r.json()["code"] == "VALIDATION_ERROR"

    @pytest.mark.parametrize("kind", ["", "evening", "Morning"])
    def test_invalid_modal_kind(self, client, kind):
        r = client.post("/checkins/modal-shown", json={"user_id": "u", "kind": kind})
        assert r.status_code == 422
        assert r.json()["code"] == "VALIDATION_ERROR"

    @pytest.mark.parametrize("days", [0, 366])
    def test_stats_days_bounds(self, client, days):
        r = client.get(f"/checkins/stats?user_id=u&days={days}")
        assert r.status_code == 422


class TestDomainErrors:
    def test_schedule_too_long(self, client):
        r = client.get("/wod/schedule?days=91")
        assert r.status_code == 422
        body = r.json()
        assert body["code"] == "INVALID_SCHEDULE_RANGE"
        assert body["details"] == {"max_days": 90, "received": 91}

    def test_today_missing_has_machine_readable_code(self, client):
        r = client.get("/checkins/today?user_id=nobody-checked-in")
        assert r.status_code == 404
        body = r.json()
        assert body["code"] == "CHECKIN_NOT_FOUND"
        assert body["details"]["user_id"] == "nobody-checked-in"
