"""
Unit tests for check-in scoring (pure functions, no DB).
"""
import pytest

from app.models.checkin import CheckinStatus, ScoreCategory, SmartyCheckin
from app.services.scoring import (
    calculate_checkin_scores,
    checkin_status,
    daily_score,
    day_strain_score,
    hydration_score,
    mood_score,
    movement_score,
    protein_score,
    round_half_up,
    score_category,
    sleep_hours_score,
    sleep_score,
    soreness_score,
    steps_from_bucket,
)


class TestComponents:
    @pytest.mark.parametrize("hours,expected", [
        (4.9, 2), (5.0, 4), (5.9, 4), (6.0, 7), (7.0, 10), (9.0, 10), (9.5, 7),
    ])
    def test_sleep_hours(self, hours, expected):
        assert sleep_hours_score(hours) == expected

    def test_sleep_score_rounds_half_up(self):
        assert sleep_score(7.5, 4) == 9   # (10 + 8) / 2
        assert sleep_score(5.5, 3) == 5   # (4 + 6) / 2
        assert sleep_score(6.5, 4) == 8   # (7 + 8) / 2 = 7.5

    def test_unknown_rating_defaults_to_six(self):
        assert mood_score(9) == 6
        assert protein_score(7) == 6

    def test_soreness_is_clamped(self):
        assert soreness_score(3) == 7
        assert soreness_score(12) == 0
        assert soreness_score(-2) == 10

    @pytest.mark.parametrize("steps,expected", [
        (1999, 2), (2000, 4), (4999, 4), (5000, 7), (7999, 7), (8000, 9), (9999, 9), (10000, 10),
    ])
    def test_movement(self, steps, expected):
        assert movement_score(steps) == expected

    def test_steps_bucket_midpoints(self):
        assert steps_from_bucket(1) == 1000
        assert steps_from_bucket(5) == 11000
        assert steps_from_bucket(None) == 5000

    @pytest.mark.parametrize("liters,expected", [
        (0.5, 2), (1.0, 4), (1.5, 7), (2.0, 9), (2.5, 10),
    ])
    def test_hydration(self, liters, expected):
        assert hydration_score(liters) == expected

    @pytest.mark.parametrize("strain,expected", [(1, 5), (2, 5), (3, 8), (4, 8), (5, 10), (7, 10), (8, 7), (10, 7)])
    def test_day_strain(self, strain, expected):
        assert day_strain_score(strain) == expected


class TestDailyScore:
    def test_perfect_day(self):
        assert daily_score(
            sleep=10, readiness=10, movement=10, hydration=10, protein=10, mood=10, day_strain=10
        ) == 100

    def test_weighted_mean_scaled_to_100(self):
        assert daily_score(
            sleep=8, readiness=7, movement=9, hydration=7, protein=8, mood=8, day_strain=10
        ) == 81

    @pytest.mark.parametrize("score,expected", [
        (0, ScoreCategory.red), (39, ScoreCategory.red),
        (40, ScoreCategory.orange), (59, ScoreCategory.orange),
        (60, ScoreCategory.yellow), (79, ScoreCategory.yellow),
        (80, ScoreCategory.green), (100, ScoreCategory.green),
    ])
    def test_category_bands(self, score, expected):
        assert score_category(score) == expected

    def test_round_half_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(85.5) == 86
        assert round_half_up(85.49) == 85


class TestStatus:
    @pytest.mark.parametrize("morning,night,expected", [
        (True, True, CheckinStatus.complete),
        (True, False, CheckinStatus.incomplete_morning_only),
        (False, True, CheckinStatus.incomplete_night_only),
        (False, False, CheckinStatus.missed),
    ])
    def test_status(self, morning, night, expected):
        assert checkin_status(morning, night) == expected


def _checkin(**overrides) -> SmartyCheckin:
    values = dict(
        user_id="u1",
        morning_completed=True,
        night_completed=True,
        sleep_hours=7.5,
        sleep_quality=4,
        readiness_score=7,
        soreness_rating=3,
        mood_rating=4,
        steps_value=None,
        steps_bucket=4,
        hydration_liters=2.2,
        protein_level=3,
        day_strain=5,
    )
    values.update(overrides)
    return SmartyCheckin(**values)


class TestCalculateCheckinScores:
    def test_full_day(self):
        updates = calculate_checkin_scores(_checkin())
        assert updates["sleep_score"] == 9
        assert updates["readiness_score_norm"] == 7
        assert updates["soreness_score"] == 7
        assert updates["mood_score"] == 8
        assert updates["movement_score"] == 9
        assert updates["hydration_score"] == 9
        assert updates["protein_score_norm"] == 8
        assert updates["day_strain_score"] == 10
        assert updates["status"] == "complete"
        assert updates["daily_smarty_score"] == 86  # 8.55 * 10, half up
        assert updates["score_category"] == "green"

    def test_morning_only_has_no_daily_score(self):
        updates = calculate_checkin_scores(_checkin(night_completed=False))
        assert updates["status"] == "incomplete_morning_only"
        assert "movement_score" not in updates
        assert "daily_smarty_score" not in updates

    def test_explicit_steps_beat_bucket(self):
        updates = calculate_checkin_scores(_checkin(steps_value=12000, steps_bucket=1))
        assert updates["movement_score"] == 10

    def test_night_defaults_when_answers_missing(self):
        updates = calculate_checkin_scores(_checkin(
            morning_completed=False, steps_bucket=None, hydration_liters=None,
            protein_level=None, day_strain=None,
        ))
        assert updates["movement_score"] == 7      # bucket 3 -> 6500 steps
        assert updates["hydration_score"] == 2
        assert updates["protein_score_norm"] == 2
        assert updates["day_strain_score"] == 10   # strain 5
        assert updates["status"] == "incomplete_night_only"

    def test_reuses_stored_components(self):
        stored = _checkin(
            sleep_hours=None, sleep_quality=None,
            sleep_score=10, readiness_score_norm=10, mood_score=10,
        )
        updates = calculate_checkin_scores(stored)
        assert "sleep_score" not in updates
        assert updates["daily_smarty_score"] is not None

    def test_missing_component_blocks_daily_score(self):
        updates = calculate_checkin_scores(_checkin(sleep_hours=None))
        assert "daily_smarty_score" not in updates
        assert updates["status"] == "complete"
