"""Tests for sleep duration and score calculations."""

import pytest

from sleeptrack.services.sleep_metrics import (
    calculate_duration,
    calculate_sleep_score,
    minutes_since_midnight,
    parse_clock_time,
    round_half_up,
)


class TestCalculateDuration:
    """Duration between bedtime and wake time."""

    def test_overnight(self):
        duration = calculate_duration("22:30", "06:30")
        assert duration.hours == 8
        assert duration.minutes == 0
        assert duration.total_minutes == 480

    def test_same_day(self):
        duration = calculate_duration("01:15", "07:45")
        assert (duration.hours, duration.minutes) == (6, 30)
        assert duration.total_minutes == 390

    def test_wraps_to_next_day_only_once(self):
        duration = calculate_duration("23:59", "00:00")
        assert duration.total_minutes == 1

    def test_equal_times_is_zero(self):
        duration = calculate_duration("07:00", "07:00")
        assert duration.total_minutes == 0
        assert duration.hours == 0

    def test_always_under_a_day(self):
        for bedtime, wake_time in [("00:00", "23:59"), ("12:00", "11:59"), ("18:20", "18:19")]:
            duration = calculate_duration(bedtime, wake_time)
            assert 0 <= duration.total_minutes < 24 * 60
            assert duration.total_minutes == duration.hours * 60 + duration.minutes
            assert 0 <= duration.minutes < 60

    def test_seconds_are_accepted(self):
        duration = calculate_duration("22:30:00", "06:45:00")
        assert duration.total_minutes == 495

    def test_total_hours(self):
        assert calculate_duration("23:00", "06:30").total_hours == 7.5

    def test_to_dict(self):
        assert calculate_duration("22:00", "05:45").to_dict() == {
            "hours": 7,
            "minutes": 45,
            "total_minutes": 465,
        }

    @pytest.mark.parametrize("value", ["25:00", "7pm", "", "12:60"])
    def test_invalid_time(self, value):
        with pytest.raises(ValueError):
            calculate_duration(value, "06:00")


class TestCalculateSleepScore:
    """Composite score of duration and quality."""

    def test_full_night_best_quality(self):
        assert calculate_sleep_score(480, 5) == 100

    def test_duration_is_capped(self):
        assert calculate_sleep_score(600, 5) == 100
        assert calculate_sleep_score(720, 3) == calculate_sleep_score(480, 3)

    def test_zero_duration(self):
        assert calculate_sleep_score(0, 1) == 8
        assert calculate_sleep_score(0, 5) == 40

    def test_rounds_half_up(self):
        # 420/480*60 = 52.5, plus 24
        assert calculate_sleep_score(420, 3) == 77

    def test_half_night_and_long_night(self):
        assert calculate_sleep_score(240, 5) == 70
        assert calculate_sleep_score(600, 1) == 68

    def test_typical_nights(self):
        assert calculate_sleep_score(360, 3) == 69
        assert calculate_sleep_score(360, 2) == 61
        assert calculate_sleep_score(480, 4) == 92

    def test_monotonic_in_duration_and_quality(self):
        for quality in range(1, 6):
            scores = [calculate_sleep_score(minutes, quality) for minutes in range(0, 600, 15)]
            assert scores == sorted(scores)
            assert all(0 <= s <= 100 for s in scores)
        for minutes in (0, 240, 480):
            scores = [calculate_sleep_score(minutes, quality) for quality in range(1, 6)]
            assert scores == sorted(scores)

    @pytest.mark.parametrize("quality", [0, 6, -1])
    def test_quality_out_of_range(self, quality):
        with pytest.raises(ValueError):
            calculate_sleep_score(480, quality)

    def test_negative_duration(self):
        with pytest.raises(ValueError):
            calculate_sleep_score(-1, 3)


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(2.49) == 2
    assert round_half_up(0) == 0


def test_clock_helpers():
    assert parse_clock_time("06:05").minute == 5
    assert minutes_since_midnight("01:30") == 90
    assert minutes_since_midnight("23:59:59") == 1439
