"""
tests/test_timer_session.py — Countdown State Tests
====================================================
"""

from __future__ import annotations

import pytest

from zenflow.constants import CUSTOM_TIME, MEDITATION_TYPES
from zenflow.errors import InvalidDurationError, UnknownMeditationTypeError
from zenflow.timer.session import MeditationSession, format_time, parse_custom_minutes


class TestFormatTime:
    @pytest.mark.parametrize(
        "seconds, expected",
        [(0, "0:00"), (5, "0:05"), (60, "1:00"), (299, "4:59"), (1800, "30:00"), (10800, "180:00")],
    )
    def test_format(self, seconds, expected):
        assert format_time(seconds) == expected

    def test_negative_clamps_to_zero(self):
        assert format_time(-3) == "0:00"


class TestCustomMinutes:
    @pytest.mark.parametrize("text, seconds", [("1", 60), ("45", 2700), (" 180 ", 10800)])
    def test_accepts_range(self, text, seconds):
        assert parse_custom_minutes(text) == seconds

    @pytest.mark.parametrize("text", ["0", "181", "-5", "", "ten", "2.5"])
    def test_rejects(self, text):
        with pytest.raises(InvalidDurationError):
            parse_custom_minutes(text)

    def test_invalid_leaves_state_unchanged(self):
        s = MeditationSession(seconds=600)
        s.select_time(CUSTOM_TIME)
        with pytest.raises(InvalidDurationError):
            s.set_custom_minutes("999")
        assert s.selected_time == 600
        assert s.custom_prompt_open

    def test_valid_closes_prompt(self):
        s = MeditationSession()
        s.select_time(CUSTOM_TIME)
        assert s.set_custom_minutes("20") == 1200
        assert s.time_left == 1200
        assert not s.custom_prompt_open


class TestSelection:
    def test_defaults(self):
        s = MeditationSession()
        assert s.meditation_type == MEDITATION_TYPES[0]
        assert s.selected_time == 300
        assert s.volume == 0.7
        assert not s.is_active

    def test_select_type(self):
        s = MeditationSession()
        assert s.select_type("Mindfulness").name == "Mindfulness"
        with pytest.raises(UnknownMeditationTypeError):
            s.select_type("Yoga")

    def test_select_preset(self):
        s = MeditationSession()
        assert s.select_time(900)
        assert (s.selected_time, s.time_left) == (900, 900)

    def test_custom_opens_prompt_without_changing_time(self):
        s = MeditationSession()
        s.select_time(CUSTOM_TIME)
        assert s.custom_prompt_open
        assert s.selected_time == 300

    def test_selection_ignored_while_active(self):
        s = MeditationSession()
        s.start()
        assert not s.select_time(1800)
        assert s.selected_time == 300

    def test_custom_minutes_refused_while_active(self):
        s = MeditationSession(seconds=300)
        s.start()
        s.tick()
        with pytest.raises(InvalidDurationError):
            s.set_custom_minutes("1")
        assert (s.selected_time, s.time_left) == (300, 299)
        assert s.is_active

    def test_cancel_custom_closes_prompt(self):
        s = MeditationSession(seconds=600)
        s.select_time(CUSTOM_TIME)
        s.cancel_custom()
        assert not s.custom_prompt_open
        assert s.selected_time == 600

    def test_volume_clamped(self):
        s = MeditationSession()
        assert s.set_volume(1.5) == 1.0
        assert s.set_volume(-1) == 0.0


class TestCountdown:
    def test_tick_counts_down(self):
        s = MeditationSession(seconds=300)
        s.start()
        assert not s.tick()
        assert s.time_left == 299
        assert s.display == "4:59"

    def test_tick_ignored_when_inactive(self):
        s = MeditationSession(seconds=300)
        assert not s.tick()
        assert s.time_left == 300

    def test_finishes_at_zero(self):
        s = MeditationSession(seconds=3)
        s.start()
        results = [s.tick() for _ in range(3)]
        assert results == [False, False, True]
        assert s.time_left == 0
        assert not s.is_active
        assert s.progress == 1.0

    def test_stop_resets(self):
        s = MeditationSession(seconds=120)
        s.start()
        for _ in range(10):
            s.tick()
        s.stop()
        assert not s.is_active
        assert s.time_left == 120
        assert s.progress == 0.0

    def test_cannot_start_twice(self):
        s = MeditationSession()
        assert s.start()
        assert not s.start()

    def test_zero_duration_rejected(self):
        with pytest.raises(InvalidDurationError):
            MeditationSession(seconds=0)
