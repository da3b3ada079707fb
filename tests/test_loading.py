"""Tests for the simulated progress shown during analysis."""

import random

import pytest

from resume_analyzer.dashboard.loading import (
    INSIGHTS,
    PROGRESS_CAP,
    STEPS,
    advance_progress,
    insight_at,
    step_status,
)


class TestStepStatus:
    def test_first_step_always_completed(self):
        assert step_status(0, 0) == "completed"

    @pytest.mark.parametrize(
        "index, progress, expected",
        [
            (1, 10, "pending"),
            (1, 25, "pending"),
            (1, 30, "active"),
            (1, 51, "completed"),
            (2, 50, "pending"),
            (2, 60, "active"),
            (3, 80, "active"),
            (3, 95, "active"),
        ],
    )
    def test_thresholds(self, index, progress, expected):
        assert step_status(index, progress) == expected

    def test_last_step_stays_active_at_cap(self):
        assert step_status(len(STEPS) - 1, PROGRESS_CAP) == "active"


class TestAdvanceProgress:
    def test_monotonic_and_capped(self):
        rng = random.Random(7)
        progress = 0.0
        for _ in range(500):
            nxt = advance_progress(progress, rng)
            assert progress <= nxt <= PROGRESS_CAP
            progress = nxt
        assert progress == PROGRESS_CAP

    def test_at_cap_stays_put(self):
        assert advance_progress(PROGRESS_CAP) == PROGRESS_CAP


class TestInsights:
    def test_rotates_every_six_seconds(self):
        assert insight_at(0) is INSIGHTS[0]
        assert insight_at(5.9) is INSIGHTS[0]
        assert insight_at(6) is INSIGHTS[1]
        assert insight_at(6 * len(INSIGHTS)) is INSIGHTS[0]
