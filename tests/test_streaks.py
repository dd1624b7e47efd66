"""Tests for streak calculation."""

import random
from datetime import date

from conftest import build_timeline
from github_wrapped.pipelines.streaks import calculate_streaks, current_streak, longest_streak


class TestLongestStreak:
    def test_empty_timeline(self):
        assert longest_streak([]) == 0

    def test_all_zero_year(self):
        assert longest_streak(build_timeline([0] * 365)) == 0

    def test_resets_on_zero_day(self):
        assert longest_streak(build_timeline([1, 1, 0, 1, 1, 1, 0])) == 3

    def test_sixty_day_run_then_silence(self):
        """60 active days then zeros for the rest of the year."""
        timeline = build_timeline([3] * 60 + [0] * 305)
        assert longest_streak(timeline) == 60

    def test_never_exceeds_timeline_length(self):
        rng = random.Random(7)
        for _ in range(50):
            counts = [rng.choice([0, 0, 1, 4]) for _ in range(rng.randint(0, 120))]
            assert longest_streak(build_timeline(counts)) <= len(counts)


class TestCurrentStreak:
    def test_empty_timeline(self):
        assert current_streak([]) == 0

    def test_all_zero_year(self):
        assert current_streak(build_timeline([0] * 365)) == 0

    def test_quiet_today_does_not_end_streak(self):
        """Today has no contributions yet; the run just before it still counts."""
        assert current_streak(build_timeline([1, 1, 0, 1, 1, 1, 0])) == 3

    def test_gap_inside_counted_span_is_skipped(self):
        """A zero day closer than the accumulated streak does not stop the walk."""
        timeline = build_timeline([1, 1, 1, 0, 1])
        assert current_streak(timeline) == 4

    def test_old_run_is_not_current(self):
        timeline = build_timeline([3] * 60 + [0] * 305)
        assert current_streak(timeline) == 0

    def test_explicit_reference_day(self):
        timeline = build_timeline([1, 1, 1], start=date(2025, 3, 1))
        # Two quiet days separate the run from the reference day
        assert current_streak(timeline, today=date(2025, 3, 6)) == 3

    def test_unsorted_input_is_walked_by_date(self):
        timeline = build_timeline([0, 1, 1, 1])
        assert current_streak(list(reversed(timeline)), today=timeline[-1].date) == 3


def test_calculate_streaks_combines_both():
    result = calculate_streaks(build_timeline([1, 1, 0, 1, 1, 1, 0]))
    assert result.longest == 3
    assert result.current == 3
