"""Tests for distribution analysis."""

from datetime import date

import pytest

from conftest import build_timeline
from github_wrapped.pipelines.distribution import (
    WORK_STYLE_BALANCED,
    WORK_STYLE_BURST,
    WORK_STYLE_CONSISTENT,
    WorkStyleThresholds,
    analyze_distribution,
    consistency_ratio,
    determine_work_style,
    most_active_day,
    most_active_month,
    weekday_ranking,
)


class TestPeaks:
    def test_most_active_day_earliest_wins_ties(self):
        timeline = build_timeline([2, 5, 5], start=date(2025, 1, 1))
        peak = most_active_day(timeline)
        assert peak.date == date(2025, 1, 2)
        assert peak.contributions == 5

    def test_most_active_day_all_zero_is_first_day(self):
        peak = most_active_day(build_timeline([0, 0, 0], start=date(2025, 1, 1)))
        assert peak.date == date(2025, 1, 1)
        assert peak.contributions == 0

    def test_most_active_month_by_sum(self):
        # 31 January days and 28 February days, one contribution each
        timeline = build_timeline([1] * 59, start=date(2025, 1, 1))
        assert most_active_month(timeline) == "January"

    def test_most_active_month_tie_uses_calendar_order(self):
        timeline = build_timeline([5, 5], start=date(2025, 1, 31))
        assert most_active_month(timeline) == "January"

    def test_weekday_tie_breaks_sunday_first(self):
        # 2025-01-05 is a Sunday
        timeline = build_timeline([1] * 7, start=date(2025, 1, 5))
        assert weekday_ranking(timeline)[:3] == ["Sunday", "Monday", "Tuesday"]

    def test_weekday_by_sum(self):
        # 2025-01-01 is a Wednesday, so index 2 is a Friday
        timeline = build_timeline([0, 0, 9, 0, 0, 0, 0], start=date(2025, 1, 1))
        assert weekday_ranking(timeline)[0] == "Friday"


class TestConsistency:
    def test_half_active(self):
        assert consistency_ratio(build_timeline([1, 0, 1, 0])) == pytest.approx(50.0)

    def test_empty(self):
        assert consistency_ratio([]) == 0.0


class TestWorkStyle:
    def test_high_variance_is_burst(self):
        assert determine_work_style(build_timeline([0, 0, 0, 20])) == WORK_STYLE_BURST

    def test_high_mean_low_variance_is_consistent(self):
        assert determine_work_style(build_timeline([6] * 10)) == WORK_STYLE_CONSISTENT

    def test_low_mean_low_variance_is_balanced(self):
        assert determine_work_style(build_timeline([1, 2] * 5)) == WORK_STYLE_BALANCED

    def test_thresholds_are_configurable(self):
        thresholds = WorkStyleThresholds(burst_variance=100, consistent_mean=5)
        # variance 75, mean 5 (not strictly greater)
        assert determine_work_style(build_timeline([0, 0, 0, 20]), thresholds) == WORK_STYLE_BALANCED


def test_analyze_empty_timeline():
    distribution = analyze_distribution([])
    assert distribution.most_active_day is None
    assert distribution.most_active_month is None
    assert distribution.most_active_weekday is None
    assert distribution.preferred_work_days == []
    assert distribution.consistency == 0.0
    assert distribution.work_style == WORK_STYLE_BALANCED


def test_analyze_full_timeline():
    timeline = build_timeline([0, 0, 9, 0, 0, 0, 3], start=date(2025, 1, 1))
    distribution = analyze_distribution(timeline)
    assert distribution.most_active_weekday == "Friday"
    assert distribution.preferred_work_days == ["Friday", "Tuesday", "Sunday"]
    assert distribution.active_days == 2
    assert distribution.most_active_month == "January"
