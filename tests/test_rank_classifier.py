"""Tests for rank classification ladders."""

import pytest

from github_wrapped.pipelines.rank_classifier import (
    Ladder,
    percentile_tier,
    power_level,
    rank_title,
    weighted_score,
)


class TestPowerLevel:
    @pytest.mark.parametrize(
        "total,expected",
        [
            (0, "Novice"),
            (1000, "Novice"),
            (1001, "Elite Class"),
            (2000, "Elite Class"),
            (2001, "Sage Mode"),
            (5001, "Legendary"),
        ],
    )
    def test_thresholds_are_strict(self, total, expected):
        assert power_level(total) == expected


class TestPercentileTier:
    @pytest.mark.parametrize(
        "total,expected",
        [
            (0, "Top 10%"),
            (1500, "Top 10%"),
            (1501, "Top 2%"),
            (2500, "Top 2%"),
            (2600, "Top 1%"),
        ],
    )
    def test_tiers(self, total, expected):
        assert percentile_tier(total) == expected


class TestRankTitle:
    def test_hard_gate_gives_highest_title(self):
        rank = rank_title(2600, 95, 55)
        assert rank.title == "Hokage"
        assert rank.level == "SSS"

    def test_gate_requires_every_condition(self):
        # Score is far above 95 but consistency misses the gate
        assert rank_title(2600, 85, 55).title == "Special Grade Sorcerer"
        assert rank_title(2600, 95, 50).title == "Special Grade Sorcerer"
        assert rank_title(2000, 95, 55).title == "Special Grade Sorcerer"

    def test_lowest_tier(self):
        rank = rank_title(0, 0, 0)
        assert rank.title == "Academy Student"
        assert rank.level == "C"

    @pytest.mark.parametrize(
        "contributions,consistency,streak,expected",
        [
            (100, 50, 10, "Genin"),  # 58
            (150, 0, 0, "Genin"),  # exactly 60
            (151, 0, 0, "Chunin"),  # 60.4
            (0, 100, 100, "Genin"),  # 30 + 30, not above 60
            (0, 0, 0, "Academy Student"),
        ],
    )
    def test_weighted_score_ladder(self, contributions, consistency, streak, expected):
        assert rank_title(contributions, consistency, streak).title == expected

    def test_weighted_score(self):
        assert weighted_score(100, 50, 10) == pytest.approx(58.0)

    def test_classification_is_idempotent(self):
        assert rank_title(1234, 66.6, 21) == rank_title(1234, 66.6, 21)
        assert power_level(1234) == power_level(1234)


def test_ladder_without_floor_returns_none():
    ladder = Ladder(steps=((10, "big"),))
    assert ladder.classify(11) == "big"
    assert ladder.classify(10) is None
