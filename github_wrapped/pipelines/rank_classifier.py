"""
Rank classification for contribution totals.

Every axis is an ordered ladder of (threshold, value) pairs evaluated from
the highest threshold down with strict greater-than; the first match wins
and the floor value applies when nothing matches.
"""

from dataclasses import dataclass
from typing import Generic, Optional, Sequence, TypeVar

from github_wrapped.core.models import RankTitle

T = TypeVar("T")


@dataclass(frozen=True)
class Ladder(Generic[T]):
    """Ordered threshold table with an optional floor value."""

    steps: Sequence[tuple[float, T]]
    floor: Optional[T] = None

    def classify(self, score: float) -> Optional[T]:
        for threshold, value in self.steps:
            if score > threshold:
                return value
        return self.floor


POWER_LEVELS: Ladder[str] = Ladder(
    steps=(
        (5000, "Legendary"),
        (2000, "Sage Mode"),
        (1000, "Elite Class"),
    ),
    floor="Novice",
)

PERCENTILE_TIERS: Ladder[str] = Ladder(
    steps=(
        (2500, "Top 1%"),
        (1500, "Top 2%"),
    ),
    floor="Top 10%",
)

HOKAGE = RankTitle(
    title="Hokage",
    level="SSS",
    description="A legendary shinobi who leads and inspires others. Only achieved by the top 1%",
)

RANK_TITLES: Ladder[RankTitle] = Ladder(
    steps=(
        (90, RankTitle(
            title="Special Grade Sorcerer",
            level="SS",
            description="Wielding extraordinary power in the coding realm",
        )),
        (80, RankTitle(
            title="Elite Jonin",
            level="S+",
            description="Elite developer with exceptional skills",
        )),
        (70, RankTitle(
            title="Jonin",
            level="S",
            description="Highly skilled developer with proven expertise",
        )),
        (60, RankTitle(
            title="Chunin",
            level="A",
            description="Skilled developer with solid contributions",
        )),
        (40, RankTitle(
            title="Genin",
            level="B",
            description="Growing developer with steady progress",
        )),
    ),
    floor=RankTitle(
        title="Academy Student",
        level="C",
        description="Beginning the coding journey with determination",
    ),
)

# Weighted score and hard gate for the top title
SCORE_WEIGHTS = {
    "contributions": 0.4,
    "consistency": 0.3,
    "streak": 0.3,
}
HOKAGE_SCORE_THRESHOLD = 95
HOKAGE_GATE = {
    "contributions": 2000,
    "consistency": 90,
    "streak": 50,
}


def power_level(total_contributions: int) -> str:
    return POWER_LEVELS.classify(total_contributions)


def percentile_tier(total_contributions: int) -> str:
    return PERCENTILE_TIERS.classify(total_contributions)


def weighted_score(contributions: int, consistency: float, streak: int) -> float:
    return (
        contributions * SCORE_WEIGHTS["contributions"]
        + consistency * SCORE_WEIGHTS["consistency"]
        + streak * SCORE_WEIGHTS["streak"]
    )


def is_exceptional(contributions: int, consistency: float, streak: int) -> bool:
    return (
        contributions > HOKAGE_GATE["contributions"]
        and consistency > HOKAGE_GATE["consistency"]
        and streak > HOKAGE_GATE["streak"]
    )


def rank_title(contributions: int, consistency: float, streak: int) -> RankTitle:
    """
    Narrative rank from contributions, consistency (%) and longest streak.

    Example:
        >>> rank_title(2600, 95, 55).title
        'Hokage'
        >>> rank_title(0, 0, 0).level
        'C'
    """
    score = weighted_score(contributions, consistency, streak)
    if score > HOKAGE_SCORE_THRESHOLD and is_exceptional(contributions, consistency, streak):
        return HOKAGE
    return RANK_TITLES.classify(score)
