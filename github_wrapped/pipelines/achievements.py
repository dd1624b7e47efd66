"""
Achievement rule engine.

Achievements are a flat, ordered list of independent rules. Each rule reads
the shared AchievementContext and returns at most one label; the engine
collects labels in rule order. Combination rules re-derive the conditions
they need instead of reading labels emitted by earlier rules.
"""

from dataclasses import dataclass, field
from typing import Callable, Optional, Protocol, Sequence

from github_wrapped.core.logger import get_logger
from github_wrapped.core.models import DailyActivity
from github_wrapped.pipelines.distribution import weekday_index
from github_wrapped.pipelines.rank_classifier import Ladder

logger = get_logger(__name__)


class ActivityClock(Protocol):
    """Hour-of-day provider for a day of activity."""

    def hours(self, day: DailyActivity) -> Sequence[int]:
        ...


class UnknownClock:
    """
    Clock for feeds that only carry dates.

    A contribution calendar has no timestamps, so no hour is ever reported
    and time-of-day rules never fire.
    """

    def hours(self, day: DailyActivity) -> Sequence[int]:
        return ()


@dataclass(frozen=True)
class AchievementContext:
    days: Sequence[DailyActivity]
    total_contributions: int
    longest_streak: int
    consistency: float
    clock: ActivityClock = field(default_factory=UnknownClock)


class AchievementRule(Protocol):
    name: str

    def evaluate(self, context: AchievementContext) -> Optional[str]:
        ...


@dataclass(frozen=True)
class LadderRule:
    """Emits the label of the highest threshold the metric exceeds."""

    name: str
    metric: Callable[[AchievementContext], float]
    ladder: Ladder[str]

    def evaluate(self, context: AchievementContext) -> Optional[str]:
        return self.ladder.classify(self.metric(context))


@dataclass(frozen=True)
class FlagRule:
    """Emits its label when the predicate holds."""

    name: str
    predicate: Callable[[AchievementContext], bool]
    label: str

    def evaluate(self, context: AchievementContext) -> Optional[str]:
        return self.label if self.predicate(context) else None


@dataclass(frozen=True)
class CombinationRule:
    """Emits its label when every predicate holds."""

    name: str
    predicates: Sequence[Callable[[AchievementContext], bool]]
    label: str

    def evaluate(self, context: AchievementContext) -> Optional[str]:
        return self.label if all(predicate(context) for predicate in self.predicates) else None


# Predicates

NIGHT_HOURS = frozenset({22, 23, 0, 1, 2, 3, 4})
MORNING_HOURS = frozenset(range(5, 10))
WEEKEND_ACTIVE_DAYS_THRESHOLD = 20
HEAVY_DAY_MIN_COUNT = 10
PERFECTIONIST_ACTIVE_FRACTION = 0.7


def _active_in_hours(context: AchievementContext, window: frozenset) -> bool:
    return any(
        day.count > 0 and any(hour in window for hour in context.clock.hours(day))
        for day in context.days
    )


def is_night_owl(context: AchievementContext) -> bool:
    return _active_in_hours(context, NIGHT_HOURS)


def is_early_bird(context: AchievementContext) -> bool:
    return _active_in_hours(context, MORNING_HOURS)


def weekend_active_days(context: AchievementContext) -> int:
    # Sunday is 0 and Saturday is 6
    return sum(1 for day in context.days if day.count > 0 and weekday_index(day) in (0, 6))


def is_weekend_warrior(context: AchievementContext) -> bool:
    return weekend_active_days(context) > WEEKEND_ACTIVE_DAYS_THRESHOLD


def heavy_days(context: AchievementContext) -> int:
    return sum(1 for day in context.days if day.count >= HEAVY_DAY_MIN_COUNT)


def is_perfectionist(context: AchievementContext) -> bool:
    active = sum(1 for day in context.days if day.count > 0)
    return active > len(context.days) * PERFECTIONIST_ACTIVE_FRACTION


DEFAULT_RULES: tuple[AchievementRule, ...] = (
    LadderRule(
        name="contribution_volume",
        metric=lambda ctx: ctx.total_contributions,
        ladder=Ladder(
            steps=(
                (2000, "🔮 Supreme Hokage Level (2000+ Contributions)"),
                (1500, "⚡ Special Grade Sorcerer (1500+ Contributions)"),
                (1000, "🎭 Elite Jonin Level (1000+ Contributions)"),
                (500, "🌟 Skilled Chunin (500+ Contributions)"),
                (250, "✨ Advanced Genin (250+ Contributions)"),
                (100, "⭐ Academy Graduate (100+ Contributions)"),
            ),
            floor="🌱 Academy Student (Starting Journey)",
        ),
    ),
    LadderRule(
        name="streak_length",
        metric=lambda ctx: ctx.longest_streak,
        ladder=Ladder(
            steps=(
                (50, "🔥 Sage of Six Paths (50+ Days Streak)"),
                (30, "🌌 Legendary Shinobi (30+ Days Streak)"),
                (14, "🎯 Elite Ninja (14+ Days Streak)"),
                (7, "🌊 Chakra Master (7+ Days Streak)"),
            ),
        ),
    ),
    LadderRule(
        name="consistency",
        metric=lambda ctx: ctx.consistency,
        ladder=Ladder(
            steps=(
                (90, "💫 Supreme Oracle (90%+ Consistency)"),
                (75, "🎭 Master Sorcerer (75%+ Consistency)"),
                (60, "🌟 Skilled Mystic (60%+ Consistency)"),
                (40, "🌟 Apprentice Mage (40%+ Consistency)"),
            ),
        ),
    ),
    FlagRule(name="night_owl", predicate=is_night_owl, label="🦉 Shadow Assassin (Night Owl)"),
    FlagRule(name="early_bird", predicate=is_early_bird, label="🌅 Dawn Warrior (Early Bird)"),
    FlagRule(name="weekend_warrior", predicate=is_weekend_warrior, label="⚔️ Weekend Warrior Jutsu Master"),
    LadderRule(
        name="heavy_days",
        metric=heavy_days,
        ladder=Ladder(
            steps=(
                (20, "💪 Titan Shifter (20+ Heavy Contribution Days)"),
                (10, "🔥 Cursed Technique User (10+ Heavy Contribution Days)"),
                (5, "⚡ Thunder Breathing User (5+ Heavy Contribution Days)"),
            ),
        ),
    ),
    FlagRule(name="perfectionist", predicate=is_perfectionist, label="💎 Domain Expansion: Perfect Code"),
    CombinationRule(
        name="supreme_developer",
        predicates=(
            lambda ctx: ctx.consistency > 70,
            lambda ctx: ctx.longest_streak > 20,
            lambda ctx: ctx.total_contributions > 1000,
        ),
        label="🌌 Unlimited Code Works: Supreme Developer",
    ),
    CombinationRule(
        name="master_of_time",
        predicates=(is_night_owl, is_early_bird, is_weekend_warrior),
        label="🎭 All-Realm Coding Sage: Master of Time",
    ),
)


def evaluate_achievements(
    context: AchievementContext,
    rules: Sequence[AchievementRule] = DEFAULT_RULES,
) -> list[str]:
    """
    Evaluate every rule in order and collect the emitted labels.

    Args:
        context: Shared aggregates for one timeline
        rules: Ordered rule list (default: DEFAULT_RULES)

    Returns:
        Labels in rule evaluation order
    """
    achievements = []
    for rule in rules:
        label = rule.evaluate(context)
        if label is not None:
            achievements.append(label)

    logger.debug(
        f"Evaluated {len(rules)} achievement rules",
        extra={"earned": len(achievements)},
    )
    return achievements
